import asyncio
import time

from azsum.env import AzureLanguageConfig
from azsum.http_client import HttpClient
from azsum.logs import get_logger
from azsum.modules.monitoring import SUMMARY_POLL_ATTEMPTS_METRIC

from .errors import JobFailedError, JobTimeoutError, MalformedResponseError
from .models import JobStatus

log = get_logger(__name__)


def get_documents(job: dict) -> list | None:
    """Returns `tasks.items[0].results.documents` or None if any step is missing."""

    try:
        documents = job['tasks']['items'][0]['results']['documents']
    except (KeyError, IndexError, TypeError):
        return None

    return documents if isinstance(documents, list) else None


class Poller:
    def __init__(self, config: AzureLanguageConfig, client: HttpClient, clock=time.monotonic):
        self.config = config
        self.client = client
        self.clock = clock

    def _has_expired(self, attempts: int, start: float) -> bool:
        max_attempts = self.config.poll_max_attempts
        timeout = self.config.poll_timeout

        if max_attempts and attempts >= max_attempts:
            return True

        return bool(timeout) and self.clock() - start >= timeout

    async def poll(self, tracking_url: str) -> list:
        """
        Queries the job at `tracking_url` until it succeeds or fails.

        Any status other than succeeded or failed is treated as still running.
        Returns the list of summary documents of the first task.
        """

        headers = {'Ocp-Apim-Subscription-Key': self.config.key}
        start = self.clock()
        attempts = 0

        while True:
            response = await self.client.get(tracking_url, headers=headers)
            attempts += 1

            job = response.data if isinstance(response.data, dict) else {}
            status = job.get('status')

            log.debug(f'Job response: {job}')

            if status == JobStatus.SUCCEEDED.value:
                SUMMARY_POLL_ATTEMPTS_METRIC.observe(attempts)
                documents = get_documents(job)

                if documents is None:
                    raise MalformedResponseError('Could not find summary documents in job response', details=job)

                return documents

            if status == JobStatus.FAILED.value:
                SUMMARY_POLL_ATTEMPTS_METRIC.observe(attempts)

                raise JobFailedError('Summarization job failed', details=job.get('errors') or None)

            if self._has_expired(attempts, start):
                SUMMARY_POLL_ATTEMPTS_METRIC.observe(attempts)
                log.warning(f'Job {tracking_url} still {status} after {attempts} attempt(s)')

                raise JobTimeoutError(
                    f'Summarization job did not finish after {attempts} attempt(s)', details={'status': status}
                )

            await asyncio.sleep(self.config.poll_interval)


__all__ = ['Poller', 'get_documents']
