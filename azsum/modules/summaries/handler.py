import time
from typing import Any
from urllib.parse import urlsplit

from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from azsum.env import AzureLanguageConfig
from azsum.http_client import HttpClient
from azsum.logs import get_logger
from azsum.modules.monitoring import (
    SUMMARY_DURATION_METRIC,
    SUMMARY_ERROR_COUNTER,
    SUMMARY_INPUT_LENGTH_METRIC,
)

from .errors import MalformedResponseError, ProtocolError, SummarizationError, ValidationError
from .models import (
    ErrorResult,
    SUMMARIZATION_ERROR_MESSAGE,
    SummaryPayload,
    SummaryResult,
    TaskKind,
    VALIDATION_ERROR_MESSAGE,
)
from .poller import Poller

log = get_logger(__name__)

DOCUMENT_ID = '1'
OPERATION_LOCATION_HEADER = 'Operation-Location'


def parse_payload(body: Any) -> SummaryPayload:
    try:
        return SummaryPayload.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError(VALIDATION_ERROR_MESSAGE) from e


def join_sentences(documents: list) -> str:
    try:
        sentences = documents[0]['sentences']
        return ' '.join(sentence['text'] for sentence in sentences)
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError('Could not find summary sentences in job response', details=documents) from e


class Summarizer:
    """
    Relays a text to the Azure extractive summarization job API and waits for the result.
    """

    def __init__(self, config: AzureLanguageConfig, client: HttpClient, poller: Poller | None = None):
        self.config = config
        self.client = client
        self.poller = poller or Poller(config, client)

    def build_job(self, text: str) -> dict:
        return {
            'analysisInput': {
                'documents': [{'id': DOCUMENT_ID, 'language': self.config.language, 'text': text}],
            },
            'tasks': [
                {
                    'kind': TaskKind.EXTRACTIVE_SUMMARIZATION.value,
                    'parameters': {'sentenceCount': self.config.sentence_count},
                }
            ],
        }

    def _is_own_resource(self, url: str) -> bool:
        tracked, endpoint = urlsplit(url), urlsplit(self.config.endpoint)

        return (tracked.scheme, tracked.netloc.lower()) == (endpoint.scheme, endpoint.netloc.lower())

    async def submit(self, text: str) -> str:
        """Submits the job and returns its tracking url."""

        response = await self.client.post(
            self.config.jobs_url,
            json=self.build_job(text),
            headers={'Ocp-Apim-Subscription-Key': self.config.key, 'Content-Type': 'application/json'},
        )

        tracking_url = response.headers.get(OPERATION_LOCATION_HEADER)
        if not tracking_url:
            raise ProtocolError('Missing Operation-Location header in Azure response.', details=response.data)

        if not self._is_own_resource(tracking_url):
            raise ProtocolError('Operation-Location header points outside the Azure resource.', details=tracking_url)

        log.info(f'Polling URL: {tracking_url}')

        return tracking_url

    async def summarize(self, text: str) -> str:
        start = time.monotonic()

        tracking_url = await self.submit(text)
        documents = await self.poller.poll(tracking_url)
        summary = join_sentences(documents)

        SUMMARY_DURATION_METRIC.observe(time.monotonic() - start)

        return summary

    async def handle(self, body: Any) -> JSONResponse:
        """
        Turns a raw request body into the response sent back to the client.

        Never raises: every failure ends up in the error envelope.
        """

        try:
            payload = parse_payload(body)
        except ValidationError as e:
            SUMMARY_ERROR_COUNTER.labels(kind=e.kind).inc()
            return JSONResponse(status_code=400, content=ErrorResult(error=e.message).model_dump(exclude_none=True))

        SUMMARY_INPUT_LENGTH_METRIC.observe(len(payload.text))

        try:
            summary = await self.summarize(payload.text)
        except SummarizationError as e:
            details = e.details if e.details is not None else e.message
            log.error(f'Azure API error ({e.kind}): {details}')
            SUMMARY_ERROR_COUNTER.labels(kind=e.kind).inc()
        except Exception as e:
            details = str(e) or type(e).__name__
            log.exception(f'Unexpected error while summarizing: {details}')
            SUMMARY_ERROR_COUNTER.labels(kind=type(e).__name__).inc()
        else:
            return JSONResponse(content=SummaryResult(summary=summary).model_dump())

        return JSONResponse(
            status_code=500,
            content=ErrorResult(error=SUMMARIZATION_ERROR_MESSAGE, details=details).model_dump(exclude_none=True),
        )


__all__ = ['Summarizer', 'join_sentences', 'parse_payload']
