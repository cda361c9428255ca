import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv(override=False)


# utilities
def tobool(val: str | None):
    if val is None:
        return False
    val = val.lower().strip()
    if val in ['y', 'yes', 'true', '1']:
        return True
    return False


# general
app_port = int(os.environ.get('PORT', 3000))
log_level = os.environ.get('LOG_LEVEL', 'INFO').strip().upper()

# outbound http
http_timeout = float(os.environ.get('HTTP_TIMEOUT', 30))

# monitoring
enable_metrics = tobool(os.environ.get('ENABLE_METRICS', 'true'))
metrics_port = int(os.environ.get('METRICS_PORT', 8001))


class AzureLanguageConfig(BaseModel):
    """
    Settings for the Azure AI Language analyze-text jobs API.

    Built once at startup and handed to the summarizer and the poller.
    A value of 0 for `poll_timeout` or `poll_max_attempts` disables that bound.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str
    key: str
    # latest extractive summarization version https://learn.microsoft.com/en-us/azure/ai-services/language-service/summarization/overview
    api_version: str = '2023-04-15-preview'
    language: str = 'en'
    sentence_count: int = 3
    poll_interval: float = 1.0
    poll_timeout: float = 60 * 5  # 5 minutes default
    poll_max_attempts: int = 0

    @property
    def jobs_url(self) -> str:
        return f'{self.endpoint}/language/analyze-text/jobs?api-version={self.api_version}'

    @classmethod
    def from_env(cls, environ=None) -> 'AzureLanguageConfig':
        environ = os.environ if environ is None else environ

        endpoint = environ.get('AZURE_ENDPOINT', '').strip().rstrip('/')
        key = environ.get('AZURE_KEY', '').strip()

        if not endpoint or not key:
            raise RuntimeError('AZURE_ENDPOINT and AZURE_KEY must be set')

        return cls(
            endpoint=endpoint,
            key=key,
            api_version=environ.get('AZURE_LANGUAGE_API_VERSION', '2023-04-15-preview'),
            language=environ.get('SUMMARY_LANGUAGE', 'en'),
            sentence_count=int(environ.get('SUMMARY_SENTENCE_COUNT', 3)),
            poll_interval=float(environ.get('POLL_INTERVAL', 1.0)),
            poll_timeout=float(environ.get('POLL_TIMEOUT', 60 * 5)),
            poll_max_attempts=int(environ.get('POLL_MAX_ATTEMPTS', 0)),
        )
