from fastapi import FastAPI

from azsum.env import AzureLanguageConfig
from azsum.http_client import HttpClient
from azsum.logs import get_logger

from .handler import Summarizer
from .router import router

log = get_logger(__name__)


async def app_startup(app: FastAPI, config: AzureLanguageConfig | None = None) -> None:
    config = config or AzureLanguageConfig.from_env()
    client = HttpClient()

    app.state.http_client = client
    app.state.summarizer = Summarizer(config, client)

    log.info(f'Summaries initialized for {config.endpoint} (api-version {config.api_version})')


async def app_shutdown(app: FastAPI) -> None:
    await app.state.http_client.close()
    log.info('HTTP client closed')


__all__ = ['app_shutdown', 'app_startup', 'router']
