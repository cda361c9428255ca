import asyncio
import importlib.metadata
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from azsum.env import app_port, enable_metrics, metrics_port
from azsum.logs import get_logger
from azsum.modules.summaries.app import app_shutdown, app_startup, router as summaries_router
from azsum.utils import create_app, create_webserver

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(main_app: FastAPI):
    log.info(f'azsum {importlib.metadata.version("azsum")} starting')

    await app_startup(main_app)

    yield

    log.info('azsum is shutting down')

    await app_shutdown(main_app)


app = create_app(lifespan=lifespan)
app.include_router(summaries_router)

if enable_metrics:
    from azsum.modules.monitoring import instrumentator, PROMETHEUS_NAMESPACE, PROMETHEUS_SUMMARIES_SUBSYSTEM

    instrumentator.instrument(app, metric_namespace=PROMETHEUS_NAMESPACE, metric_subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM)


@app.get('/')
def root():
    return RedirectResponse(url='/docs')


async def main():
    log.info(f'Server listening on http://localhost:{app_port}')

    tasks = [asyncio.create_task(create_webserver('azsum.main:app', port=app_port))]

    if enable_metrics:
        tasks.append(asyncio.create_task(create_webserver('azsum.metrics:metrics', port=metrics_port)))

    await asyncio.wait(tasks, return_when=asyncio.ALL_COMPLETED)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception as e:
        print(e)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
