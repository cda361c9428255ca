import asyncio

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from azsum.logs import get_logger

from .handler import Summarizer
from .models import CANCELLED_ERROR_MESSAGE, ErrorResult, SummaryPayload, SummaryResult

log = get_logger(__name__)

TIME_BETWEEN_DISCONNECT_CHECKS = 0.5

router = APIRouter()


def get_summarizer(request: Request) -> Summarizer:
    return request.app.state.summarizer


async def cancel_on_disconnect(request: Request, task: asyncio.Task) -> bool:
    """Cancels `task` as soon as the client goes away. Returns whether it did."""

    while not task.done():
        if await request.is_disconnected():
            log.warning('Client disconnected, cancelling summarization')
            task.cancel()

            return True

        await asyncio.sleep(TIME_BETWEEN_DISCONNECT_CHECKS)

    return False


@router.post(
    '/summarize',
    openapi_extra={
        'requestBody': {
            'required': True,
            'content': {'application/json': {'schema': SummaryPayload.model_json_schema()}},
        }
    },
    responses={
        200: {'model': SummaryResult},
        400: {'model': ErrorResult, 'description': 'Missing or invalid "text" field'},
        500: {'model': ErrorResult, 'description': 'Summarization failed'},
    },
)
async def summarize(request: Request, summarizer: Summarizer = Depends(get_summarizer)) -> JSONResponse:
    """
    Summarizes the given text using Azure extractive summarization.
    """

    try:
        body = await request.json()
    except ValueError:
        body = None

    task = asyncio.create_task(summarizer.handle(body))
    watcher = asyncio.create_task(cancel_on_disconnect(request, task))

    try:
        return await task
    except asyncio.CancelledError:
        if not (watcher.done() and not watcher.cancelled() and watcher.result()):
            raise

        return JSONResponse(
            status_code=499, content=ErrorResult(error=CANCELLED_ERROR_MESSAGE).model_dump(exclude_none=True)
        )
    finally:
        watcher.cancel()


__all__ = ['router']
