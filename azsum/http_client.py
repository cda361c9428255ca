"""
Simple async HTTP client with a shared session. All outbound traffic goes to
a single Azure resource so one pooled session for the process is enough.
"""

import asyncio
from typing import Any, NamedTuple

import aiohttp
from multidict import CIMultiDictProxy

from azsum.env import http_timeout
from azsum.logs import get_logger
from azsum.modules.summaries.errors import TransportError

log = get_logger(__name__)


class HttpResponse(NamedTuple):
    status: int
    headers: CIMultiDictProxy
    data: Any


class HttpClient:
    def __init__(self, timeout: float = http_timeout, session: aiohttp.ClientSession | None = None):
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        self._session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def get(self, url, **kwargs) -> HttpResponse:
        return await self.request('GET', url, **kwargs)

    async def post(self, url, **kwargs) -> HttpResponse:
        return await self.request('POST', url, **kwargs)

    async def request(self, method, url, **kwargs) -> HttpResponse:
        """
        Performs the request and reads the whole body.

        Error statuses raise a `TransportError` whose details are the parsed
        error body, so the caller can surface what the vendor said.
        """

        session = self._get_session()

        try:
            async with session.request(method, url, **kwargs) as response:
                data = await _read_body(response)

                if response.status >= 400:
                    log.debug(f'{method} {url} failed with status {response.status}: {data}')
                    raise TransportError(f'Request failed with status code {response.status}', details=data)

                return HttpResponse(status=response.status, headers=response.headers, data=data)
        except aiohttp.ClientError as e:
            log.debug(f'{method} {url} failed: {e!r}')
            raise TransportError(str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            raise TransportError(f'{method} {url} timed out') from e

    async def close(self):
        if self._session is not None:
            await self._session.close()

            self._session = None


async def _read_body(response: aiohttp.ClientResponse) -> Any:
    text = await response.text()

    if not text:
        return None

    try:
        return await response.json(content_type=None)
    except ValueError:
        return text


__all__ = ['HttpClient', 'HttpResponse']
