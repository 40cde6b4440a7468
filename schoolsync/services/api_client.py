"""HTTP client for the school-management REST backend."""

import asyncio
import logging
from typing import Any, Optional

import httpx

from schoolsync.core.errors import ApiError

logger = logging.getLogger("SchoolSync.ApiClient")


class ApiClient:
    """Thin JSON wrapper around ``httpx.AsyncClient``.

    Non-2xx responses and transport failures are raised as ``ApiError``.
    ``asyncio.CancelledError`` is never caught here, so cancelling the
    awaiting task aborts the request.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        logger.debug("%s %s params=%s", method, path, params)
        extra = {} if timeout is None else {"timeout": timeout}
        try:
            resp = await self.client.request(method, path, params=params, json=json, **extra)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(f"Could not reach {self.base_url}{path}: {e}") from e

        if resp.is_error:
            message = resp.text or f"Server {resp.status_code}"
            logger.warning("%s %s returned %s", method, path, resp.status_code)
            raise ApiError(message, status_code=resp.status_code)
        return resp

    async def get_json(self, path: str, params: Optional[dict] = None) -> Any:
        resp = await self.request("GET", path, params=params)
        return resp.json()

    async def get_json_with_retry(
        self,
        path: str,
        params: Optional[dict] = None,
        max_attempts: int = 3,
        base_timeout: float = 15.0,
        backoff: float = 0.25,
    ) -> Any:
        """GET with retries for slow endpoints.

        Attempt ``n`` (from 0) waits up to ``base_timeout * 2**n`` seconds.
        Between attempts it sleeps ``backoff * n`` seconds. The last
        ``ApiError`` is raised once ``max_attempts`` is reached.
        """
        attempt = 0
        while True:
            try:
                resp = await self.request(
                    "GET", path, params=params, timeout=base_timeout * 2 ** attempt
                )
                return resp.json()
            except ApiError as e:
                attempt += 1
                if attempt >= max_attempts:
                    raise
                logger.info("GET %s attempt %d failed (%s), retrying", path, attempt, e)
                await asyncio.sleep(backoff * attempt)

    async def post_json(self, path: str, payload: Any) -> Any:
        resp = await self.request("POST", path, json=payload)
        return _json_or_none(resp)

    async def put_json(self, path: str, payload: Any) -> Any:
        resp = await self.request("PUT", path, json=payload)
        return _json_or_none(resp)

    async def delete(self, path: str) -> Any:
        resp = await self.request("DELETE", path)
        return _json_or_none(resp)


def _json_or_none(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None
