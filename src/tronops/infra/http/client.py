import asyncio
import time

import httpx

from tronops.exceptions import ExternalServiceError


class RateLimitedClient:
    """Async JSON-over-HTTP client bound to one base URL, with interval-based rate limiting.

    Transport failures and HTTP error statuses surface as ExternalServiceError.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        rate_per_second: float = 5.0,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._min_interval = 1.0 / rate_per_second
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(
            base_url=base_url, headers=headers or {}, timeout=timeout, transport=transport
        )

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def post_json(self, path: str, payload: dict) -> dict:
        await self._wait_for_slot()
        try:
            resp = await self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"POST {path} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise ExternalServiceError(
                f"POST {path} returned HTTP {resp.status_code}", payload=resp.text
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise ExternalServiceError(f"POST {path} returned non-JSON body", payload=resp.text) from exc
        if not isinstance(data, dict):
            raise ExternalServiceError(f"POST {path} returned unexpected JSON", payload=data)
        return data

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
