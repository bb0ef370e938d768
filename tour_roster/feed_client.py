from __future__ import annotations

import logging

import httpx

from booking_core.errors import FetchError

logger = logging.getLogger(__name__)

ACCEPT_CALENDAR = "text/calendar, text/plain;q=0.9, */*;q=0.5"


class FeedClient:
    """Fetches booking calendar feeds over HTTP.

    One attempt per call: there is no retry, and any transport failure or
    non-2xx status is raised as FetchError before parsing starts.
    """

    def __init__(self, *, timeout_s: float = 30.0, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout_s = timeout_s
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {"Accept": ACCEPT_CALENDAR}

    async def fetch(self, url: str) -> str:
        if not url or not url.strip():
            raise FetchError("no feed URL configured")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                resp = await client.get(url, headers=self._headers())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"Failed to fetch calendar: {exc}", url=url) from exc

        if not resp.is_success:
            raise FetchError(
                f"Failed to fetch calendar: {resp.status_code}",
                status_code=resp.status_code,
                url=url,
            )
        logger.info("fetched %d bytes of calendar data from %s", len(resp.text), url)
        return resp.text
