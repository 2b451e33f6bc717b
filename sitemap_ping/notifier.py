# === FILE: sitemap_ping/notifier.py ===
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

from aiohttp import ClientSession, ClientTimeout
from yarl import URL

from sitemap_ping.config import DEFAULT_TIMEOUT
from sitemap_ping.models import PingResult, PingTarget

__all__ = ("DEFAULT_TARGETS", "HttpGetter", "AiohttpGetter", "Notifier")

DEFAULT_TARGETS: Sequence[PingTarget] = (
    PingTarget("Google", "https://www.google.com/ping?sitemap={sitemap}"),
    PingTarget("Bing (IndexNow)", "https://www.bing.com/ping?sitemap={sitemap}"),
    PingTarget("Yandex", "https://yandex.com/ping?sitemap={sitemap}"),
)


class HttpGetter(Protocol):
    """Issues a GET and returns the status code. Transport failures raise."""

    async def get(self, url: str) -> int: ...


class AiohttpGetter:
    """Plain GET over aiohttp: no custom headers, no retry."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> AiohttpGetter:
        self.session = ClientSession(timeout=ClientTimeout(total=self.timeout), raise_for_status=False)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def get(self, url: str) -> int:
        if not self.session:
            raise RuntimeError("Session not initialized")
        # the query is already percent-encoded, keep it byte for byte
        async with self.session.get(URL(url, encoded=True)) as resp:
            await resp.read()
            return resp.status


class Notifier:
    """Pings every target with the sitemap URL and logs one line per target."""

    def __init__(
        self,
        getter: HttpGetter,
        targets: Sequence[PingTarget] = DEFAULT_TARGETS,
        concurrent: bool = False,
    ) -> None:
        self.getter = getter
        self.targets = tuple(targets)
        self.concurrent = concurrent
        self.logger = logging.getLogger("SitemapPing")

    async def notify(self, sitemap_url: str) -> List[PingResult]:
        self.logger.info("Sitemap ping: notifying search engines...")
        self.logger.info("Sitemap: %s", sitemap_url)
        if self.concurrent:
            results = list(await asyncio.gather(*(self._ping(t, sitemap_url) for t in self.targets)))
            for result in results:
                self._log(result)
        else:
            results = []
            for target in self.targets:
                result = await self._ping(target, sitemap_url)
                self._log(result)
                results.append(result)
        self.logger.info("Done: search engines notified.")
        return results

    async def _ping(self, target: PingTarget, sitemap_url: str) -> PingResult:
        url = target.url_for(sitemap_url)
        self.logger.debug("GET %s", url)
        try:
            status = await self.getter.get(url)
        except Exception as e:
            # one broken target must not stop the others
            return PingResult.from_error(target, e)
        return PingResult.from_status(target, status)

    def _log(self, result: PingResult) -> None:
        name = result.target.name
        if result.ok:
            self.logger.info("[ok] %s", name)
        elif result.error is not None:
            self.logger.warning("[error] %s: %s", name, result.error)
        else:
            self.logger.warning("[HTTP %s] %s", result.status, name)
