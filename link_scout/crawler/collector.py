# === FILE: link_scout/crawler/collector.py ===
from __future__ import annotations

import asyncio
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Type
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from link_scout.crawler.extractor import extract_events
from link_scout.crawler.models import DiscoveryEvent, PageData
from link_scout.logger import logger
from link_scout.scope import Scope

__all__ = ("Collector", "Request")

EventHandler = Callable[[DiscoveryEvent, "Request"], None]
RequestHook = Callable[["Request"], None]


@dataclass(slots=True)
class Request:
    """One queued GET. Handlers use :meth:`visit` to follow links found on it."""

    url: str
    depth: int
    collector: "Collector" = field(repr=False)
    headers: Dict[str, str] = field(default_factory=dict)

    def visit(self, url: str) -> bool:
        return self.collector.visit(url, self.depth + 1)


class Collector:
    """
    Asynchronous depth-limited crawler bound to one :class:`Scope`.

    A pool of ``parallelism`` workers drains the request queue; for every
    parsed page each discovery event is handed to the handlers registered
    for its type. Use as an async context manager, :meth:`visit` the seed
    and :meth:`wait` for the queue to drain.
    """

    def __init__(
        self,
        scope: Scope,
        *,
        user_agent: str,
        max_depth: int = 2,
        parallelism: int = 8,
        verify_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        if parallelism < 1:
            raise ValueError("parallelism must be >= 1")
        self.scope = scope
        self.user_agent = user_agent
        self.max_depth = max_depth
        self.parallelism = parallelism
        self.verify_tls = verify_tls
        self.timeout = timeout
        self.visited: Set[str] = set()
        self.session: Optional[ClientSession] = None
        self._handlers: Dict[type, List[EventHandler]] = defaultdict(list)
        self._request_hooks: List[RequestHook] = []
        self._queue: Optional[asyncio.Queue[Request]] = None
        self._workers: List[asyncio.Task[None]] = []

    async def __aenter__(self) -> Collector:
        connector = TCPConnector(ssl=self.verify_tls, limit_per_host=self.parallelism)
        self.session = ClientSession(
            connector=connector,
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
        )
        self._queue = asyncio.Queue()
        self._workers = [asyncio.create_task(self._worker()) for _ in range(self.parallelism)]
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._stop_workers()
        if self.session and not self.session.closed:
            await self.session.close()

    def on(self, event_type: Type[DiscoveryEvent], handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def on_request(self, hook: RequestHook) -> None:
        self._request_hooks.append(hook)

    def visit(self, url: str, depth: int = 1) -> bool:
        """Queue *url* unless it is out of scope, too deep or already requested."""
        if self._queue is None:
            raise RuntimeError("Collector not started")
        if not self._allowed(url):
            return False
        if self.max_depth and depth > self.max_depth:
            return False
        if url in self.visited:
            return False
        self.visited.add(url)
        self._queue.put_nowait(Request(url=url, depth=depth, collector=self))
        return True

    async def wait(self) -> None:
        """Block until every queued request, including discovered ones, is done."""
        if self._queue is None:
            return
        await self._queue.join()
        await self._stop_workers()

    def _allowed(self, url: str) -> bool:
        try:
            scheme = urlsplit(url).scheme
        except ValueError:
            return False
        return scheme in ("http", "https") and self.scope.allows(url)

    async def _stop_workers(self) -> None:
        for w in self._workers:
            w.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []

    async def _worker(self) -> None:
        assert self._queue is not None
        while True:
            try:
                request = await self._queue.get()
            except asyncio.CancelledError:
                break
            try:
                await self._process(request)
            except asyncio.CancelledError:
                self._queue.task_done()
                break
            except Exception:
                logger.exception("Unhandled error while processing %s", request.url)
            self._queue.task_done()

    async def _process(self, request: Request) -> None:
        for hook in self._request_hooks:
            hook(request)
        page = await self._fetch(request)
        if page is None:
            return
        for event in extract_events(page):
            for handler in self._handlers.get(type(event), ()):
                handler(event, request)

    async def _fetch(self, request: Request) -> Optional[PageData]:
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(request.url, headers=request.headers) as resp:
                final_url = str(resp.url)
                if final_url != request.url and not self._allowed(final_url):
                    logger.debug("Redirect out of scope: %s -> %s", request.url, final_url)
                    return None
                if not 200 <= resp.status < 300:
                    logger.debug("HTTP %s for %s", resp.status, request.url)
                    return None
                mime = resp.headers.get("Content-Type", "").lower()
                if "html" not in mime:
                    return None
                text = await resp.text(errors="replace")
                return PageData(final_url, text)
        except (ClientError, asyncio.TimeoutError) as e:
            logger.debug("Failed %s: %s", request.url, e)
            return None
