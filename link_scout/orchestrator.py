# File: link_scout/orchestrator.py
"""link_scout.orchestrator: one crawl session per seed, results into the pipeline."""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, Iterable, Optional

from link_scout.config import CrawlerConfig
from link_scout.crawler.collector import Collector, Request
from link_scout.crawler.models import FormActionFound, FormParsed, LinkFound, ScriptFound
from link_scout.headers import find_header
from link_scout.logger import logger
from link_scout.pipeline import ResultPipeline
from link_scout.scope import MalformedURLError, NoHostnameError, resolve_scope

__all__ = ["CrawlOrchestrator", "format_result"]


def format_result(url: str, source: str, show_source: bool) -> str:
    """``[<source>] <url>`` when tagging is on, else the bare URL."""
    return f"[{source}] {url}" if show_source else url


def _header_hook(headers: Dict[str, str]) -> Callable[[Request], None]:
    def apply(request: Request) -> None:
        request.headers.update(headers)

    return apply


class CrawlOrchestrator:
    """Runs seeds one after another; each session fans out internally."""

    def __init__(
        self,
        config: CrawlerConfig,
        headers: Optional[Dict[str, str]],
        pipeline: ResultPipeline,
    ) -> None:
        self.config = config
        self.headers = headers
        self.pipeline = pipeline

    async def run(self, lines: Iterable[str]) -> None:
        """Crawl every seed in *lines*, then close the pipeline exactly once.

        Lines are pulled in a worker thread so a slow producer on stdin does
        not stall the event loop. A seed that does not parse stops the scan;
        a seed without a hostname is skipped.
        """
        loop = asyncio.get_running_loop()
        source = iter(lines)
        try:
            while True:
                line = await loop.run_in_executor(None, next, source, None)
                if line is None:
                    break
                seed = line.strip()
                if not seed:
                    continue
                try:
                    await self.crawl_target(seed)
                except NoHostnameError as exc:
                    logger.debug("Skipping seed: %s", exc)
                except MalformedURLError as exc:
                    logger.error("Error parsing URL: %s", exc)
                    break
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("reading standard input: %s", exc)
        finally:
            self.pipeline.close()

    async def crawl_target(self, seed: str) -> None:
        cfg = self.config
        scope = resolve_scope(seed, cfg.subs, find_header(self.headers, "Host"))
        logger.info("Crawling %s (depth=%d, threads=%d)", seed, cfg.depth, cfg.threads)

        async with Collector(
            scope,
            user_agent=cfg.user_agent,
            max_depth=cfg.depth,
            parallelism=cfg.threads,
            verify_tls=not cfg.insecure,
            timeout=cfg.timeout,
        ) as collector:
            collector.on(LinkFound, self._on_link)
            collector.on(ScriptFound, self._on_url)
            collector.on(FormActionFound, self._on_url)
            collector.on(FormParsed, self._on_form)
            if self.headers:
                collector.on_request(_header_hook(self.headers))

            collector.visit(seed)
            await collector.wait()
        logger.info("Finished %s: %d requests", seed, len(collector.visited))

    def _emit(self, url: str, source: str) -> bool:
        if not url:
            return False
        self.pipeline.urls.put(format_result(url, source, self.config.show_source))
        return True

    def _on_link(self, event: LinkFound, request: Request) -> None:
        if self._emit(event.url, event.source):
            request.visit(event.url)

    def _on_url(self, event: ScriptFound | FormActionFound, request: Request) -> None:
        self._emit(event.url, event.source)

    def _on_form(self, event: FormParsed, request: Request) -> None:
        self.pipeline.forms.put(event.form)
