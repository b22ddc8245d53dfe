# === FILE: link_scout/runner.py ===
"""
Composition root of one LinkScout run.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Iterable, Optional, TextIO

from link_scout.config import CrawlerConfig
from link_scout.dedup import DedupStore
from link_scout.orchestrator import CrawlOrchestrator
from link_scout.pipeline import OutputWriter, ResultPipeline


async def start_crawl(
    cfg: CrawlerConfig,
    headers: Optional[Dict[str, str]],
    lines: Iterable[str],
    stream: TextIO,
) -> int:
    """
    Crawl every seed in *lines* and write the results to *stream*.

    The writer runs alongside the orchestrator so the channels never
    back up; it still emits nothing until both channels are closed.

    Returns
    -------
    int
        Number of lines written.
    """
    pipeline = ResultPipeline()
    writer = OutputWriter(
        stream,
        unique=cfg.unique,
        url_dedup=DedupStore(),
        form_dedup=DedupStore(),
    )
    orchestrator = CrawlOrchestrator(cfg, headers, pipeline)
    _, written = await asyncio.gather(orchestrator.run(lines), writer.drain(pipeline))
    return written

__all__ = ["start_crawl"]
