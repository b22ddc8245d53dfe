"""link_scout.pipeline: fan-in of crawl results and the stdout writer.

Many concurrent handlers push into two :class:`ResultChannel` objects; a
single :class:`OutputWriter` consumes them. Channels are unbounded so
producers never wait on the consumer.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Generic, List, Optional, TextIO, TypeVar

from link_scout.crawler.models import FormRecord
from link_scout.dedup import DedupStore
from link_scout.logger import logger

__all__ = ["ChannelClosedError", "OutputWriter", "ResultChannel", "ResultPipeline"]

T = TypeVar("T")

_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Put on, or second close of, an already closed channel."""


class ResultChannel(Generic[T]):
    """Unbounded queue that can be closed once and iterated until closed."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, item: T) -> None:
        if self._closed:
            raise ChannelClosedError("put on closed channel")
        self._queue.put_nowait(item)

    def close(self) -> None:
        if self._closed:
            raise ChannelClosedError("channel already closed")
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def __aiter__(self) -> AsyncIterator[T]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]


class ResultPipeline:
    """URL lines and parsed forms travel on separate channels."""

    def __init__(self) -> None:
        self.urls: ResultChannel[str] = ResultChannel()
        self.forms: ResultChannel[FormRecord] = ResultChannel()

    def close(self) -> None:
        self.urls.close()
        self.forms.close()


class OutputWriter:
    """Drains a pipeline into *stream*: every URL line first, then every form.

    With ``unique`` URL lines are filtered through ``url_dedup`` and forms
    through ``form_dedup`` keyed on their method+URL signature. Output is
    buffered and written with a single flush.
    """

    def __init__(
        self,
        stream: TextIO,
        *,
        unique: bool = False,
        url_dedup: Optional[DedupStore] = None,
        form_dedup: Optional[DedupStore] = None,
    ) -> None:
        self.stream = stream
        self.unique = unique
        self.url_dedup = url_dedup if url_dedup is not None else DedupStore()
        self.form_dedup = form_dedup if form_dedup is not None else DedupStore()

    async def drain(self, pipeline: ResultPipeline) -> int:
        lines: List[str] = []
        async for line in pipeline.urls:
            if not self.unique or self.url_dedup.check_and_mark(line):
                lines.append(line)
        url_count = len(lines)
        async for form in pipeline.forms:
            if not self.unique or self.form_dedup.check_and_mark(form.signature):
                lines.append(form.format())

        if lines:
            self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()
        logger.info("Wrote %d URLs and %d forms", url_count, len(lines) - url_count)
        return len(lines)
