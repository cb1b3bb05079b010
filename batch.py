"""Batch analysis: many raw records, a bounded number at a time.

Records are split into ordered chunks of batch_size. Each chunk runs
concurrently, chunks run one after another with a pause in between to
stay under analyzer rate limits. Every record is routed to the variant
matching its content type:

    video     -> video-only
    document  -> document-only
    mixed     -> full

A record whose invocation raises (e.g. it is not a mapping) becomes a
failed BatchItemResult; the rest of the batch is unaffected.
"""

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from classifier import resolve_content_type
from errors import ConfigurationError
from models.content import ContentType
from models.report import Report
from observability.logging import log_context

if TYPE_CHECKING:
    from pipeline import PipelineRunner

logger = logging.getLogger(__name__)

VARIANT_FOR_CONTENT_TYPE: dict[ContentType, str] = {
    ContentType.VIDEO: "video-only",
    ContentType.DOCUMENT: "document-only",
    ContentType.MIXED: "full",
}


@dataclass
class BatchItemResult:
    """Outcome of one record in a batch.

    Attributes:
        index: Position of the record in the input list
        success: False if the invocation raised
        result: Final report (success only)
        error: Exception message (failure only)
    """

    index: int
    success: bool
    result: Report | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the {index, success, result?, error?} JSON shape."""
        data: dict[str, Any] = {"index": self.index, "success": self.success}
        if self.result is not None:
            data["result"] = self.result.to_dict()
        if self.error is not None:
            data["error"] = self.error
        return data


class BatchScheduler:
    """Run a PipelineRunner over many records in rate-limited chunks."""

    def __init__(self, runner: "PipelineRunner", batch_size: int = 5, delay_seconds: float = 1.0):
        """
        Args:
            runner: Runner shared by every record
            batch_size: Records analyzed concurrently per chunk
            delay_seconds: Pause between chunks (not after the last)

        Raises:
            ConfigurationError: If batch_size is not a positive integer or
                delay_seconds is not a non-negative number
        """
        if not isinstance(batch_size, int) or batch_size < 1:
            raise ConfigurationError(f"batch_size must be a positive integer, got {batch_size!r}")
        if not isinstance(delay_seconds, (int, float)) or isinstance(delay_seconds, bool) or delay_seconds < 0:
            raise ConfigurationError(f"delay_seconds must be a non-negative number, got {delay_seconds!r}")
        self.runner = runner
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds

    def variant_for(self, raw_content: Any, content_type: ContentType | None = None) -> tuple[str, ContentType]:
        """Pick the variant for one record from its (given or detected) type."""
        resolved = content_type or self.runner.classifier.classify(raw_content)
        return VARIANT_FOR_CONTENT_TYPE[resolved], resolved

    async def _run_item(
        self,
        index: int,
        raw_content: Any,
        content_type: ContentType | None,
        platform: str | None,
    ) -> BatchItemResult:
        with log_context(batch_item=index):
            try:
                variant, resolved = self.variant_for(raw_content, content_type)
                report = await self.runner.run(
                    variant, raw_content, content_type=resolved, platform=platform
                )
            except Exception as e:
                logger.error("Batch item failed | index=%d type=%s error=%s", index, type(e).__name__, e)
                return BatchItemResult(index=index, success=False, error=str(e))
        return BatchItemResult(index=index, success=True, result=report)

    async def run(
        self,
        items: list[Any],
        *,
        content_type: ContentType | str | None = None,
        platform: str | None = None,
    ) -> list[BatchItemResult]:
        """Analyze every record and return results in input order.

        Args:
            items: Raw records
            content_type: Override applied to every record (skips detection)
            platform: Override applied to every record

        Returns:
            One BatchItemResult per record, ordered by index

        Raises:
            ConfigurationError: If items is not a list or content_type is invalid
        """
        if not isinstance(items, list):
            raise ConfigurationError(f"items must be a list, got {type(items).__name__}")
        override = resolve_content_type(content_type)

        total = len(items)
        chunk_count = math.ceil(total / self.batch_size)
        start = time.perf_counter()
        results: list[BatchItemResult] = []

        logger.info("Batch started | items=%d chunks=%d batch_size=%d", total, chunk_count, self.batch_size)

        for chunk_index in range(chunk_count):
            offset = chunk_index * self.batch_size
            chunk = items[offset:offset + self.batch_size]
            logger.info(
                "Processing chunk %d/%d | items=%d-%d",
                chunk_index + 1, chunk_count, offset, offset + len(chunk) - 1,
            )

            chunk_results = await asyncio.gather(*[
                self._run_item(offset + i, raw, override, platform)
                for i, raw in enumerate(chunk)
            ])
            results.extend(chunk_results)

            if chunk_index < chunk_count - 1 and self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)

        results.sort(key=lambda r: r.index)
        successful = sum(1 for r in results if r.success)
        logger.info(
            "Batch done | successful=%d/%d duration=%.1fs",
            successful, total, time.perf_counter() - start,
        )
        return results
