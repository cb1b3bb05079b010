"""Pipeline orchestration for social content analysis.

A pipeline invocation threads one immutable PipelineState through a fixed
sequence of stages chosen by variant:

Variants:
    full:           preprocess -> sentiment -> categorize -> video -> document
                    -> multiModal -> trends -> vibe -> report
    video-only:     preprocess -> sentiment -> categorize -> video
                    -> multiModal -> trends -> report
    document-only:  preprocess -> sentiment -> categorize -> document
                    -> trends -> report
    fast:           preprocess -> sentiment -> report

Stages run strictly in order and never raise; a failed stage leaves an
error slot and an entry in state.errors, and the next stage runs anyway.
The report stage always runs last. The only exception a caller sees is
ConfigurationError (unknown variant, bad content type, non-mapping input).

Entry points:
    PipelineRunner.run / .invoke   Analyzer injected (tests, embedding)
    run / run_batch                Build the pydantic-ai analyzer from Config
"""

import logging
import time
import uuid
from collections.abc import Mapping
from typing import Any

from agents.base import AnalyzerService
from batch import BatchItemResult, BatchScheduler
from classifier import ContentClassifier, resolve_content_type
from config import Config
from errors import ConfigurationError
from models.content import ContentType
from models.report import Report
from models.state import PipelineState
from observability.logging import log_context
from observability.tracing import trace_operation
from stages import ANALYSIS_STAGES, PreprocessStage, ReportStage, Stage

logger = logging.getLogger(__name__)

VARIANTS: dict[str, tuple[str, ...]] = {
    "full": (
        "preprocess", "sentiment", "categorize", "video", "document",
        "multiModal", "trends", "vibe", "report",
    ),
    "video-only": (
        "preprocess", "sentiment", "categorize", "video", "multiModal", "trends", "report",
    ),
    "document-only": (
        "preprocess", "sentiment", "categorize", "document", "trends", "report",
    ),
    "fast": ("preprocess", "sentiment", "report"),
}


class PipelineRunner:
    """Run named pipeline variants against one analyzer service.

    The runner holds no per-invocation state, so one instance can serve
    any number of concurrent invocations (the batch scheduler relies on
    this).

    Example:
        >>> runner = PipelineRunner(ContentAnalyzer(config), config)
        >>> report = await runner.run("full", {"data": posts, "platform": "tiktok"})
        >>> report.insights.performance_metrics.overall_score
        72
    """

    def __init__(self, analyzer: AnalyzerService, config: Config | None = None):
        """Initialize the runner and its stages.

        Args:
            analyzer: Service the analysis stages call
            config: Classifier thresholds; defaults are used when None
        """
        self.analyzer = analyzer
        self.config = config
        self.classifier = ContentClassifier.from_config(config) if config else ContentClassifier()

        stages: list[Stage] = [PreprocessStage(), ReportStage()]
        stages += [stage_cls(analyzer) for stage_cls in ANALYSIS_STAGES]
        self._stages: dict[str, Stage] = {stage.name: stage for stage in stages}

        if config is not None and config.enable_logfire:
            from observability.tracing import setup_tracing
            setup_tracing(enabled=True, service_name="vibe", token=config.logfire_token)

    def stages_for(self, variant: str) -> list[Stage]:
        """Resolve a variant name to its ordered stages.

        Raises:
            ConfigurationError: If the variant is unknown
        """
        names = VARIANTS.get(variant)
        if names is None:
            choices = ", ".join(VARIANTS)
            raise ConfigurationError(f"Unknown pipeline variant '{variant}' (expected one of: {choices})")
        return [self._stages[name] for name in names]

    def initial_state(
        self,
        raw_content: Any,
        *,
        content_type: ContentType | str | None = None,
        platform: str | None = None,
        preferences: str = "",
    ) -> PipelineState:
        """Build the starting state, classifying content when no type is given.

        Raises:
            ConfigurationError: If raw_content is not a mapping or the
                content type string is invalid
        """
        if not isinstance(raw_content, Mapping):
            raise ConfigurationError(
                f"raw_content must be a mapping, got {type(raw_content).__name__}"
            )
        resolved = resolve_content_type(content_type) or self.classifier.classify(raw_content)
        return PipelineState(
            raw_content=raw_content,
            content_type=resolved,
            platform=platform or raw_content.get("platform") or "unknown",
            preferences=preferences or "",
        )

    async def invoke(
        self,
        variant: str,
        raw_content: Any,
        *,
        content_type: ContentType | str | None = None,
        platform: str | None = None,
        preferences: str = "",
    ) -> PipelineState:
        """Run a variant and return the final state.

        Args:
            variant: One of VARIANTS
            raw_content: Raw record {data, platform, count, scrapedAt}
            content_type: Override for the classifier
            platform: Override for raw_content['platform']
            preferences: Free text forwarded to the vibe analyzer

        Returns:
            Final PipelineState; final_report is always set

        Raises:
            ConfigurationError: For an unknown variant or invalid arguments
        """
        stages = self.stages_for(variant)
        state = self.initial_state(
            raw_content, content_type=content_type, platform=platform, preferences=preferences
        )

        invocation_id = uuid.uuid4().hex[:8]
        with log_context(invocation_id=invocation_id):
            start = time.perf_counter()
            logger.info(
                "Pipeline started | variant=%s content_type=%s platform=%s",
                variant, state.content_type.value, state.platform,
            )

            attributes = {
                "variant": variant,
                "content_type": state.content_type.value,
                "platform": state.platform,
                "invocation_id": invocation_id,
            }
            with trace_operation("pipeline_run", attributes) as span:
                for stage in stages:
                    with trace_operation(f"stage.{stage.name}", {"stage": stage.name}):
                        state = await stage(state)
                span["errors"] = len(state.errors)

            logger.info(
                "Pipeline done | variant=%s duration=%.2fs errors=%d",
                variant, time.perf_counter() - start, len(state.errors),
            )
        return state

    async def run(
        self,
        variant: str,
        raw_content: Any,
        *,
        content_type: ContentType | str | None = None,
        platform: str | None = None,
        preferences: str = "",
    ) -> Report:
        """Run a variant and return only its final report."""
        state = await self.invoke(
            variant,
            raw_content,
            content_type=content_type,
            platform=platform,
            preferences=preferences,
        )
        return state.final_report


def _create_runner(config: Config) -> PipelineRunner:
    # Imported here so the core pipeline does not require model credentials
    from agents.analyzer import ContentAnalyzer

    return PipelineRunner(ContentAnalyzer(config), config)


async def run(
    config: Config,
    variant: str,
    raw_content: Any,
    *,
    content_type: ContentType | str | None = None,
    platform: str | None = None,
    preferences: str = "",
) -> Report:
    """Run one variant with the configured pydantic-ai analyzer.

    Args:
        config: Application configuration
        variant: One of VARIANTS
        raw_content: Raw record {data, platform, count, scrapedAt}
    """
    runner = _create_runner(config)
    return await runner.run(
        variant,
        raw_content,
        content_type=content_type,
        platform=platform,
        preferences=preferences,
    )


async def run_batch(
    config: Config,
    items: list[Any],
    *,
    content_type: ContentType | str | None = None,
    platform: str | None = None,
) -> list[BatchItemResult]:
    """Analyze many records with the configured analyzer, batch_size at a time.

    Args:
        config: Application configuration (batch size and delay)
        items: Raw records
    """
    scheduler = BatchScheduler(
        _create_runner(config),
        batch_size=config.batch_size,
        delay_seconds=config.batch_delay_seconds,
    )
    return await scheduler.run(items, content_type=content_type, platform=platform)
