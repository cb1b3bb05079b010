"""Report stage: combine every slot into one AnalysisReport.

Overall score:
    Mean of whichever components are available, each mapped to 0-100:

    sentiment     (overallSentiment + 1) * 50        input -1..1
    video         viralPotential.score                input 0..100
    document      relevanceScoring.curation_score     input 0..100
    multi-modal   contentQuality.production_quality * 10   input 0..10
    trends        viralPotential.overall_score        input 0..100

    A component is available when its slot holds a result and the value
    is present (0 counts). Rounded half-up; 0 when nothing is available.

If building the report fails, the stage records the error and returns a
minimal FailedReport instead of raising.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime, timezone

from models.analysis import (
    CategoryAnalysis,
    DocumentAnalysis,
    MultiModalAnalysis,
    SentimentAnalysis,
    TrendAnalysis,
    VideoAnalysis,
)
from models.report import (
    ActionableRecommendations,
    AnalysisCompleteness,
    AnalysisReport,
    AnalysisSection,
    ContentDistribution,
    ContentOverview,
    FailedReport,
    Insights,
    PerformanceMetrics,
    ReportMetadata,
    ReportSummary,
)
from models.state import PipelineState
from stages.base import Stage

logger = logging.getLogger(__name__)


def score_components(state: PipelineState) -> list[float]:
    """Collect the available score components on a 0-100 scale."""
    components: list[float] = []

    sentiment = state.result("sentiment", SentimentAnalysis)
    if sentiment and sentiment.overall_sentiment is not None:
        components.append((sentiment.overall_sentiment + 1) * 50)

    video = state.result("video", VideoAnalysis)
    if video and video.viral_potential and video.viral_potential.score is not None:
        components.append(video.viral_potential.score)

    document = state.result("document", DocumentAnalysis)
    if document and document.relevance_scoring and document.relevance_scoring.curation_score is not None:
        components.append(document.relevance_scoring.curation_score)

    multi_modal = state.result("multi_modal", MultiModalAnalysis)
    if (
        multi_modal
        and multi_modal.content_quality
        and multi_modal.content_quality.production_quality is not None
    ):
        components.append(multi_modal.content_quality.production_quality * 10)

    trends = state.result("trends", TrendAnalysis)
    if trends and trends.viral_potential and trends.viral_potential.overall_score is not None:
        components.append(trends.viral_potential.overall_score)

    return components


def calculate_overall_score(state: PipelineState) -> int:
    """Average the available components, 0 when there are none."""
    components = score_components(state)
    if not components:
        return 0
    return math.floor(sum(components) / len(components) + 0.5)


def _build_insights(state: PipelineState) -> Insights:
    sentiment = state.result("sentiment", SentimentAnalysis)
    categories = state.result("categories", CategoryAnalysis)
    video = state.result("video", VideoAnalysis)
    document = state.result("document", DocumentAnalysis)
    multi_modal = state.result("multi_modal", MultiModalAnalysis)
    trends = state.result("trends", TrendAnalysis)

    key_findings: list[str] = []
    immediate: list[str] = []
    short_term: list[str] = []
    long_term: list[str] = []

    # Fixed stage order: sentiment, categories, video, document, multi-modal, trends
    if sentiment:
        key_findings += sentiment.recommendations.content_strategy
        immediate += sentiment.recommendations.engagement_tactics
    if categories and categories.reasoning:
        short_term.append(categories.reasoning)
    if video:
        key_findings += video.recommendations.content_optimization
        immediate += video.recommendations.engagement_tactics
    if document:
        key_findings += document.recommendations.content_improvements
    if multi_modal:
        long_term += multi_modal.optimization_recommendations.cross_modal_enhancement
    if trends:
        key_findings += trends.recommendations.trend_optimization
        short_term += trends.recommendations.timing_strategy
        long_term += trends.recommendations.viral_enhancement

    viral_potential = 0.0
    if trends and trends.viral_potential and trends.viral_potential.overall_score is not None:
        viral_potential = trends.viral_potential.overall_score

    engagement_prediction = 0.0
    content_quality = 0.0
    if multi_modal:
        if multi_modal.engagement_prediction and multi_modal.engagement_prediction.multi_modal_score is not None:
            engagement_prediction = multi_modal.engagement_prediction.multi_modal_score
        if multi_modal.content_quality and multi_modal.content_quality.production_quality is not None:
            content_quality = multi_modal.content_quality.production_quality

    return Insights(
        key_findings=key_findings,
        actionable_recommendations=ActionableRecommendations(
            immediate=immediate,
            short_term=short_term,
            long_term=long_term,
        ),
        performance_metrics=PerformanceMetrics(
            overall_score=calculate_overall_score(state),
            viral_potential=viral_potential,
            engagement_prediction=engagement_prediction,
            content_quality=content_quality,
        ),
    )


def build_report(state: PipelineState) -> AnalysisReport:
    """Assemble the final report from a fully-run pipeline state.

    Args:
        state: State after every stage of the variant has run

    Returns:
        AnalysisReport with summary, overview, verbatim analysis,
        insights and metadata sections
    """
    content = state.preprocessed
    now = datetime.now(timezone.utc).isoformat()

    summary = ReportSummary(
        platform=state.platform or (content.metadata.platform if content else "unknown"),
        content_type=state.content_type,
        total_posts=content.metadata.total_count if content else 0,
        analyzed_at=now,
        has_errors=state.has_errors,
        analysis_completeness=AnalysisCompleteness(
            sentiment=state.sentiment.is_result,
            categorization=state.categories.is_result,
            video=state.video.is_result,
            document=state.document.is_result,
            multi_modal=state.multi_modal.is_result,
            trends=state.trends.is_result,
            vibe=state.vibe.is_result,
        ),
    )

    overview = ContentOverview(
        total_hashtags=len(content.hashtags) if content else 0,
        total_mentions=len(content.mentions) if content else 0,
        media_count=len(content.media_urls) if content else 0,
        text_posts=len(content.text_content) if content else 0,
        content_distribution=ContentDistribution(
            has_video=state.video.is_result,
            has_document=state.document.is_result,
            has_multi_modal=state.multi_modal.is_result,
        ),
    )

    analysis = AnalysisSection(
        sentiment=state.sentiment.payload(),
        categorization=state.categories.payload(),
        video=state.video.payload(),
        document=state.document.payload(),
        multi_modal=state.multi_modal.payload(),
        trends=state.trends.payload(),
        vibe=state.vibe.payload(),
    )

    return AnalysisReport(
        summary=summary,
        content_overview=overview,
        analysis=analysis,
        insights=_build_insights(state),
        metadata=ReportMetadata(processing_time=now, errors=list(state.errors)),
    )


class ReportStage(Stage):
    """Terminal stage of every variant."""

    name = "report"

    async def __call__(self, state: PipelineState) -> PipelineState:
        try:
            report = build_report(state)
        except Exception as e:
            message = f"Final report generation failed: {e}"
            logger.error("Report generation failed | type=%s error=%s", type(e).__name__, e, exc_info=True)
            failed = FailedReport(error="Failed to generate comprehensive final report")
            return replace(state.with_error(message), final_report=failed)

        logger.info(
            "Report complete | score=%d errors=%d",
            report.insights.performance_metrics.overall_score,
            len(report.metadata.errors),
        )
        return replace(state, final_report=report)
