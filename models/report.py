"""Final report models produced by the report stage.

Field names are snake_case in Python and camelCase on the wire
(``report.to_dict()``), matching what the API and mobile clients expect.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.content import ContentType

REPORT_VERSION = "2.0"


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dict for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True)


class AnalysisCompleteness(_ReportModel):
    """Whether each analysis produced a usable result (skips and errors are False)."""

    sentiment: bool = False
    categorization: bool = False
    video: bool = False
    document: bool = False
    multi_modal: bool = False
    trends: bool = False
    vibe: bool = False


class ReportSummary(_ReportModel):
    platform: str
    content_type: ContentType
    total_posts: int = 0
    analyzed_at: str
    has_errors: bool
    analysis_completeness: AnalysisCompleteness


class ContentDistribution(_ReportModel):
    has_video: bool = False
    has_document: bool = False
    has_multi_modal: bool = False


class ContentOverview(_ReportModel):
    total_hashtags: int = 0
    total_mentions: int = 0
    media_count: int = 0
    text_posts: int = 0
    content_distribution: ContentDistribution = Field(default_factory=ContentDistribution)


class AnalysisSection(_ReportModel):
    """Verbatim slot payloads: result dict, {"skipped": ...}, {"error": ...} or None."""

    sentiment: dict[str, Any] | None = None
    categorization: dict[str, Any] | None = None
    video: dict[str, Any] | None = None
    document: dict[str, Any] | None = None
    multi_modal: dict[str, Any] | None = None
    trends: dict[str, Any] | None = None
    vibe: dict[str, Any] | None = None


class ActionableRecommendations(_ReportModel):
    immediate: list[str] = Field(default_factory=list)
    short_term: list[str] = Field(default_factory=list)
    long_term: list[str] = Field(default_factory=list)


class PerformanceMetrics(_ReportModel):
    overall_score: int = 0
    viral_potential: float = 0
    engagement_prediction: float = 0
    content_quality: float = 0


class Insights(_ReportModel):
    key_findings: list[str] = Field(default_factory=list)
    actionable_recommendations: ActionableRecommendations = Field(default_factory=ActionableRecommendations)
    performance_metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)


class ReportMetadata(_ReportModel):
    processing_time: str
    analysis_version: str = REPORT_VERSION
    errors: list[str] = Field(default_factory=list)


class AnalysisReport(_ReportModel):
    """Complete analysis report for one content record.

    Example:
        >>> report.summary.has_errors
        False
        >>> report.insights.performance_metrics.overall_score
        75
    """

    summary: ReportSummary
    content_overview: ContentOverview
    analysis: AnalysisSection
    insights: Insights
    metadata: ReportMetadata

    def __str__(self) -> str:
        return (
            f"AnalysisReport({self.summary.platform}, {self.summary.content_type.value}, "
            f"score={self.insights.performance_metrics.overall_score}, errors={len(self.metadata.errors)})"
        )


class FailedReport(_ReportModel):
    """Minimal report returned when the report itself could not be built."""

    error: str


Report = AnalysisReport | FailedReport
