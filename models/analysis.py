"""Result models for the external content analyzers.

Each analyzer returns free-form JSON. These models declare only the
fields the pipeline itself reads (scores for the overall score,
recommendation lists for the report insights); everything else the
model produced is kept as extra fields and reported verbatim.

A result that violates the declared fields (wrong type, score out of
range) fails validation and is recorded as a stage error rather than
silently skewing the report.
"""

from pydantic import BaseModel, ConfigDict, Field


class _AnalyzerModel(BaseModel):
    """Base for analyzer payloads: camelCase aliases, extra fields preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# === Sentiment ===

class SentimentRecommendations(_AnalyzerModel):
    content_strategy: list[str] = Field(default_factory=list)
    emotional_optimization: list[str] = Field(default_factory=list)
    engagement_tactics: list[str] = Field(default_factory=list)


class SentimentAnalysis(_AnalyzerModel):
    """Sentiment and emotion analysis across a set of posts."""

    overall_sentiment: float | None = Field(
        default=None,
        alias="overallSentiment",
        ge=-1.0,
        le=1.0,
        description="-1 (very negative) to 1 (very positive)",
    )
    recommendations: SentimentRecommendations = Field(default_factory=SentimentRecommendations)


# === Categorization ===

class CategoryAnalysis(_AnalyzerModel):
    """Primary/secondary category and audience tagging."""

    primary_category: str = Field(default="", alias="primaryCategory")
    secondary_categories: list[str] = Field(default_factory=list, alias="secondaryCategories")
    suggested_hashtags: list[str] = Field(default_factory=list, alias="suggestedHashtags")
    target_audience: str = Field(default="", alias="targetAudience")
    reasoning: str = Field(default="", description="Explanation of the categorization")


# === Video ===

class VideoViralPotential(_AnalyzerModel):
    score: float | None = Field(default=None, ge=0.0, le=100.0)
    growth_trajectory: str = ""


class VideoRecommendations(_AnalyzerModel):
    content_optimization: list[str] = Field(default_factory=list)
    hashtag_strategy: list[str] = Field(default_factory=list)
    engagement_tactics: list[str] = Field(default_factory=list)
    viral_enhancement: list[str] = Field(default_factory=list)


class VideoAnalysis(_AnalyzerModel):
    """Engagement, hashtag and viral-potential analysis of video posts."""

    viral_potential: VideoViralPotential | None = Field(default=None, alias="viralPotential")
    recommendations: VideoRecommendations = Field(default_factory=VideoRecommendations)


# === Document ===

class DocumentRelevance(_AnalyzerModel):
    curation_score: float | None = Field(default=None, ge=0.0, le=100.0)


class DocumentRecommendations(_AnalyzerModel):
    content_improvements: list[str] = Field(default_factory=list)
    seo_optimizations: list[str] = Field(default_factory=list)
    engagement_enhancements: list[str] = Field(default_factory=list)


class DocumentAnalysis(_AnalyzerModel):
    """Keyword, topic, SEO and readability analysis of long-form text."""

    relevance_scoring: DocumentRelevance | None = Field(default=None, alias="relevanceScoring")
    recommendations: DocumentRecommendations = Field(default_factory=DocumentRecommendations)


# === Multi-modal ===

class ContentQuality(_AnalyzerModel):
    production_quality: float | None = Field(default=None, ge=0.0, le=10.0)


class MultiModalEngagement(_AnalyzerModel):
    multi_modal_score: float | None = None


class MultiModalRecommendations(_AnalyzerModel):
    text_optimization: list[str] = Field(default_factory=list)
    visual_optimization: list[str] = Field(default_factory=list)
    audio_optimization: list[str] = Field(default_factory=list)
    cross_modal_enhancement: list[str] = Field(default_factory=list)


class MultiModalAnalysis(_AnalyzerModel):
    """Cross-modal consistency and quality across text, images and video."""

    content_quality: ContentQuality | None = Field(default=None, alias="contentQuality")
    engagement_prediction: MultiModalEngagement | None = Field(default=None, alias="engagementPrediction")
    optimization_recommendations: MultiModalRecommendations = Field(
        default_factory=MultiModalRecommendations,
        alias="optimizationRecommendations",
    )


# === Trends ===

class TrendViralPotential(_AnalyzerModel):
    overall_score: float | None = Field(default=None, ge=0.0, le=100.0)
    growth_prediction: str = ""


class TrendRecommendations(_AnalyzerModel):
    trend_optimization: list[str] = Field(default_factory=list)
    viral_enhancement: list[str] = Field(default_factory=list)
    timing_strategy: list[str] = Field(default_factory=list)


class TrendAnalysis(_AnalyzerModel):
    """Trend alignment, viral potential and engagement forecast."""

    viral_potential: TrendViralPotential | None = Field(default=None, alias="viralPotential")
    recommendations: TrendRecommendations = Field(default_factory=TrendRecommendations)


# === Vibe ===

class RoutePoint(_AnalyzerModel):
    lat: float = Field(description="Latitude coordinate")
    lon: float = Field(description="Longitude coordinate")
    title: str = Field(description="Location title")


class VibeAnalysis(_AnalyzerModel):
    """Curated 'vibe' experience distilled from the content."""

    title: str = Field(description="A catchy title for the vibe experience")
    duration: str = Field(description="Estimated duration for the experience")
    route: list[RoutePoint] = Field(description="Route points for the experience")
    vibe_tags: list[str] = Field(alias="vibeTags", description="Vibe-related tags")
    images: list[str] = Field(description="Relevant image URLs")
    summary: str = Field(description="Detailed summary of the vibe experience")
