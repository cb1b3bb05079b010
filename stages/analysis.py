"""Analysis stages, one per result slot.

Stage        Slot          Reads (earlier slots)            Runs for
-----------  ------------  -------------------------------  --------------
sentiment    sentiment     -                                all
categorize   categories    -                                all
video        video         -                                video, mixed
document     document      -                                document, mixed
multiModal   multi_modal   sentiment, video, document       all
trends       trends        sentiment, video, categories     all
vibe         vibe          sentiment, categories            all

Slots of stages that are not part of the running variant read as
absent (None in the payload).
"""

from statistics import fmean

from agents.base import JsonDict
from classifier import VIDEO_MARKERS
from models.analysis import (
    CategoryAnalysis,
    DocumentAnalysis,
    MultiModalAnalysis,
    SentimentAnalysis,
    TrendAnalysis,
    VibeAnalysis,
    VideoAnalysis,
)
from models.content import ContentType, Post, PreprocessedContent
from models.state import PipelineState
from stages.base import AnalysisStage, NothingToAnalyze


def _require_content(state: PipelineState, reason: str) -> PreprocessedContent:
    if state.preprocessed is None:
        raise NothingToAnalyze(reason)
    return state.preprocessed


class SentimentStage(AnalysisStage):
    name = "sentiment"
    slot = "sentiment"
    label = "Sentiment analysis"
    result_model = SentimentAnalysis

    async def analyze(self, state: PipelineState) -> JsonDict:
        content = _require_content(state, "No content to analyze")
        if not content.posts:
            raise NothingToAnalyze("No content to analyze")
        return await self.analyzer.analyze_sentiment(content.posts)


class CategorizeStage(AnalysisStage):
    name = "categorize"
    slot = "categories"
    label = "Content categorization"
    result_model = CategoryAnalysis

    async def analyze(self, state: PipelineState) -> JsonDict:
        content = _require_content(state, "No preprocessed content available")
        return await self.analyzer.categorize(content.to_payload())


class VideoStage(AnalysisStage):
    """Engagement-focused analysis of the video posts in a record."""

    name = "video"
    slot = "video"
    label = "Video analysis"
    result_model = VideoAnalysis
    requires = ContentType.VIDEO
    skip_reason = "Not video content"

    async def analyze(self, state: PipelineState) -> JsonDict:
        content = _require_content(state, "No video content to analyze")
        if not content.posts:
            raise NothingToAnalyze("No video content to analyze")

        video_posts = [p for p in content.posts if any(p.get(key) for key in VIDEO_MARKERS)]
        engagement = []
        for raw_post in content.posts:
            post = Post.model_validate(raw_post)
            engagement.append({
                "likes": post.likes,
                "comments": post.comments,
                "shares": post.share_count or 0,
                "views": post.views,
                "duration": post.duration or 0,
            })

        return await self.analyzer.analyze_video({
            "posts": video_posts,
            "metadata": content.metadata.model_dump(),
            "hashtags": sorted(content.hashtags),
            "engagement": engagement,
        })


class DocumentStage(AnalysisStage):
    """Long-form text analysis over all extracted captions and texts."""

    name = "document"
    slot = "document"
    label = "Document analysis"
    result_model = DocumentAnalysis
    requires = ContentType.DOCUMENT
    skip_reason = "Not document content"

    async def analyze(self, state: PipelineState) -> JsonDict:
        content = _require_content(state, "No document content to analyze")
        if not content.text_content:
            raise NothingToAnalyze("No document content to analyze")

        return await self.analyzer.process_document({
            "content": "\n\n".join(content.text_content),
            "metadata": content.metadata.model_dump(),
            "hashtags": sorted(content.hashtags),
            "mentions": sorted(content.mentions),
            "structure": {
                "totalParagraphs": len(content.text_content),
                "averageLength": fmean(len(text) for text in content.text_content),
            },
        })


class MultiModalStage(AnalysisStage):
    name = "multiModal"
    slot = "multi_modal"
    label = "Multi-modal analysis"
    result_model = MultiModalAnalysis

    async def analyze(self, state: PipelineState) -> JsonDict:
        content = _require_content(state, "No content available for multi-modal analysis")
        return await self.analyzer.analyze_multi_modal({
            "textContent": content.text_content,
            "mediaUrls": content.media_urls,
            "metadata": content.metadata.model_dump(),
            "sentiment": state.sentiment.payload(),
            "videoInsights": state.video.payload(),
            "documentInsights": state.document.payload(),
            "crossModalElements": {
                "hasText": bool(content.text_content),
                "hasMedia": bool(content.media_urls),
                "hasVideo": state.video.is_result,
                "hasDocument": state.document.is_result,
            },
        })


class TrendStage(AnalysisStage):
    name = "trends"
    slot = "trends"
    label = "Trend analysis"
    result_model = TrendAnalysis

    async def analyze(self, state: PipelineState) -> JsonDict:
        content = _require_content(state, "No content available for trend analysis")
        return await self.analyzer.analyze_trends({
            "contentData": content.to_payload(),
            "sentimentData": state.sentiment.payload(),
            "videoData": state.video.payload(),
            "categoryData": state.categories.payload(),
        })


class VibeStage(AnalysisStage):
    name = "vibe"
    slot = "vibe"
    label = "Vibe analysis"
    result_model = VibeAnalysis

    async def analyze(self, state: PipelineState) -> JsonDict:
        content = _require_content(state, "No content available for vibe analysis")
        return await self.analyzer.analyze_vibe(
            {
                "content": content.to_payload(),
                "sentiment": state.sentiment.payload(),
                "categories": state.categories.payload(),
            },
            preferences=state.preferences,
        )


ANALYSIS_STAGES: tuple[type[AnalysisStage], ...] = (
    SentimentStage,
    CategorizeStage,
    VideoStage,
    DocumentStage,
    MultiModalStage,
    TrendStage,
    VibeStage,
)
