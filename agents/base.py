"""Interface between the pipeline and the AI analysis backend.

The pipeline treats every analysis as an opaque async call that takes a
JSON-ready payload and returns JSON. Implementations must be safe to call
concurrently (one instance is shared by every invocation in a batch) and
may raise on failure; the pipeline records the failure and moves on. The
pipeline never retries a call itself.
"""

from typing import Any, Protocol

JsonDict = dict[str, Any]


class AnalyzerService(Protocol):
    """Async analysis backend used by the pipeline stages."""

    async def analyze_sentiment(self, posts: list[JsonDict]) -> JsonDict:
        """Sentiment, emotion and mood analysis over raw posts."""
        ...

    async def categorize(self, content: JsonDict) -> JsonDict:
        """Primary/secondary categories, hashtags and audience."""
        ...

    async def analyze_video(self, payload: JsonDict) -> JsonDict:
        """Engagement and viral-potential analysis of video posts."""
        ...

    async def process_document(self, payload: JsonDict) -> JsonDict:
        """Keyword, topic, SEO and readability analysis of long text."""
        ...

    async def analyze_multi_modal(self, payload: JsonDict) -> JsonDict:
        """Cross-modal consistency and quality analysis."""
        ...

    async def analyze_trends(self, payload: JsonDict) -> JsonDict:
        """Trend alignment and viral potential forecast."""
        ...

    async def analyze_vibe(self, payload: JsonDict, preferences: str = "") -> JsonDict:
        """Curated vibe experience (title, route, tags, summary)."""
        ...
