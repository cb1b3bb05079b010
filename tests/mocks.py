"""
Mock analyzer for testing.

FakeAnalyzer implements the AnalyzerService protocol with canned replies,
so pipelines can be exercised end to end without any model calls.
Replies, failures and delays are scriptable per analysis kind.
"""

import asyncio
import copy
from typing import Any

DEFAULT_REPLIES: dict[str, dict[str, Any]] = {
    "sentiment": {
        "overallSentiment": 0.5,
        "emotions": {"joy": 0.7},
        "recommendations": {
            "content_strategy": ["Lean into the upbeat tone"],
            "emotional_optimization": ["Open with a smile"],
            "engagement_tactics": ["Reply to early comments"],
        },
    },
    "categorization": {
        "primaryCategory": "travel",
        "secondaryCategories": ["food"],
        "suggestedHashtags": ["#citybreak"],
        "targetAudience": "young travelers",
        "reasoning": "Post a weekly city series",
    },
    "video": {
        "viralPotential": {"score": 80, "growth_trajectory": "rising"},
        "recommendations": {
            "content_optimization": ["Hook viewers in the first two seconds"],
            "engagement_tactics": ["Pin a question as the first comment"],
        },
    },
    "document": {
        "relevanceScoring": {"curation_score": 60},
        "recommendations": {"content_improvements": ["Add subheadings"]},
    },
    "multi_modal": {
        "contentQuality": {"production_quality": 7},
        "engagementPrediction": {"multi_modal_score": 68},
        "optimizationRecommendations": {
            "cross_modal_enhancement": ["Match captions to the visuals"],
        },
    },
    "trends": {
        "viralPotential": {"overall_score": 70, "growth_prediction": "steady"},
        "recommendations": {
            "trend_optimization": ["Use the trending audio"],
            "viral_enhancement": ["Build a recurring format"],
            "timing_strategy": ["Post at 6pm local time"],
        },
    },
    "vibe": {
        "title": "Neon Nights in Seoul",
        "duration": "4 hours",
        "route": [{"lat": 37.56, "lon": 126.98, "title": "Myeongdong"}],
        "vibeTags": ["nightlife", "street food"],
        "images": ["https://example.com/seoul.jpg"],
        "summary": "An evening walk through neon-lit food streets.",
    },
}


class FakeAnalyzer:
    """Deterministic AnalyzerService.

    Args:
        replies: Per-kind reply overrides (merged over DEFAULT_REPLIES)
        fail: Kinds whose call raises RuntimeError(f"{kind} boom")
        delay: Seconds each call sleeps before replying
    """

    def __init__(
        self,
        replies: dict[str, Any] | None = None,
        fail: set | None = None,
        delay: float = 0.0,
    ):
        self.replies = {**DEFAULT_REPLIES, **(replies or {})}
        self.fail = set(fail or ())
        self.delay = delay
        self.calls: list[str] = []
        self.payloads: dict[str, Any] = {}
        self.preferences: str | None = None
        self.in_flight = 0
        self.max_in_flight = 0

    async def _reply(self, kind: str, payload: Any, delay: float = 0.0) -> dict[str, Any]:
        self.calls.append(kind)
        self.payloads[kind] = payload
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if delay or self.delay:
                await asyncio.sleep(delay or self.delay)
            if kind in self.fail:
                raise RuntimeError(f"{kind} boom")
            return copy.deepcopy(self.replies[kind])
        finally:
            self.in_flight -= 1

    async def analyze_sentiment(self, posts):
        # Posts may carry a "delay" field to make items finish out of order
        delay = max((p.get("delay", 0) for p in posts), default=0)
        return await self._reply("sentiment", posts, delay)

    async def categorize(self, content):
        return await self._reply("categorization", content)

    async def analyze_video(self, payload):
        return await self._reply("video", payload)

    async def process_document(self, payload):
        return await self._reply("document", payload)

    async def analyze_multi_modal(self, payload):
        return await self._reply("multi_modal", payload)

    async def analyze_trends(self, payload):
        return await self._reply("trends", payload)

    async def analyze_vibe(self, payload, preferences=""):
        self.preferences = preferences
        return await self._reply("vibe", payload)
