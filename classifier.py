"""Heuristic content-type classification.

Decides whether a scraped record is predominantly video, long-form text
(document) or a mix, so the pipeline can route it to the right variant
and so media-specific stages know whether to run.

Heuristic:
    - A post counts as video if it has a video URL, covers, a play count
      or a duration.
    - A post counts as document if its caption (or text) is longer than
      DOCUMENT_MIN_CHARS.
    - The record is VIDEO when the video share is strictly above the
      threshold, DOCUMENT when the document share is, otherwise MIXED.

The classifier is pure and never raises: anything it cannot make sense
of is MIXED, which runs every stage.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from config import Config
from errors import ConfigurationError
from models.content import ContentType

logger = logging.getLogger(__name__)

VIDEO_MARKERS = ("videoUrl", "covers", "playCount", "duration")


@dataclass(frozen=True)
class ContentClassifier:
    """Classify raw content records by dominant media type.

    Example:
        >>> ContentClassifier().classify({"data": [{"videoUrl": "x"}]})
        <ContentType.VIDEO: 'video'>
    """

    video_ratio_threshold: float = 0.7
    document_ratio_threshold: float = 0.7
    document_min_chars: int = 500

    @classmethod
    def from_config(cls, config: Config) -> "ContentClassifier":
        return cls(
            video_ratio_threshold=config.video_ratio_threshold,
            document_ratio_threshold=config.document_ratio_threshold,
            document_min_chars=config.document_min_chars,
        )

    def classify(self, raw_content: Any) -> ContentType:
        """Return the dominant content type of a raw record.

        Args:
            raw_content: Raw record with a 'data' list of posts (may be None)

        Returns:
            VIDEO, DOCUMENT, or MIXED (also for missing/empty/odd input)
        """
        try:
            return self._classify(raw_content)
        except Exception as e:
            logger.warning("Content type detection failed, using mixed | error=%s", e)
            return ContentType.MIXED

    def _classify(self, raw_content: Any) -> ContentType:
        if not isinstance(raw_content, Mapping):
            return ContentType.MIXED
        posts = raw_content.get("data")
        if not isinstance(posts, list) or not posts:
            return ContentType.MIXED

        video_count = 0
        document_count = 0
        for post in posts:
            if not isinstance(post, Mapping):
                continue
            if any(post.get(key) for key in VIDEO_MARKERS):
                video_count += 1
            body = post.get("caption") or post.get("text") or ""
            if isinstance(body, str) and len(body) > self.document_min_chars:
                document_count += 1

        total = len(posts)
        video_ratio = video_count / total
        document_ratio = document_count / total

        if video_ratio > self.video_ratio_threshold:
            return ContentType.VIDEO
        if document_ratio > self.document_ratio_threshold:
            return ContentType.DOCUMENT
        return ContentType.MIXED


def detect_content_type(raw_content: Any) -> ContentType:
    """Classify with the default thresholds."""
    return ContentClassifier().classify(raw_content)


def resolve_content_type(value: ContentType | str | None) -> ContentType | None:
    """Normalize a caller-supplied content type override.

    Raises:
        ConfigurationError: If the string is not a known content type
    """
    if value is None or isinstance(value, ContentType):
        return value
    try:
        return ContentType(value)
    except ValueError:
        choices = ", ".join(t.value for t in ContentType)
        raise ConfigurationError(f"Invalid content type '{value}' (expected one of: {choices})") from None
