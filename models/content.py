"""Content models for scraped social media records.

Raw content arrives as loosely-shaped JSON from scrapers (Instagram,
TikTok, blog crawlers). The pipeline keeps the raw mapping untouched and
reads it through the permissive Post model, which only declares the
fields the analysis stages consume.

Wire format (camelCase, as produced by the scrapers):
    {
        "data": [Post, ...],
        "platform": "tiktok",
        "count": 25,
        "scrapedAt": "2024-05-01T10:00:00Z"
    }
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentType(str, Enum):
    """Dominant media type of a content record.

    Stages tagged for a media type run only when the record matches it
    or is MIXED.
    """

    VIDEO = "video"
    DOCUMENT = "document"
    MIXED = "mixed"


class Post(BaseModel):
    """A single scraped post.

    Unknown fields are kept so the original record can be forwarded to
    analyzers verbatim. Count fields have platform-specific spellings
    (Instagram vs TikTok); the properties below resolve them.

    Validation never rejects a post: a field of the wrong shape reads as
    missing, so one scraper quirk cannot sink the whole record.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    caption: str | None = None
    text: str | None = None
    display_url: str | None = Field(default=None, alias="displayUrl")
    video_url: str | None = Field(default=None, alias="videoUrl")
    covers: Any = None
    hashtags: list[str] = Field(default_factory=list)
    likes_count: int | float | None = Field(default=None, alias="likesCount")
    digg_count: int | float | None = Field(default=None, alias="diggCount")
    comments_count: int | float | None = Field(default=None, alias="commentsCount")
    comment_count: int | float | None = Field(default=None, alias="commentCount")
    share_count: int | float | None = Field(default=None, alias="shareCount")
    play_count: int | float | None = Field(default=None, alias="playCount")
    view_count: int | float | None = Field(default=None, alias="viewCount")
    duration: int | float | None = None

    @field_validator("caption", "text", "display_url", "video_url", mode="before")
    @classmethod
    def _drop_non_strings(cls, value):
        return value if isinstance(value, str) else None

    @field_validator(
        "likes_count", "digg_count", "comments_count", "comment_count",
        "share_count", "play_count", "view_count", "duration",
        mode="before",
    )
    @classmethod
    def _drop_non_numbers(cls, value):
        # bool is an int subclass but never a real count
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    @field_validator("hashtags", mode="before")
    @classmethod
    def _normalize_hashtags(cls, value):
        # Instagram scrapers emit plain strings, TikTok scrapers emit {"name": ...} objects
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            return []
        names = [tag.get("name") if isinstance(tag, dict) else tag for tag in value]
        return [name for name in names if isinstance(name, str) and name]

    @property
    def body(self) -> str:
        """Primary text of the post: caption, falling back to text."""
        return self.caption or self.text or ""

    @property
    def cover_url(self) -> str | None:
        """Default cover/thumbnail URL, if any."""
        if isinstance(self.covers, dict):
            url = self.covers.get("default")
            if isinstance(url, str) and url:
                return url
        return None

    @property
    def likes(self) -> int | float:
        return self.likes_count or self.digg_count or 0

    @property
    def comments(self) -> int | float:
        return self.comments_count or self.comment_count or 0

    @property
    def views(self) -> int | float:
        return self.play_count or self.view_count or 0


class ContentMetadata(BaseModel):
    """Provenance of a preprocessed content record."""

    platform: str = Field(default="unknown", description="Source platform label")
    total_count: int = Field(default=0, description="Number of posts in the record")
    scraped_at: str = Field(default="", description="ISO timestamp of the scrape")


class PreprocessedContent(BaseModel):
    """Canonical form of a raw content record, produced by the preprocess stage.

    Attributes:
        posts: Raw post mappings in input order
        metadata: Platform, post count and scrape timestamp
        text_content: Captions and texts in input order
        media_urls: Display, video and cover URLs in input order
        hashtags: Union of all post hashtags
        mentions: @handles found in post captions
    """

    posts: list[dict[str, Any]] = Field(default_factory=list)
    metadata: ContentMetadata = Field(default_factory=ContentMetadata)
    text_content: list[str] = Field(default_factory=list)
    media_urls: list[str] = Field(default_factory=list)
    hashtags: set[str] = Field(default_factory=set)
    mentions: set[str] = Field(default_factory=set)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict for analyzer prompts (sets sorted for stable prompts)."""
        return {
            "posts": self.posts,
            "metadata": self.metadata.model_dump(),
            "textContent": self.text_content,
            "mediaUrls": self.media_urls,
            "hashtags": sorted(self.hashtags),
            "mentions": sorted(self.mentions),
        }
