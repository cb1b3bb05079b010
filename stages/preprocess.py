"""Preprocess stage: raw scraped record -> PreprocessedContent.

Extraction rules (per post, in input order):
    - caption and text go to text_content
    - displayUrl, videoUrl and covers.default go to media_urls
    - hashtags are unioned into a set
    - @handles in the caption (or text, when there is no caption) are
      unioned into the mentions set

A failure here is not fatal: the error is recorded, ``preprocessed``
stays None, and each downstream stage reports that it had nothing to
analyze.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from models.content import ContentMetadata, Post, PreprocessedContent
from models.state import PipelineState
from stages.base import Stage

logger = logging.getLogger(__name__)

_MENTION_PATTERN = re.compile(r"@(\w+)")


def preprocess_content(raw_content: Mapping[str, Any]) -> PreprocessedContent:
    """Normalize a raw content record.

    Args:
        raw_content: Mapping with 'data' (list of posts) and optional
            'platform', 'count' and 'scrapedAt'

    Returns:
        PreprocessedContent (empty collections when there are no posts)

    Raises:
        TypeError: If 'data' is present but not a list
    """
    raw_posts = raw_content.get("data") or []
    if not isinstance(raw_posts, list):
        raise TypeError(f"'data' must be a list of posts, got {type(raw_posts).__name__}")

    posts: list[dict[str, Any]] = []
    text_content: list[str] = []
    media_urls: list[str] = []
    hashtags: set[str] = set()
    mentions: set[str] = set()

    for index, raw_post in enumerate(raw_posts):
        if not isinstance(raw_post, Mapping):
            logger.warning("Skipping post | index=%d type=%s", index, type(raw_post).__name__)
            continue
        post = Post.model_validate(dict(raw_post))
        posts.append(dict(raw_post))

        if post.caption:
            text_content.append(post.caption)
        if post.text:
            text_content.append(post.text)

        for url in (post.display_url, post.video_url, post.cover_url):
            if url:
                media_urls.append(url)

        hashtags.update(post.hashtags)
        mentions.update(_MENTION_PATTERN.findall(post.body))

    platform = raw_content.get("platform")
    count = raw_content.get("count")
    scraped_at = raw_content.get("scrapedAt")
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        count = len(posts)
    metadata = ContentMetadata(
        platform=str(platform) if platform else "unknown",
        total_count=count,
        scraped_at=str(scraped_at) if scraped_at else datetime.now(timezone.utc).isoformat(),
    )

    return PreprocessedContent(
        posts=posts,
        metadata=metadata,
        text_content=text_content,
        media_urls=media_urls,
        hashtags=hashtags,
        mentions=mentions,
    )


class PreprocessStage(Stage):
    """First stage of every variant."""

    name = "preprocess"

    async def __call__(self, state: PipelineState) -> PipelineState:
        try:
            content = preprocess_content(state.raw_content)
        except Exception as e:
            message = f"Preprocessing failed: {e}"
            logger.error("Preprocessing failed | type=%s error=%s", type(e).__name__, e, exc_info=True)
            return state.with_error(message)

        logger.info(
            "Preprocessing complete | posts=%d texts=%d media=%d hashtags=%d mentions=%d",
            len(content.posts),
            len(content.text_content),
            len(content.media_urls),
            len(content.hashtags),
            len(content.mentions),
        )
        return replace(state, preprocessed=content)
