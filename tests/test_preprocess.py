"""
Unit tests for the preprocess stage.
"""

import pytest

from models.content import ContentType
from models.state import PipelineState
from stages.preprocess import PreprocessStage, preprocess_content
from tests.fixtures import make_record, make_video_post


def test_extracts_text_media_hashtags_and_mentions(mixed_record):
    content = preprocess_content(mixed_record)

    assert content.text_content == [
        "Night market run #0 with @mina_eats",
        "Sunset at the pier with @sam",
    ]
    assert content.media_urls == [
        "https://cdn.example.com/v0.mp4",
        "https://cdn.example.com/c0.jpg",
        "https://cdn.example.com/p.jpg",
    ]
    assert content.hashtags == {"streetfood", "seoul", "sunset"}
    assert content.mentions == {"mina_eats", "sam"}
    assert len(content.posts) == 2


def test_caption_and_text_both_kept():
    content = preprocess_content(make_record([{"caption": "cap", "text": "body @hidden"}]))

    assert content.text_content == ["cap", "body @hidden"]
    # Mentions come from the caption when there is one
    assert content.mentions == set()


def test_mentions_fall_back_to_text():
    content = preprocess_content(make_record([{"text": "thanks @alice and @bob_2"}]))
    assert content.mentions == {"alice", "bob_2"}


def test_duplicate_hashtags_collapse():
    posts = [make_video_post(0), make_video_post(1)]
    content = preprocess_content(make_record(posts))
    assert content.hashtags == {"streetfood", "seoul"}


def test_metadata_from_record(tiktok_record):
    content = preprocess_content(tiktok_record)

    assert content.metadata.platform == "tiktok"
    assert content.metadata.total_count == 3
    assert content.metadata.scraped_at == "2026-10-01T12:00:00+00:00"


def test_metadata_defaults():
    content = preprocess_content({"data": [{"caption": "a"}, {"caption": "b"}]})

    assert content.metadata.platform == "unknown"
    assert content.metadata.total_count == 2
    assert content.metadata.scraped_at  # filled with the current time


def test_empty_data_gives_empty_content():
    content = preprocess_content({"data": []})

    assert content.posts == []
    assert content.text_content == []
    assert content.media_urls == []
    assert content.hashtags == set()
    assert content.metadata.total_count == 0


def test_missing_data_treated_as_empty():
    assert preprocess_content({"platform": "x"}).posts == []


def test_non_list_data_raises():
    with pytest.raises(TypeError, match="must be a list"):
        preprocess_content({"data": {"caption": "nope"}})


def test_idempotent_on_fixed_record(tiktok_record):
    """Same input, same output (scrapedAt fixed so no clock dependence)."""
    assert preprocess_content(tiktok_record) == preprocess_content(tiktok_record)


def test_payload_sorts_sets(mixed_record):
    payload = preprocess_content(mixed_record).to_payload()

    assert payload["hashtags"] == ["seoul", "streetfood", "sunset"]
    assert payload["mentions"] == ["mina_eats", "sam"]
    assert payload["textContent"][1] == "Sunset at the pier with @sam"


@pytest.mark.asyncio
async def test_stage_sets_preprocessed(mixed_record):
    state = PipelineState(raw_content=mixed_record, content_type=ContentType.MIXED)

    result = await PreprocessStage()(state)

    assert result.preprocessed is not None
    assert result.errors == ()
    # Input state is untouched
    assert state.preprocessed is None


@pytest.mark.asyncio
async def test_stage_records_failure_instead_of_raising():
    state = PipelineState(raw_content={"data": "junk"}, content_type=ContentType.MIXED)

    result = await PreprocessStage()(state)

    assert result.preprocessed is None
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Preprocessing failed: ")


# ============================================================================
# Odd posts next to good ones
# ============================================================================


_GOOD_POST = {
    "caption": "Brunch with @alice and @bob",
    "displayUrl": "https://cdn.example.com/good.jpg",
    "hashtags": ["brunch"],
}


@pytest.mark.parametrize(
    "odd_post",
    [
        {"caption": "reel", "covers": ["https://cdn.example.com/c1.jpg"]},
        {"caption": "reel", "likesCount": 10.5, "playCount": "lots"},
        {"caption": "reel", "hashtags": "travel"},
        {"caption": 42, "videoUrl": {"hd": "x"}, "duration": "long"},
    ],
    ids=["covers-list", "odd-counts", "string-hashtags", "non-string-text"],
)
def test_odd_post_does_not_sink_good_post(odd_post):
    content = preprocess_content(make_record([_GOOD_POST, odd_post]))

    assert content.text_content[0] == "Brunch with @alice and @bob"
    assert content.media_urls[0] == "https://cdn.example.com/good.jpg"
    assert content.mentions == {"alice", "bob"}
    assert "brunch" in content.hashtags
    assert len(content.posts) == 2


def test_odd_fields_read_as_missing():
    content = preprocess_content(make_record([
        {"caption": 42, "covers": ["https://cdn.example.com/c1.jpg"], "hashtags": "travel"},
    ]))

    assert content.text_content == []
    assert content.media_urls == []
    assert content.hashtags == {"travel"}


def test_non_mapping_posts_are_skipped():
    content = preprocess_content(make_record([_GOOD_POST, "junk", None]))

    assert len(content.posts) == 1
    assert content.mentions == {"alice", "bob"}


def test_odd_metadata_values():
    content = preprocess_content({
        "data": [_GOOD_POST],
        "platform": "instagram",
        "count": "many",
        "scrapedAt": 1727784000,
    })

    assert content.metadata.total_count == 1
    assert content.metadata.scraped_at == "1727784000"


@pytest.mark.asyncio
async def test_stage_keeps_record_with_odd_post():
    state = PipelineState(
        raw_content=make_record([_GOOD_POST, {"playCount": "lots", "covers": ["x"]}]),
        content_type=ContentType.MIXED,
    )

    result = await PreprocessStage()(state)

    assert result.errors == ()
    assert result.preprocessed.mentions == {"alice", "bob"}
