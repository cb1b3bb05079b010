"""Shared fixtures: sample records and a scripted analyzer."""

import pytest

from config import Config
from pipeline import PipelineRunner
from tests.fixtures import make_document_post, make_record, make_video_post
from tests.mocks import FakeAnalyzer


@pytest.fixture
def analyzer():
    """Provide a fake analyzer with default replies."""
    return FakeAnalyzer()


@pytest.fixture
def runner(analyzer):
    """Provide a runner wired to the fake analyzer."""
    return PipelineRunner(analyzer, Config())


@pytest.fixture
def tiktok_record():
    """Three video posts from TikTok."""
    return make_record(
        [make_video_post(i) for i in range(3)],
        platform="tiktok",
        count=3,
        scrapedAt="2026-10-01T12:00:00+00:00",
    )


@pytest.fixture
def blog_record():
    """Four long-form text posts."""
    return make_record([make_document_post(i) for i in range(4)], platform="blog")


@pytest.fixture
def mixed_record():
    """One video post and one short captioned photo."""
    return make_record(
        [
            make_video_post(0),
            {
                "caption": "Sunset at the pier with @sam",
                "displayUrl": "https://cdn.example.com/p.jpg",
                "hashtags": ["sunset"],
            },
        ],
        platform="instagram",
    )
