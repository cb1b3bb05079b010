"""
Tests for the batch scheduler.
"""

import asyncio

import pytest

import batch
from batch import BatchItemResult, BatchScheduler
from config import Config
from errors import ConfigurationError
from models.content import ContentType
from models.report import AnalysisReport
from pipeline import PipelineRunner
from tests.fixtures import make_document_post, make_record, make_video_post
from tests.mocks import FakeAnalyzer


def _records(n: int) -> list:
    return [make_record([{"caption": f"post {i}"}], platform=f"p{i}") for i in range(n)]


@pytest.fixture
def no_sleep(monkeypatch):
    """Record inter-chunk sleeps without waiting."""
    calls = []
    real_sleep = asyncio.sleep

    async def fake_sleep(seconds, *args, **kwargs):
        calls.append(seconds)
        await real_sleep(0)

    monkeypatch.setattr(batch.asyncio, "sleep", fake_sleep)
    return calls


# ============================================================================
# Construction
# ============================================================================


@pytest.mark.parametrize("batch_size", [0, -1])
def test_invalid_batch_size(runner, batch_size):
    with pytest.raises(ConfigurationError, match="batch_size"):
        BatchScheduler(runner, batch_size=batch_size)


@pytest.mark.parametrize("delay_seconds", [-1, "1.0", None, True])
def test_invalid_delay(runner, delay_seconds):
    with pytest.raises(ConfigurationError, match="delay_seconds"):
        BatchScheduler(runner, delay_seconds=delay_seconds)


@pytest.mark.asyncio
async def test_items_must_be_a_list(runner):
    with pytest.raises(ConfigurationError, match="items must be a list"):
        await BatchScheduler(runner).run({"data": []})


@pytest.mark.asyncio
async def test_invalid_content_type_override(runner):
    with pytest.raises(ConfigurationError):
        await BatchScheduler(runner).run(_records(1), content_type="hologram")


# ============================================================================
# Dispatch
# ============================================================================


def test_variant_dispatch(runner, tiktok_record, blog_record, mixed_record):
    scheduler = BatchScheduler(runner)

    assert scheduler.variant_for(tiktok_record) == ("video-only", ContentType.VIDEO)
    assert scheduler.variant_for(blog_record) == ("document-only", ContentType.DOCUMENT)
    assert scheduler.variant_for(mixed_record) == ("full", ContentType.MIXED)
    assert scheduler.variant_for(mixed_record, ContentType.VIDEO) == ("video-only", ContentType.VIDEO)


@pytest.mark.asyncio
async def test_each_item_runs_its_own_variant(no_sleep):
    analyzer = FakeAnalyzer()
    scheduler = BatchScheduler(PipelineRunner(analyzer, Config()), batch_size=5)
    items = [
        make_record([make_video_post(0)]),
        make_record([make_document_post(0)], platform="blog"),
    ]

    results = await scheduler.run(items)

    video_report, document_report = results[0].result, results[1].result
    assert video_report.summary.content_type is ContentType.VIDEO
    assert video_report.analysis.document is None
    assert document_report.summary.content_type is ContentType.DOCUMENT
    assert document_report.analysis.video is None
    # video-only has no vibe stage, document-only has no multi-modal stage
    assert "vibe" not in analyzer.calls
    assert "multi_modal" in analyzer.calls


# ============================================================================
# Ordering, chunking, failure isolation
# ============================================================================


@pytest.mark.asyncio
async def test_results_in_input_order_despite_completion_order():
    # Earlier items take longer, so they finish last within the chunk
    items = [
        make_record([{"caption": f"post {i}", "delay": 0.05 * (4 - i)}], platform=f"p{i}")
        for i in range(5)
    ]
    scheduler = BatchScheduler(PipelineRunner(FakeAnalyzer(), Config()), batch_size=5)

    results = await scheduler.run(items, content_type="mixed")

    assert [r.index for r in results] == [0, 1, 2, 3, 4]
    assert [r.result.summary.platform for r in results] == ["p0", "p1", "p2", "p3", "p4"]


@pytest.mark.asyncio
async def test_chunk_items_run_concurrently():
    analyzer = FakeAnalyzer()
    items = [make_record([{"caption": f"post {i}", "delay": 0.02}]) for i in range(4)]
    scheduler = BatchScheduler(PipelineRunner(analyzer, Config()), batch_size=2, delay_seconds=0)

    await scheduler.run(items)

    assert analyzer.max_in_flight == 2


@pytest.mark.asyncio
async def test_sleeps_between_chunks_only(runner, no_sleep):
    scheduler = BatchScheduler(runner, batch_size=2, delay_seconds=1.5)

    results = await scheduler.run(_records(5))

    assert len(results) == 5
    # Three chunks: two pauses, none after the last chunk
    assert no_sleep.count(1.5) == 2


@pytest.mark.asyncio
async def test_single_chunk_never_sleeps(runner, no_sleep):
    await BatchScheduler(runner, batch_size=5, delay_seconds=1.0).run(_records(3))
    assert 1.0 not in no_sleep


@pytest.mark.asyncio
async def test_bad_item_does_not_affect_siblings(runner, no_sleep):
    items = [_records(1)[0], "not a record", _records(1)[0]]

    results = await BatchScheduler(runner, batch_size=3).run(items)

    assert [r.success for r in results] == [True, False, True]
    assert "must be a mapping" in results[1].error
    assert results[1].result is None
    assert isinstance(results[0].result, AnalysisReport)


@pytest.mark.asyncio
async def test_analysis_failures_are_still_successful_items(no_sleep):
    """Stage failures live inside the report; the item itself succeeds."""
    runner = PipelineRunner(FakeAnalyzer(fail={"sentiment"}), Config())

    results = await BatchScheduler(runner).run(_records(2))

    assert all(r.success for r in results)
    assert results[0].result.summary.has_errors is True


@pytest.mark.asyncio
async def test_empty_batch(runner, no_sleep):
    assert await BatchScheduler(runner).run([]) == []
    assert no_sleep == []


# ============================================================================
# Serialization
# ============================================================================


def test_failed_item_to_dict():
    assert BatchItemResult(index=2, success=False, error="boom").to_dict() == {
        "index": 2, "success": False, "error": "boom",
    }


@pytest.mark.asyncio
async def test_successful_item_to_dict(runner, no_sleep):
    results = await BatchScheduler(runner).run(_records(1))

    data = results[0].to_dict()
    assert data["index"] == 0
    assert data["success"] is True
    assert "error" not in data
    assert data["result"]["summary"]["platform"] == "p0"
