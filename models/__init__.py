"""Pydantic models and state for the Vibe content analysis pipeline.

This package contains all data models used throughout the pipeline:

Post / PreprocessedContent / ContentType:
    Scraped social media records and their canonical form.

PipelineState / Slot / SlotStatus:
    Immutable per-invocation state with one result slot per stage.

SentimentAnalysis, VideoAnalysis, ... :
    Validated analyzer outputs (only the fields the pipeline reads).

AnalysisReport / FailedReport:
    Output of the report stage.

Example:
    >>> from models import ContentType, PipelineState
    >>> state = PipelineState(raw_content={"data": []}, content_type=ContentType.MIXED)
"""

from models.content import ContentMetadata, ContentType, Post, PreprocessedContent
from models.analysis import (
    CategoryAnalysis,
    DocumentAnalysis,
    MultiModalAnalysis,
    SentimentAnalysis,
    TrendAnalysis,
    VibeAnalysis,
    VideoAnalysis,
)
from models.state import SLOT_NAMES, PipelineState, Slot, SlotStatus
from models.report import AnalysisReport, FailedReport, Report

__all__ = [
    "ContentMetadata",
    "ContentType",
    "Post",
    "PreprocessedContent",
    "CategoryAnalysis",
    "DocumentAnalysis",
    "MultiModalAnalysis",
    "SentimentAnalysis",
    "TrendAnalysis",
    "VibeAnalysis",
    "VideoAnalysis",
    "SLOT_NAMES",
    "PipelineState",
    "Slot",
    "SlotStatus",
    "AnalysisReport",
    "FailedReport",
    "Report",
]
