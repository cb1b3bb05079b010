"""Pipeline stages.

Stage / AnalysisStage:
    The never-raise stage contract (see stages.base).

PreprocessStage:
    Raw record -> PreprocessedContent.

SentimentStage ... VibeStage:
    One analyzer call each, writing one result slot.

ReportStage:
    Terminal stage building the AnalysisReport.
"""

from stages.base import AnalysisStage, NothingToAnalyze, Stage
from stages.preprocess import PreprocessStage, preprocess_content
from stages.analysis import (
    ANALYSIS_STAGES,
    CategorizeStage,
    DocumentStage,
    MultiModalStage,
    SentimentStage,
    TrendStage,
    VibeStage,
    VideoStage,
)
from stages.report import ReportStage, build_report, calculate_overall_score

__all__ = [
    "AnalysisStage",
    "NothingToAnalyze",
    "Stage",
    "PreprocessStage",
    "preprocess_content",
    "ANALYSIS_STAGES",
    "CategorizeStage",
    "DocumentStage",
    "MultiModalStage",
    "SentimentStage",
    "TrendStage",
    "VibeStage",
    "VideoStage",
    "ReportStage",
    "build_report",
    "calculate_overall_score",
]
