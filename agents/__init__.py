"""Analyzer backends for the Vibe content analysis pipeline.

AnalyzerService:
    Protocol the pipeline stages call. Any object with these async
    methods works (tests use a scripted fake).

ContentAnalyzer:
    PydanticAI implementation with one structured-output agent per
    analysis kind. Imported lazily so the pipeline core does not
    require model credentials.

Example:
    >>> from agents.analyzer import ContentAnalyzer
    >>> analyzer = ContentAnalyzer(config)
"""

from agents.base import AnalyzerService, JsonDict

__all__ = [
    "AnalyzerService",
    "JsonDict",
]
