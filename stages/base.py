"""Stage contract for the analysis pipeline.

Every stage is an async callable ``state -> state`` that must never
raise to the runner. Analysis stages share the same discipline, which
AnalysisStage implements once:

    1. Content-type gate: a media-specific stage whose content type does
       not match writes a SKIPPED slot and calls nothing.
    2. Build + call: the subclass builds its payload and awaits the
       analyzer. NothingToAnalyze marks the slot as errored without
       counting as a pipeline error (there was simply no input).
    3. Validate: the reply must parse into the stage's result model.
    4. Any failure in 2-3 writes an ERROR slot, appends the same message
       to state.errors and logs it. Other stages' slots are never touched.

Cancellation (asyncio.CancelledError) is not caught.
"""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import BaseModel

from agents.base import AnalyzerService, JsonDict
from models.content import ContentType
from models.state import PipelineState, Slot

logger = logging.getLogger(__name__)


class NothingToAnalyze(Exception):
    """Raised while building a payload when the state holds no usable input."""


class Stage(ABC):
    """A named pipeline step."""

    name: ClassVar[str]

    @abstractmethod
    async def __call__(self, state: PipelineState) -> PipelineState:
        """Return the updated state. Must not raise."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class AnalysisStage(Stage):
    """A stage that fills one result slot from one analyzer call.

    Subclasses set the class attributes and implement ``analyze``.

    Attributes:
        name: Stage identifier used in variants
        slot: PipelineState slot this stage owns
        label: Human-readable name used in error messages
        result_model: Pydantic model the analyzer reply must satisfy
        requires: Content type this stage is limited to (None = all)
        skip_reason: Slot message when the content type does not match
    """

    slot: ClassVar[str]
    label: ClassVar[str]
    result_model: ClassVar[type[BaseModel]]
    requires: ClassVar[ContentType | None] = None
    skip_reason: ClassVar[str] = ""

    def __init__(self, analyzer: AnalyzerService):
        self.analyzer = analyzer

    def applies_to(self, content_type: ContentType) -> bool:
        """Media-specific stages also run for MIXED content."""
        return self.requires is None or content_type in (self.requires, ContentType.MIXED)

    @abstractmethod
    async def analyze(self, state: PipelineState) -> JsonDict:
        """Build the payload and call the analyzer.

        Raises:
            NothingToAnalyze: If the state has no input for this stage
        """

    async def __call__(self, state: PipelineState) -> PipelineState:
        if not self.applies_to(state.content_type):
            logger.info(
                "Stage skipped | stage=%s content_type=%s", self.name, state.content_type.value
            )
            return state.with_slot(self.slot, Slot.skipped(self.skip_reason))

        try:
            reply = await self.analyze(state)
            result = self.result_model.model_validate(reply)
        except NothingToAnalyze as e:
            logger.warning("Stage has no input | stage=%s reason=%s", self.name, e)
            return state.with_slot(self.slot, Slot.failed(str(e)))
        except Exception as e:
            message = f"{self.label} failed: {e}"
            logger.error(
                "Stage failed | stage=%s type=%s error=%s", self.name, type(e).__name__, e, exc_info=True
            )
            return state.with_slot(self.slot, Slot.failed(message)).with_error(message)

        logger.info("Stage complete | stage=%s", self.name)
        return state.with_slot(self.slot, Slot.ok(result))
