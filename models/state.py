"""Pipeline state threaded through every analysis stage.

A PipelineState is created fresh for each invocation and never mutated:
stages return an updated copy (dataclasses.replace). Each analysis stage
owns exactly one result slot, and every slot is in one of four states:

    ABSENT   - the stage has not run (or is not part of the variant)
    RESULT   - the stage produced a validated result model
    SKIPPED  - the stage declined to run (content type mismatch)
    ERROR    - the stage failed; the message explains why

Errors accumulate in an append-only tuple so the final report can list
every failure in the order it happened.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from models.content import ContentType, PreprocessedContent

ModelT = TypeVar("ModelT", bound=BaseModel)

# Slot field names, in the order the full variant fills them
SLOT_NAMES: tuple[str, ...] = (
    "sentiment",
    "categories",
    "video",
    "document",
    "multi_modal",
    "trends",
    "vibe",
)


class SlotStatus(str, Enum):
    ABSENT = "absent"
    RESULT = "result"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True)
class Slot:
    """One stage's outcome.

    Use the factory methods rather than the constructor so a slot can
    never be half-populated (e.g. an error with a result attached).
    """

    status: SlotStatus = SlotStatus.ABSENT
    result: BaseModel | None = None
    message: str = ""

    @classmethod
    def ok(cls, result: BaseModel) -> "Slot":
        return cls(status=SlotStatus.RESULT, result=result)

    @classmethod
    def skipped(cls, reason: str) -> "Slot":
        return cls(status=SlotStatus.SKIPPED, message=reason)

    @classmethod
    def failed(cls, message: str) -> "Slot":
        return cls(status=SlotStatus.ERROR, message=message)

    @property
    def is_result(self) -> bool:
        return self.status is SlotStatus.RESULT

    def payload(self) -> dict[str, Any] | None:
        """JSON form used in reports and analyzer prompts.

        Returns:
            None when absent, the result dict, {"skipped": reason}
            or {"error": message}
        """
        if self.status is SlotStatus.RESULT:
            return self.result.model_dump(mode="json", by_alias=True)
        if self.status is SlotStatus.SKIPPED:
            return {"skipped": self.message}
        if self.status is SlotStatus.ERROR:
            return {"error": self.message}
        return None

    def __str__(self) -> str:
        if self.message:
            return f"Slot({self.status.value}, '{self.message[:40]}')"
        return f"Slot({self.status.value})"


ABSENT = Slot()


@dataclass(frozen=True)
class PipelineState:
    """Immutable state for a single pipeline invocation.

    Attributes:
        raw_content: Caller-owned raw record ({data, platform, count, scrapedAt})
        content_type: Dominant media type, fixed for the whole invocation
        platform: Platform label used in the report
        preferences: Optional user preferences forwarded to the vibe analyzer
        preprocessed: Canonical content, None until preprocessing succeeds
        sentiment .. vibe: Result slots, one per analysis stage
        errors: Failure messages in the order they occurred
        final_report: Set by the report stage only
    """

    raw_content: Mapping[str, Any]
    content_type: ContentType
    platform: str = "unknown"
    preferences: str = ""
    preprocessed: PreprocessedContent | None = None

    sentiment: Slot = ABSENT
    categories: Slot = ABSENT
    video: Slot = ABSENT
    document: Slot = ABSENT
    multi_modal: Slot = ABSENT
    trends: Slot = ABSENT
    vibe: Slot = ABSENT

    errors: tuple[str, ...] = field(default_factory=tuple)
    final_report: Any = None

    def slot(self, name: str) -> Slot:
        if name not in SLOT_NAMES:
            raise KeyError(f"Unknown slot: {name}")
        return getattr(self, name)

    def result(self, name: str, model: type[ModelT]) -> ModelT | None:
        """Typed access to a slot's result, or None unless the slot holds one."""
        slot = self.slot(name)
        if slot.is_result and isinstance(slot.result, model):
            return slot.result
        return None

    def with_slot(self, name: str, slot: Slot) -> "PipelineState":
        if name not in SLOT_NAMES:
            raise KeyError(f"Unknown slot: {name}")
        return replace(self, **{name: slot})

    def with_error(self, message: str) -> "PipelineState":
        return replace(self, errors=self.errors + (message,))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
