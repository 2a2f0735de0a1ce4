from __future__ import annotations

from enum import Enum
from typing import Callable

from models.project_view import ProjectView
from models.target_display import TargetDisplay
from services.number_formatter import NumberFormatter
from services.target_formatter import format_target
from services.target_resolver import NO_TARGET, ResolveOutcome, resolve_target


class GotoState(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"


class GotoController:
    """Tracks one navigation session; the anchor offset is fixed for its lifetime."""

    def __init__(
        self,
        project: ProjectView,
        initial_offset: int,
        formatter: NumberFormatter | None = None,
        *,
        on_change: Callable[["GotoController"], None] | None = None,
    ) -> None:
        self.project = project
        self.initial_offset = initial_offset
        self.formatter = formatter or NumberFormatter()
        self.on_change = on_change
        self.state = GotoState.IDLE
        self.target_offset = NO_TARGET
        self.outcome: ResolveOutcome | None = None
        self.display = TargetDisplay()

    @property
    def is_valid(self) -> bool:
        return self.state is GotoState.VALID

    def process_input(self, text: str) -> bool:
        self.state = GotoState.VALIDATING
        resolution = resolve_target(
            text,
            self.initial_offset,
            self.project,
            non_unique_prefix=self.formatter.non_unique_label_prefix,
        )
        self.target_offset = resolution.offset
        self.outcome = resolution.outcome
        self.display = format_target(resolution.offset, self.project, self.formatter)
        self.state = GotoState.VALID if resolution.is_resolved else GotoState.INVALID
        if self.on_change:
            self.on_change(self)
        return self.is_valid

    def reset(self) -> None:
        self.state = GotoState.IDLE
        self.target_offset = NO_TARGET
        self.outcome = None
        self.display = TargetDisplay()
