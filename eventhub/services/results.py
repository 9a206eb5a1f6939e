"""Outcome types for multi-step operations.

A failed step is either fatal (the operation raises) or advisory (the
operation logs it, records it here and carries on).
"""
from __future__ import annotations

from dataclasses import dataclass, field

from eventhub.core.errors import PartialSuccessWarning


@dataclass(frozen=True)
class StepResult:
    step: str
    ok: bool
    fatal: bool = True
    rows: int = 0
    error: str | None = None

    @property
    def advisory_failure(self) -> bool:
        return not self.ok and not self.fatal


@dataclass
class OperationResult:
    success: bool = True
    steps: list[StepResult] = field(default_factory=list)

    def record(self, step: StepResult) -> StepResult:
        self.steps.append(step)
        return step

    @property
    def advisories(self) -> list[StepResult]:
        return [step for step in self.steps if step.advisory_failure]


@dataclass
class CreateEventResult(OperationResult):
    event_id: str = ""
    warning: PartialSuccessWarning | None = None

    @property
    def venues_warning(self) -> bool:
        return self.warning is not None
