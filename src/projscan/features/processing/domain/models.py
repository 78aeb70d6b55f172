"""src/projscan/features/processing/domain/models.py
Where: Processing feature domain layer.
What: Per-category outcomes, the aggregated report, and the cancellation token.
Why: Keep dispatcher results typed instead of loosely shaped dictionaries.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from projscan.features.snapshot.domain.models import CategorySnapshot, ProjectSnapshot

CategoryHandler = Callable[[CategorySnapshot, ProjectSnapshot], Awaitable[object]]


@dataclass(frozen=True, slots=True)
class ProcessingSuccess:
    """A handler returned normally; ``payload`` is opaque to the pipeline."""

    category: str
    payload: object = None

    @property
    def error_message(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class ProcessingFailure:
    """A handler raised, or no handler was registered for the category."""

    category: str
    error_message: str
    error_type: str | None = None


ProcessingOutcome = ProcessingSuccess | ProcessingFailure


@dataclass(frozen=True, slots=True)
class ProcessingReport:
    """Aggregated result of one dispatch."""

    processed_categories: tuple[str, ...] = ()
    outcomes: Mapping[str, ProcessingOutcome] = field(default_factory=dict)
    success_count: int = 0
    error_count: int = 0
    cancelled: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "outcomes", MappingProxyType(dict(self.outcomes)))

    @property
    def failures(self) -> list[ProcessingFailure]:
        return [outcome for outcome in self.outcomes.values() if isinstance(outcome, ProcessingFailure)]

    @property
    def has_failures(self) -> bool:
        return self.error_count > 0


class CancellationToken:
    """Cooperative cancellation flag checked by the dispatcher between categories."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


__all__ = [
    "CancellationToken",
    "CategoryHandler",
    "ProcessingFailure",
    "ProcessingOutcome",
    "ProcessingReport",
    "ProcessingSuccess",
]
