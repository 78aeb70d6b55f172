"""
Summary: Fold per-category outcomes into a single processing report.
Why: Separate "what was attempted" from "what produced usable output".
"""

from __future__ import annotations

from collections.abc import Mapping

from projscan.features.processing.domain.models import (
    ProcessingFailure,
    ProcessingOutcome,
    ProcessingReport,
)


def aggregate_outcomes(
    outcomes: Mapping[str, ProcessingOutcome],
    *,
    cancelled: bool = False,
) -> ProcessingReport:
    """Build a ``ProcessingReport`` from ``outcomes``.

    Failed categories stay in ``outcomes`` but are excluded from
    ``processed_categories``.
    """

    processed = tuple(
        category for category, outcome in outcomes.items() if not isinstance(outcome, ProcessingFailure)
    )
    error_count = len(outcomes) - len(processed)
    return ProcessingReport(
        processed_categories=processed,
        outcomes=outcomes,
        success_count=len(processed),
        error_count=error_count,
        cancelled=cancelled,
    )


__all__ = ["aggregate_outcomes"]
