# Where: projscan.features.processing.__init__
# What: Expose the handler registry, dispatcher, aggregator, and outcome types.
# Why: Provide a cohesive import surface for application and UI layers.

from .domain.models import (
    CancellationToken,
    CategoryHandler,
    ProcessingFailure,
    ProcessingOutcome,
    ProcessingReport,
    ProcessingSuccess,
)
from .handlers.catalog import CatalogHandler, CatalogResult
from .usecases.aggregator import aggregate_outcomes
from .usecases.dispatcher import ProcessingDispatcher
from .usecases.registry import CategoryHandlerRegistry

__all__ = [
    "CancellationToken",
    "CatalogHandler",
    "CatalogResult",
    "CategoryHandler",
    "CategoryHandlerRegistry",
    "ProcessingDispatcher",
    "ProcessingFailure",
    "ProcessingOutcome",
    "ProcessingReport",
    "ProcessingSuccess",
    "aggregate_outcomes",
]
