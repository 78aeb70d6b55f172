"""Category handler registry."""

from __future__ import annotations

from collections.abc import Iterator

from projscan.features.processing.domain.models import CategoryHandler
from projscan.features.snapshot.domain.categories import is_known_category, ordered_categories
from projscan.platform.logging import logger


class CategoryHandlerRegistry:
    """Route category names to their asynchronous handlers.

    The registry only routes; handlers are supplied by callers.
    """

    def __init__(self, handlers: dict[str, CategoryHandler] | None = None) -> None:
        self._handlers: dict[str, CategoryHandler] = {}
        for category, handler in (handlers or {}).items():
            self.register(category, handler)

    def register(self, category: str, handler: CategoryHandler, *, replace: bool = False) -> None:
        """Register ``handler`` for ``category``.

        Raises:
            ValueError: ``category`` is not a known category, or already has a
                handler and ``replace`` is False.
        """
        if not is_known_category(category):
            raise ValueError(f"Unknown category: {category}")
        if category in self._handlers and not replace:
            raise ValueError(f"A handler is already registered for {category}")
        if category in self._handlers:
            logger.debug("Replacing handler for %s", category)
        self._handlers[category] = handler

    def unregister(self, category: str) -> None:
        _ = self._handlers.pop(category, None)

    def get(self, category: str) -> CategoryHandler | None:
        return self._handlers.get(category)

    def categories(self) -> list[str]:
        """Registered categories in canonical order."""
        return ordered_categories(self._handlers)

    def __contains__(self, category: object) -> bool:
        return category in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self.categories())

    def __len__(self) -> int:
        return len(self._handlers)


__all__ = ["CategoryHandlerRegistry"]
