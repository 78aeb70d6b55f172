"""
Summary: Closed set of project category folders and their canonical order.
Why: Keep dispatch order and diff output deterministic regardless of listing order.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Final


class Category(StrEnum):
    """Category folders every project is created with, in canonical order."""

    DOCUMENT = "Document"
    IMPLEMENTATION = "Implementation"
    PRESENTATION = "Presentation"
    REACHING = "Reaching"
    BUSINESS = "Business"
    ACADEMIA = "Academia"
    PAPER = "Paper"
    MATERIAL = "Material"


CATEGORY_ORDER: Final[tuple[str, ...]] = tuple(category.value for category in Category)

_POSITION: Final[dict[str, int]] = {name: index for index, name in enumerate(CATEGORY_ORDER)}


def is_known_category(name: str) -> bool:
    """Return True when ``name`` is one of the project category folders."""

    return name in _POSITION


def category_sort_key(name: str) -> tuple[int, str]:
    """Sort key placing known categories in canonical order and others after them."""

    return (_POSITION.get(name, len(_POSITION)), name)


def ordered_categories(names: Iterable[str]) -> list[str]:
    """Return ``names`` sorted canonically."""

    return sorted(names, key=category_sort_key)


__all__ = [
    "CATEGORY_ORDER",
    "Category",
    "category_sort_key",
    "is_known_category",
    "ordered_categories",
]
