"""
Summary: Validate header docstring schemas across source and test modules.
Why: Prevent regression to inconsistent header formats across touched files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

HEADER_OPEN: str = '"""'
HEADER_CLOSE: str = '"""'
SUMMARY_PREFIX: str = "Summary: "
WHY_PREFIX: str = "Why: "
WHERE_PREFIX: str = '"""Where: '
WHAT_PREFIX: str = "What: "
SUMMARY_OFFSET: int = 1
WHY_OFFSET: int = 2
CLOSE_OFFSET: int = 3
HEADER_LENGTH: int = 4

REPO_ROOT: Path = Path(__file__).resolve().parents[1]


def _modules() -> list[Path]:
    roots = (REPO_ROOT / "src" / "projscan", REPO_ROOT / "tests")
    return sorted(path for root in roots for path in root.rglob("*.py"))


def _head(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()[:HEADER_LENGTH + 2]


SUMMARY_MODULES: tuple[Path, ...] = tuple(
    path
    for path in _modules()
    if _head(path)[:1] == [HEADER_OPEN] and len(_head(path)) > 1 and _head(path)[1].startswith("Summary")
)
WHERE_MODULES: tuple[Path, ...] = tuple(
    path for path in _modules() if _head(path)[:1] and _head(path)[0].startswith(WHERE_PREFIX)
)


def _relative(path: Path) -> str:
    return path.relative_to(REPO_ROOT).as_posix()


def test_both_header_styles_are_in_use() -> None:
    assert len(SUMMARY_MODULES) >= 15
    assert len(WHERE_MODULES) >= 8


@pytest.mark.parametrize("module_path", SUMMARY_MODULES, ids=_relative)
def test_module_headers_follow_summary_why_schema(module_path: Path) -> None:
    """Ensure module header docstring uses Summary and Why lines."""

    content_lines = module_path.read_text(encoding="utf-8").splitlines()
    assert len(content_lines) >= HEADER_LENGTH, (
        f"{module_path} must provide at least {HEADER_LENGTH} header lines"
    )

    assert content_lines[0] == HEADER_OPEN, f"{module_path} must start with header docstring"

    summary_line = content_lines[SUMMARY_OFFSET]
    why_line = content_lines[WHY_OFFSET]
    closing_line = content_lines[CLOSE_OFFSET].strip()

    assert summary_line.startswith(SUMMARY_PREFIX), (
        f"{module_path} summary line must begin with '{SUMMARY_PREFIX}'"
    )
    assert why_line.startswith(WHY_PREFIX), f"{module_path} why line must begin with '{WHY_PREFIX}'"
    assert closing_line == HEADER_CLOSE, f"{module_path} header must close with triple quotes"
    assert summary_line.removeprefix(SUMMARY_PREFIX).strip(), f"{module_path} summary text cannot be empty"
    assert why_line.removeprefix(WHY_PREFIX).strip(), f"{module_path} why text cannot be empty"


@pytest.mark.parametrize("module_path", WHERE_MODULES, ids=_relative)
def test_where_headers_name_their_own_module(module_path: Path) -> None:
    """Ensure Where/What/Why headers point at the file they live in."""

    where_line, what_line, why_line = module_path.read_text(encoding="utf-8").splitlines()[:3]

    assert where_line.removeprefix(WHERE_PREFIX).strip() == _relative(module_path)
    assert what_line.startswith(WHAT_PREFIX) and what_line.removeprefix(WHAT_PREFIX).strip()
    assert why_line.startswith(WHY_PREFIX) and why_line.removeprefix(WHY_PREFIX).strip()
