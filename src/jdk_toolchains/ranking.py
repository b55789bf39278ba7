# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compose ranking orders for toolchains from comma separated criteria lists."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from functools import cmp_to_key, partial
from typing import Final

from .constants import CURRENT, ENV, LTS, VENDOR, VERSION
from .errors import UnsupportedComparatorError
from .models import ToolchainModel

ToolchainComparator = Callable[[ToolchainModel, ToolchainModel], int]


def _sign(left: object, right: object) -> int:
    return (left > right) - (left < right)  # type: ignore[operator]


def _is_number(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()


def _compare_segment(left: str, right: str) -> int:
    if _is_number(left) and _is_number(right):
        return _sign(int(left), int(right))
    return _sign(left, right)


def compare_versions(left: str | None, right: str | None) -> int:
    """Compare two dotted version strings segment by segment.

    Numeric segments compare numerically, anything else lexically. When all
    shared segments are equal the version with fewer segments is lesser, so
    ``"11" < "11.0.1"``. A missing version sorts before any present one.

    Args:
        left: First version string.
        right: Second version string.

    Returns:
        int: Negative, zero or positive like :func:`cmp`.
    """

    if left is None or right is None:
        return _sign(left is not None, right is not None)
    left_parts = left.split(".")
    right_parts = right.split(".")
    for left_part, right_part in zip(left_parts, right_parts):
        result = _compare_segment(left_part, right_part)
        if result:
            return result
    return _sign(len(left_parts), len(right_parts))


def _flag_first(key: str, left: ToolchainModel, right: ToolchainModel) -> int:
    return int(key in right.provides) - int(key in left.provides)


def _version_descending(left: ToolchainModel, right: ToolchainModel) -> int:
    return -compare_versions(left.provides.get(VERSION), right.provides.get(VERSION))


def _vendor_ascending(left: ToolchainModel, right: ToolchainModel) -> int:
    return compare_optional(left.provides.get(VENDOR), right.provides.get(VENDOR))


def compare_optional(left: str | None, right: str | None) -> int:
    """Compare optional strings, placing ``None`` first."""

    if left is None or right is None:
        return _sign(left is not None, right is not None)
    return _sign(left, right)


CRITERIA: Final[Mapping[str, ToolchainComparator]] = {
    LTS: partial(_flag_first, LTS),
    CURRENT: partial(_flag_first, CURRENT),
    ENV: partial(_flag_first, ENV),
    VERSION: _version_descending,
    VENDOR: _vendor_ascending,
}


def parse_comparator_spec(spec: str | Iterable[str]) -> tuple[str, ...]:
    """Split and validate a ranking specification.

    Args:
        spec: Comma separated criteria such as ``"lts,version,vendor"`` or an
            already split sequence of names.

    Returns:
        tuple[str, ...]: Criterion names in priority order.

    Raises:
        UnsupportedComparatorError: If a name is not a known criterion.
    """

    tokens = spec.split(",") if isinstance(spec, str) else list(spec)
    names = tuple(token.strip() for token in tokens if token.strip())
    for name in names:
        if name not in CRITERIA:
            raise UnsupportedComparatorError(name, tuple(CRITERIA))
    return names


class ChainedComparator:
    """Apply criteria left to right, falling through on ties."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(names)
        self._criteria = tuple(CRITERIA[name] for name in self.names)

    def __call__(self, left: ToolchainModel, right: ToolchainModel) -> int:
        for criterion in self._criteria:
            result = criterion(left, right)
            if result:
                return result
        return 0

    def __repr__(self) -> str:
        return f"ChainedComparator({','.join(self.names)!r})"


def build_comparator(spec: str | Iterable[str]) -> ChainedComparator:
    """Return the ordering function described by ``spec``.

    Raises:
        UnsupportedComparatorError: If ``spec`` names an unknown criterion.
    """

    return ChainedComparator(parse_comparator_spec(spec))


def sort_toolchains(toolchains: Iterable[ToolchainModel], spec: str | Iterable[str]) -> list[ToolchainModel]:
    """Return ``toolchains`` ordered by ``spec``.

    Ties left by the criteria are broken by install path so the result does
    not depend on input order.
    """

    comparator = build_comparator(spec)
    by_path = sorted(toolchains, key=lambda model: str(model.install_path))
    return sorted(by_path, key=cmp_to_key(comparator))


__all__ = [
    "CRITERIA",
    "ChainedComparator",
    "ToolchainComparator",
    "build_comparator",
    "compare_optional",
    "compare_versions",
    "parse_comparator_spec",
    "sort_toolchains",
]
