# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide whether a toolchain satisfies a requirement set."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from .constants import ENV, VERSION
from .models import ToolchainModel
from .ranking import compare_versions

LOGGER = logging.getLogger(__name__)

_RANGE_RE: Final[re.Pattern[str]] = re.compile(r"([\[(])([^\[\]()]*)([\])])")


@dataclass(frozen=True, slots=True)
class VersionRange:
    """Interval of versions with optional, inclusive or exclusive bounds."""

    lower: str | None
    lower_inclusive: bool
    upper: str | None
    upper_inclusive: bool

    def contains(self, version: str) -> bool:
        if self.lower is not None:
            result = compare_versions(version, self.lower)
            if result < 0 or (result == 0 and not self.lower_inclusive):
                return False
        if self.upper is not None:
            result = compare_versions(version, self.upper)
            if result > 0 or (result == 0 and not self.upper_inclusive):
                return False
        return True


def parse_version_ranges(spec: str) -> tuple[VersionRange, ...]:
    """Parse a Maven style range list such as ``[11,17),[21,)``.

    A single bracketed version (``[17]``) pins that exact version.

    Raises:
        ValueError: If ``spec`` is not a well-formed range list.
    """

    ranges: list[VersionRange] = []
    position = 0
    text = spec.strip()
    while position < len(text):
        match = _RANGE_RE.match(text, position)
        if match is None:
            raise ValueError(f"Invalid version range {spec!r}")
        opening, body, closing = match.groups()
        if "," in body:
            lower, _, upper = (part.strip() for part in body.partition(","))
            ranges.append(VersionRange(lower or None, opening == "[", upper or None, closing == "]"))
        else:
            pinned = body.strip()
            if not pinned or opening != "[" or closing != "]":
                raise ValueError(f"Invalid version range {spec!r}")
            ranges.append(VersionRange(pinned, True, pinned, True))
        position = match.end()
        if position < len(text):
            if text[position] != ",":
                raise ValueError(f"Invalid version range {spec!r}")
            position += 1
    if not ranges:
        raise ValueError(f"Invalid version range {spec!r}")
    return tuple(ranges)


def version_matches(requested: str, discovered: str) -> bool:
    """Return ``True`` when ``discovered`` satisfies the ``requested`` constraint.

    Bracketed requests are Maven style ranges. Anything else matches the
    discovered version exactly or as a dotted prefix, so ``17`` accepts
    ``17.0.9`` but not ``170``.
    """

    requested = requested.strip()
    if requested.startswith(("[", "(")):
        try:
            ranges = parse_version_ranges(requested)
        except ValueError as exc:
            LOGGER.debug("%s", exc)
            return False
        return any(candidate.contains(discovered) for candidate in ranges)
    return discovered == requested or discovered.startswith(f"{requested}.")


def env_matches(requested: str, discovered: str) -> bool:
    return requested.strip() in {token.strip() for token in discovered.split(",")}


def value_matches(key: str, requested: str, discovered: str) -> bool:
    """Compare one requirement value against the toolchain's attribute."""

    if key == VERSION:
        return version_matches(requested, discovered)
    if key == ENV:
        return env_matches(requested, discovered)
    return requested == discovered


def matches(toolchain: ToolchainModel | Mapping[str, str], requirements: Mapping[str, str]) -> bool:
    """Return ``True`` when every requirement is provided and satisfied.

    Args:
        toolchain: Model, or bare provides mapping, to test.
        requirements: Constraint key to expected value.

    Returns:
        bool: ``True`` only if all requirements match.
    """

    provides = toolchain.provides if isinstance(toolchain, ToolchainModel) else toolchain
    for key, requested in requirements.items():
        discovered = provides.get(key)
        if discovered is None:
            LOGGER.debug("Toolchain %s is missing required property: %s", toolchain, key)
            return False
        if not value_matches(key, requested, discovered):
            LOGGER.debug("Toolchain %s doesn't match required property: %s", toolchain, key)
            return False
    return True


__all__ = [
    "VersionRange",
    "env_matches",
    "matches",
    "parse_version_ranges",
    "value_matches",
    "version_matches",
]
