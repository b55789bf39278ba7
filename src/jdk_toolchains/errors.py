# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the discovery and selection layers."""

from __future__ import annotations

from collections.abc import Mapping


class ToolchainError(Exception):
    """Base class for user-visible toolchain failures."""


class UnsupportedComparatorError(ToolchainError, ValueError):
    """Raised when a ranking specification names an unknown criterion."""

    def __init__(self, name: str, supported: tuple[str, ...]) -> None:
        """Initialise the error with the rejected criterion name.

        Args:
            name: Criterion name that could not be resolved.
            supported: Criterion names accepted by the comparator registry.
        """

        super().__init__(f"Unsupported comparator {name!r}; expected a comma separated list of: {', '.join(supported)}")
        self.name = name
        self.supported = supported


def describe_requirements(kind: str, requirements: Mapping[str, str]) -> str:
    """Render ``requirements`` for toolchain ``kind`` as ``kind [ key='value' ... ]``."""

    if not requirements:
        return f"{kind} [ any ]"
    rendered = " ".join(f"{key}='{value}'" for key, value in requirements.items())
    return f"{kind} [ {rendered} ]"


class NoMatchingToolchainError(ToolchainError):
    """Raised when no configured or discovered toolchain satisfies a requirement set."""

    def __init__(self, requirements: Mapping[str, str]) -> None:
        self.requirements = dict(requirements)
        super().__init__(
            "Cannot find a matching toolchain for the following requirements: "
            f"{describe_requirements('jdk', self.requirements)}\n"
            "Define the required toolchains in a toolchains file or install a matching JDK.",
        )


class UnmatchedToolchainsError(ToolchainError):
    """Raised when one or more required toolchain kinds have no configured match."""

    def __init__(self, unmatched: Mapping[str, Mapping[str, str]]) -> None:
        self.unmatched = {kind: dict(requirements) for kind, requirements in unmatched.items()}
        lines = [describe_requirements(kind, requirements) for kind, requirements in self.unmatched.items()]
        super().__init__(
            "Cannot find matching toolchain definitions for the following toolchain types:\n"
            + "\n".join(lines)
            + "\nPlease make sure you define the required toolchains in your ~/.m2/toolchains.xml file.",
        )


class ToolchainsFileError(ToolchainError):
    """Raised when a toolchains definitions file cannot be read or written."""


class SettingsError(ToolchainError, ValueError):
    """Raised when configuration input is invalid."""


__all__ = [
    "NoMatchingToolchainError",
    "SettingsError",
    "ToolchainError",
    "ToolchainsFileError",
    "UnmatchedToolchainsError",
    "UnsupportedComparatorError",
    "describe_requirements",
]
