# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover, cache, rank and select installed JDK toolchains."""

from __future__ import annotations

from .config import DiscoverySettings, create_discoverer, resolve_settings
from .constants import DISPLAY_COMPARATOR, GENERATE_COMPARATOR
from .discovery import ToolchainDiscoverer
from .errors import (
    NoMatchingToolchainError,
    SettingsError,
    ToolchainError,
    ToolchainsFileError,
    UnmatchedToolchainsError,
    UnsupportedComparatorError,
)
from .matching import matches
from .models import (
    JdkConstraints,
    PersistedToolchains,
    RequirementSet,
    SelectionResult,
    SelectionSource,
    SelectionStatus,
    ToolchainModel,
    UsageMode,
)
from .persistence import add_toolchain, read_toolchains, write_toolchains
from .ranking import build_comparator, compare_versions, sort_toolchains
from .selection import ToolchainSelector, select_toolchains

__all__ = [
    "DISPLAY_COMPARATOR",
    "DiscoverySettings",
    "GENERATE_COMPARATOR",
    "JdkConstraints",
    "NoMatchingToolchainError",
    "PersistedToolchains",
    "RequirementSet",
    "SelectionResult",
    "SelectionSource",
    "SelectionStatus",
    "SettingsError",
    "ToolchainDiscoverer",
    "ToolchainError",
    "ToolchainModel",
    "ToolchainSelector",
    "ToolchainsFileError",
    "UnmatchedToolchainsError",
    "UnsupportedComparatorError",
    "UsageMode",
    "add_toolchain",
    "build_comparator",
    "compare_versions",
    "create_discoverer",
    "matches",
    "read_toolchains",
    "resolve_settings",
    "select_toolchains",
    "sort_toolchains",
    "write_toolchains",
]
