# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Toolchain discovery: scanning, probing, caching and flagging."""

from __future__ import annotations

from .cache import CacheStore, InMemoryCacheStore, JsonFileCacheStore, MetadataCache
from .discoverer import ToolchainDiscoverer
from .flags import FlagAnnotator, is_lts_version
from .probe import JavaLauncherProbe, ToolchainProbe, parse_properties
from .scanner import LocationScanner, java_home_variables

__all__ = [
    "CacheStore",
    "FlagAnnotator",
    "InMemoryCacheStore",
    "JavaLauncherProbe",
    "JsonFileCacheStore",
    "LocationScanner",
    "MetadataCache",
    "ToolchainDiscoverer",
    "ToolchainProbe",
    "is_lts_version",
    "java_home_variables",
    "parse_properties",
]
