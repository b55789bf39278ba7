# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Constants shared across toolchain discovery, ranking and selection."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

TOOLCHAIN_KIND_JDK: Final[str] = "jdk"

VERSION: Final[str] = "version"
RUNTIME_NAME: Final[str] = "runtime.name"
RUNTIME_VERSION: Final[str] = "runtime.version"
VENDOR: Final[str] = "vendor"
VENDOR_VERSION: Final[str] = "vendor.version"
CURRENT: Final[str] = "current"
LTS: Final[str] = "lts"
ENV: Final[str] = "env"

PROBED_PROPERTIES: Final[tuple[str, ...]] = (
    VERSION,
    RUNTIME_NAME,
    RUNTIME_VERSION,
    VENDOR,
    VENDOR_VERSION,
)
TRANSIENT_PROPERTIES: Final[frozenset[str]] = frozenset({CURRENT, LTS, ENV})
SORTED_PROVIDES: Final[tuple[str, ...]] = (*PROBED_PROPERTIES, CURRENT, LTS, ENV)

LTS_VERSIONS: Final[tuple[str, ...]] = ("1.8", "11", "17", "21", "25")

JAVA_HOME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^JAVA.*_HOME$")

GENERATE_COMPARATOR: Final[str] = "lts,version,vendor"
DISPLAY_COMPARATOR: Final[str] = "lts,current,env,version,vendor"

CACHE_RELATIVE_PATH: Final[Path] = Path(".m2") / "discovered-jdk-toolchains-cache.json"
USER_TOOLCHAINS_RELATIVE_PATH: Final[Path] = Path(".m2") / "toolchains.xml"

# Maps keys of a JDK ``release`` file onto provides keys.
RELEASE_FILENAME: Final[str] = "release"
RELEASE_PROPERTIES: Final[tuple[tuple[str, str], ...]] = (
    ("JAVA_VERSION", VERSION),
    ("JAVA_RUNTIME_VERSION", RUNTIME_VERSION),
    ("IMPLEMENTOR", VENDOR),
    ("IMPLEMENTOR_VERSION", VENDOR_VERSION),
)

__all__ = [
    "CACHE_RELATIVE_PATH",
    "CURRENT",
    "DISPLAY_COMPARATOR",
    "ENV",
    "GENERATE_COMPARATOR",
    "JAVA_HOME_PATTERN",
    "LTS",
    "LTS_VERSIONS",
    "PROBED_PROPERTIES",
    "RELEASE_FILENAME",
    "RELEASE_PROPERTIES",
    "RUNTIME_NAME",
    "RUNTIME_VERSION",
    "SORTED_PROVIDES",
    "TOOLCHAIN_KIND_JDK",
    "TRANSIENT_PROPERTIES",
    "USER_TOOLCHAINS_RELATIVE_PATH",
    "VENDOR",
    "VENDOR_VERSION",
    "VERSION",
]
