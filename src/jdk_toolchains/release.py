# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Readers for the ``release`` metadata file shipped at the root of a JDK."""

from __future__ import annotations

from pathlib import Path

from .constants import RELEASE_FILENAME, RELEASE_PROPERTIES


def read_release_file(jdk_home: Path) -> dict[str, str]:
    """Parse ``<jdk_home>/release`` into a key/value mapping.

    Args:
        jdk_home: JDK installation directory.

    Returns:
        dict[str, str]: Properties with surrounding quotes removed.

    Raises:
        OSError: If the file is missing or unreadable.
    """

    text = (jdk_home / RELEASE_FILENAME).read_text(encoding="utf-8", errors="replace")
    properties: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
            value = value[1:-1]
        properties[key.strip()] = value
    return properties


def release_provides(properties: dict[str, str]) -> dict[str, str]:
    """Map ``release`` properties onto toolchain provides keys."""

    return {
        provides_key: properties[release_key]
        for release_key, provides_key in RELEASE_PROPERTIES
        if properties.get(release_key)
    }


__all__ = ["read_release_file", "release_provides"]
