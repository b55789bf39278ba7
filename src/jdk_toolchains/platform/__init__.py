# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Operating-system helpers used by toolchain discovery."""

from __future__ import annotations

import sys
from enum import Enum


class OsFamily(str, Enum):
    """Operating-system families with distinct JDK install layouts."""

    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"


def detect_os_family(platform_name: str | None = None) -> OsFamily:
    """Return the OS family for ``platform_name`` (defaults to :data:`sys.platform`).

    Args:
        platform_name: Platform identifier such as ``"darwin"`` or ``"win32"``.

    Returns:
        OsFamily: Family used to pick install roots and executable names.
    """

    name = (platform_name or sys.platform).lower()
    if name.startswith(("darwin", "mac")):
        return OsFamily.MAC
    if name.startswith(("win", "cygwin", "msys")):
        return OsFamily.WINDOWS
    return OsFamily.LINUX


__all__ = ["OsFamily", "detect_os_family"]
