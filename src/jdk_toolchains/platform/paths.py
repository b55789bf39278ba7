# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers for locating JDK installations and their executables."""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from . import OsFamily

COMPILER: Final[str] = "javac"
LAUNCHER: Final[str] = "java"
BUNDLE_HOME: Final[Path] = Path("Contents") / "Home"

# Directories populated by JDK managers and IDEs, relative to the user home.
_TOOL_MANAGER_ROOTS: Final[tuple[str, ...]] = (
    ".jdks",
    ".m2/jdks",
    ".sdkman/candidates/java",
    ".gradle/jdks",
    ".jenv/versions",
    ".jbang/cache/jdks",
    ".asdf/installs",
    ".asdf/installs/java",
    ".jabba/jdk",
)


def canonical_path(path: Path) -> Path:
    """Return ``path`` with symbolic links resolved.

    Paths that do not exist resolve their closest existing ancestor and
    re-append the remaining components.

    Args:
        path: Path to canonicalize.

    Returns:
        Path: Absolute, symlink-free representation of ``path``.
    """

    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        parent = path.parent
        if parent == path:
            return path.absolute()
        return canonical_path(parent) / path.name


def _bin_candidates(home: Path, name: str) -> tuple[Path, Path]:
    bin_dir = home / "bin"
    return bin_dir / name, bin_dir / f"{name}.exe"


def has_compiler(home: Path) -> bool:
    """Return ``True`` when ``home`` ships a ``javac`` compiler."""

    try:
        return any(candidate.exists() for candidate in _bin_candidates(home, COMPILER))
    except OSError:
        return False


def find_launcher(home: Path) -> Path | None:
    """Return the executable ``java`` launcher under ``home`` when present."""

    for candidate in _bin_candidates(home, LAUNCHER):
        try:
            if candidate.is_file() and os.access(candidate, os.X_OK):
                return candidate
        except OSError:
            continue
    return None


def install_roots(user_home: Path, os_family: OsFamily) -> tuple[Path, ...]:
    """Return well-known directories whose children may be JDK installations.

    Args:
        user_home: Home directory of the current user.
        os_family: Operating-system family selecting the system-wide roots.

    Returns:
        tuple[Path, ...]: Candidate install roots, existing or not.
    """

    roots = [user_home / relative for relative in _TOOL_MANAGER_ROOTS]
    if os_family is OsFamily.MAC:
        roots.append(Path("/Library/Java/JavaVirtualMachines"))
        roots.append(user_home / "Library" / "Java" / "JavaVirtualMachines")
    elif os_family is OsFamily.WINDOWS:
        roots.append(Path("C:\\Program Files\\Java"))
    else:
        roots.extend(Path(entry) for entry in ("/usr/jdk", "/usr/java", "/opt/java", "/usr/lib/jvm"))
    return tuple(roots)


def current_runtime_home(environ: Mapping[str, str]) -> Path | None:
    """Return the canonical home of the JDK the current environment runs with.

    ``JAVA_HOME`` wins; otherwise the ``java`` launcher found on ``PATH`` is
    resolved through symlinks and its grandparent directory is used.

    Args:
        environ: Environment mapping consulted for ``JAVA_HOME`` and ``PATH``.

    Returns:
        Path | None: Canonical JDK home, ``None`` when no runtime is visible.
    """

    java_home = environ.get("JAVA_HOME")
    if java_home:
        return canonical_path(Path(java_home).expanduser())
    launcher = shutil.which(LAUNCHER, path=environ.get("PATH"))
    if launcher is None:
        return None
    resolved = canonical_path(Path(launcher))
    if resolved.parent.name != "bin":
        return None
    return resolved.parent.parent


__all__ = [
    "BUNDLE_HOME",
    "COMPILER",
    "LAUNCHER",
    "canonical_path",
    "current_runtime_home",
    "find_launcher",
    "has_compiler",
    "install_roots",
]
