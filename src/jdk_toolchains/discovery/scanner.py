# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Enumerate filesystem locations that look like JDK installations."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from threading import Lock

from ..constants import JAVA_HOME_PATTERN
from ..platform import OsFamily
from ..platform.paths import BUNDLE_HOME, canonical_path, has_compiler, install_roots

LOGGER = logging.getLogger(__name__)


def java_home_variables(environ: Mapping[str, str]) -> dict[str, str]:
    """Return environment variables named ``JAVA*_HOME`` with a non-empty value."""

    return {name: value for name, value in environ.items() if JAVA_HOME_PATTERN.match(name) and value}


def _children(root: Path) -> Iterator[Path]:
    try:
        if not root.is_dir():
            return
        entries = sorted(root.iterdir())
    except OSError:
        return
    for entry in entries:
        yield entry
        yield entry / BUNDLE_HOME


class LocationScanner:
    """Find candidate JDK homes and memoize the result for the scanner lifetime."""

    def __init__(
        self,
        *,
        environ: Mapping[str, str],
        user_home: Path,
        os_family: OsFamily,
        current_home: Path | None,
        roots: Sequence[Path] | None = None,
    ) -> None:
        self._environ = dict(environ)
        self._roots = tuple(roots) if roots is not None else install_roots(user_home, os_family)
        self._current_home = current_home
        self._lock = Lock()
        self._locations: frozenset[Path] | None = None

    def scan(self) -> frozenset[Path]:
        """Return canonical JDK homes that contain a ``javac`` compiler.

        The filesystem is only touched on the first call; later calls return
        the memoized set.

        Returns:
            frozenset[Path]: Deduplicated canonical installation paths.
        """

        if self._locations is None:
            with self._lock:
                if self._locations is None:
                    self._locations = frozenset(self._compute())
                    LOGGER.debug("Found %d possible JDKs: %s", len(self._locations), sorted(self._locations))
        return self._locations

    def _seeds(self) -> Iterator[Path]:
        if self._current_home is not None:
            yield self._current_home
        for value in java_home_variables(self._environ).values():
            yield Path(value).expanduser()
        for root in self._roots:
            yield from _children(root)

    def _compute(self) -> set[Path]:
        return {canonical_path(candidate) for candidate in self._seeds() if has_compiler(candidate)}


__all__ = ["LocationScanner", "java_home_variables"]
