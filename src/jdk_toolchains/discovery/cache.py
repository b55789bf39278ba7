# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persistent cache of probed toolchain metadata keyed by install path."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from threading import Lock, RLock
from typing import Protocol

from ..models import ToolchainModel
from ..persistence import toolchains_from_json, toolchains_to_json
from ..platform.paths import has_compiler
from ..ranking import sort_toolchains

LOGGER = logging.getLogger(__name__)

_PERSISTED_ORDER = "version,vendor"


class CacheStore(Protocol):
    """Backend persisting cache entries between processes."""

    def load(self) -> list[ToolchainModel]:
        """Return persisted entries, raising ``OSError``/``ValueError`` on failure."""
        ...

    def save(self, toolchains: Sequence[ToolchainModel]) -> None:
        """Persist ``toolchains``, raising ``OSError`` on failure."""
        ...


class JsonFileCacheStore:
    """Store cache entries as a JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[ToolchainModel]:
        if not self.path.is_file():
            return []
        return toolchains_from_json(self.path.read_text(encoding="utf-8"))

    def save(self, toolchains: Sequence[ToolchainModel]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(toolchains_to_json(toolchains), encoding="utf-8")


class InMemoryCacheStore:
    """Keep cache entries in process memory; used when persistence is disabled."""

    def __init__(self, toolchains: Sequence[ToolchainModel] = ()) -> None:
        self._toolchains = list(toolchains)
        self._lock = RLock()

    def load(self) -> list[ToolchainModel]:
        with self._lock:
            return list(self._toolchains)

    def save(self, toolchains: Sequence[ToolchainModel]) -> None:
        with self._lock:
            self._toolchains = list(toolchains)


class MetadataCache:
    """Amortize launcher probes across invocations.

    Entries are loaded lazily on first access. Concurrent first callers
    trigger a single load. Probes run outside the mutation lock so several
    paths can be computed in parallel.
    """

    def __init__(self, store: CacheStore, *, validator: Callable[[Path], bool] = has_compiler) -> None:
        self._store = store
        self._validator = validator
        self._load_lock = Lock()
        self._lock = RLock()
        self._entries: dict[Path, ToolchainModel] | None = None
        self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    def _ensure_loaded(self) -> dict[Path, ToolchainModel]:
        if self._entries is None:
            with self._load_lock:
                if self._entries is None:
                    self._entries = self._load()
        return self._entries

    def _load(self) -> dict[Path, ToolchainModel]:
        try:
            persisted = self._store.load()
        except (OSError, ValueError) as exc:
            LOGGER.warning("Error reading toolchains cache: %s", exc)
            return {}
        entries: dict[Path, ToolchainModel] = {}
        for model in persisted:
            if not self._validator(model.install_path):
                LOGGER.debug("Dropping cached toolchain %s: no javac found", model.install_path)
                self._dirty = True
                continue
            entries[model.install_path] = model.without_transient()
        return entries

    def get(self, path: Path) -> ToolchainModel | None:
        entries = self._ensure_loaded()
        with self._lock:
            return entries.get(path)

    def get_or_compute(
        self,
        path: Path,
        compute: Callable[[Path], ToolchainModel | None],
    ) -> ToolchainModel | None:
        """Return the cached model for ``path`` or compute and remember it.

        Args:
            path: Canonical install path used as the cache key.
            compute: Probe invoked on a cache miss.

        Returns:
            ToolchainModel | None: Cached or freshly probed model; ``None``
            when the probe rejected the path (nothing is cached then).
        """

        cached = self.get(path)
        if cached is not None:
            return cached
        model = compute(path)
        if model is None:
            return None
        entries = self._ensure_loaded()
        with self._lock:
            entries[path] = model.without_transient()
            self._dirty = True
        return model

    def entries(self) -> list[ToolchainModel]:
        entries = self._ensure_loaded()
        with self._lock:
            return list(entries.values())

    def invalidate(self) -> None:
        """Forget every entry so the next pass probes all candidates again."""

        with self._load_lock, self._lock:
            self._entries = {}
            self._dirty = True

    def save(self) -> bool:
        """Persist entries when they changed since the last load or save.

        Returns:
            bool: ``True`` when the store was written.
        """

        with self._lock:
            if not self._dirty or self._entries is None:
                return False
            ordered = sort_toolchains((model.without_transient() for model in self._entries.values()), _PERSISTED_ORDER)
            try:
                self._store.save(ordered)
            except OSError as exc:
                LOGGER.warning("Error writing toolchains cache: %s", exc)
                return False
            self._dirty = False
            return True


__all__ = ["CacheStore", "InMemoryCacheStore", "JsonFileCacheStore", "MetadataCache"]
