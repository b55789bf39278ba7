# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings resolution and engine construction."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import CACHE_RELATIVE_PATH, DISPLAY_COMPARATOR
from .discovery.cache import CacheStore, InMemoryCacheStore, JsonFileCacheStore, MetadataCache
from .discovery.discoverer import ToolchainDiscoverer
from .discovery.probe import JavaLauncherProbe, ToolchainProbe
from .errors import SettingsError
from .models import UsageMode
from .platform import OsFamily, detect_os_family
from .platform.paths import current_runtime_home
from .ranking import parse_comparator_spec

_CACHE_ENV: Final[str] = "JDK_TOOLCHAINS_CACHE"
_COMPARATOR_ENV: Final[str] = "JDK_TOOLCHAINS_COMPARATOR"
_MODE_ENV: Final[str] = "JDK_TOOLCHAINS_MODE"
_DISCOVER_ENV: Final[str] = "JDK_TOOLCHAINS_DISCOVER"
_WORKERS_ENV: Final[str] = "JDK_TOOLCHAINS_WORKERS"
_TIMEOUT_ENV: Final[str] = "JDK_TOOLCHAINS_PROBE_TIMEOUT"

_DISABLED_CACHE_TOKENS: Final[frozenset[str]] = frozenset({"none", "off", "memory"})
_TRUE_TOKENS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def default_cache_file(user_home: Path | None = None) -> Path:
    """Return the home-relative location of the persistent metadata cache."""

    return (user_home or Path.home()) / CACHE_RELATIVE_PATH


class DiscoverySettings(BaseModel):
    """Effective settings for discovery and selection.

    Attributes:
        cache_file: JSON cache location; ``None`` keeps the cache in memory.
        comparator: Ranking criteria applied to discovered toolchains.
        discover: Whether selection may fall back to discovery.
        mode: Usage mode for the currently running JDK.
        max_workers: Upper bound on parallel probes, ``None`` for the
            executor default.
        probe_timeout: Seconds a probe may run; ``None`` waits indefinitely.
    """

    model_config = ConfigDict(frozen=True)

    cache_file: Path | None = Field(default_factory=default_cache_file)
    comparator: str = DISPLAY_COMPARATOR
    discover: bool = True
    mode: UsageMode = UsageMode.IF_MATCH
    max_workers: int | None = Field(default=None, ge=1)
    probe_timeout: float | None = Field(default=None, gt=0)


def _parse_bool(raw: str, *, source: str) -> bool:
    token = raw.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise SettingsError(f"{source} expects a boolean, got {raw!r}")


def _settings_from_environment(env: Mapping[str, str]) -> dict[str, object]:
    """Collect overrides declared through ``JDK_TOOLCHAINS_*`` variables.

    Args:
        env: Environment mapping to inspect.

    Returns:
        dict[str, object]: Field overrides keyed by settings attribute.

    Raises:
        SettingsError: If a variable carries an unusable value.
    """

    overrides: dict[str, object] = {}
    cache = env.get(_CACHE_ENV, "").strip()
    if cache:
        overrides["cache_file"] = None if cache.lower() in _DISABLED_CACHE_TOKENS else Path(cache).expanduser()
    comparator = env.get(_COMPARATOR_ENV, "").strip()
    if comparator:
        overrides["comparator"] = comparator
    mode = env.get(_MODE_ENV, "").strip()
    if mode:
        try:
            overrides["mode"] = UsageMode.from_raw(mode)
        except ValueError as exc:
            raise SettingsError(f"{_MODE_ENV}: {exc}") from exc
    discover = env.get(_DISCOVER_ENV, "").strip()
    if discover:
        overrides["discover"] = _parse_bool(discover, source=_DISCOVER_ENV)
    workers = env.get(_WORKERS_ENV, "").strip()
    if workers:
        overrides["max_workers"] = workers
    timeout = env.get(_TIMEOUT_ENV, "").strip()
    if timeout:
        overrides["probe_timeout"] = timeout
    return overrides


def resolve_settings(
    overrides: Mapping[str, object] | None = None,
    *,
    env: Mapping[str, str] | None = None,
    user_home: Path | None = None,
) -> DiscoverySettings:
    """Return settings built from defaults, the environment, then ``overrides``.

    ``None`` values in ``overrides`` are ignored so unset CLI options do not
    mask environment values.

    Args:
        overrides: Explicit settings taking precedence over everything else.
        env: Environment mapping used instead of :data:`os.environ`.
        user_home: Home directory used for the default cache location.

    Returns:
        DiscoverySettings: Validated settings.

    Raises:
        SettingsError: If a value fails validation.
        UnsupportedComparatorError: If the comparator names an unknown criterion.
    """

    environment = os.environ if env is None else env
    values: dict[str, object] = {"cache_file": default_cache_file(user_home)}
    values.update(_settings_from_environment(environment))
    values.update({key: value for key, value in (overrides or {}).items() if value is not None})
    try:
        settings = DiscoverySettings.model_validate(values)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings: {exc}") from exc
    parse_comparator_spec(settings.comparator)
    return settings


def create_cache_store(settings: DiscoverySettings) -> CacheStore:
    if settings.cache_file is None:
        return InMemoryCacheStore()
    return JsonFileCacheStore(settings.cache_file)


def create_discoverer(
    settings: DiscoverySettings,
    *,
    environ: Mapping[str, str] | None = None,
    user_home: Path | None = None,
    os_family: OsFamily | None = None,
    probe: ToolchainProbe | None = None,
    store: CacheStore | None = None,
) -> ToolchainDiscoverer:
    """Build a discovery engine wired according to ``settings``.

    Args:
        settings: Effective settings.
        environ: Environment mapping, defaults to :data:`os.environ`.
        user_home: Home directory scanned for tool-manager installs.
        os_family: OS family, detected when omitted.
        probe: Probe replacing the launcher based default.
        store: Cache backend replacing the one derived from ``settings``.

    Returns:
        ToolchainDiscoverer: Engine owning a fresh metadata cache.
    """

    environment = dict(os.environ if environ is None else environ)
    return ToolchainDiscoverer(
        cache=MetadataCache(store if store is not None else create_cache_store(settings)),
        probe=probe if probe is not None else JavaLauncherProbe(timeout=settings.probe_timeout),
        environ=environment,
        user_home=user_home or Path.home(),
        os_family=os_family or detect_os_family(),
        current_home=current_runtime_home(environment),
        max_workers=settings.max_workers,
    )


__all__ = [
    "DiscoverySettings",
    "create_cache_store",
    "create_discoverer",
    "default_cache_file",
    "resolve_settings",
]
