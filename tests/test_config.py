# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for settings resolution and engine wiring."""

from __future__ import annotations

from pathlib import Path

import pytest

from jdk_toolchains.config import create_cache_store, create_discoverer, default_cache_file, resolve_settings
from jdk_toolchains.discovery.cache import InMemoryCacheStore, JsonFileCacheStore
from jdk_toolchains.errors import SettingsError, UnsupportedComparatorError
from jdk_toolchains.models import UsageMode
from jdk_toolchains.platform import OsFamily


def test_defaults(tmp_path: Path) -> None:
    settings = resolve_settings(env={}, user_home=tmp_path)

    assert settings.cache_file == tmp_path / ".m2" / "discovered-jdk-toolchains-cache.json"
    assert settings.cache_file == default_cache_file(tmp_path)
    assert settings.comparator == "lts,current,env,version,vendor"
    assert settings.mode is UsageMode.IF_MATCH
    assert settings.discover
    assert settings.max_workers is None
    assert settings.probe_timeout is None


def test_environment_overrides(tmp_path: Path) -> None:
    env = {
        "JDK_TOOLCHAINS_CACHE": str(tmp_path / "cache.json"),
        "JDK_TOOLCHAINS_COMPARATOR": "version,vendor",
        "JDK_TOOLCHAINS_MODE": "never",
        "JDK_TOOLCHAINS_DISCOVER": "no",
        "JDK_TOOLCHAINS_WORKERS": "4",
        "JDK_TOOLCHAINS_PROBE_TIMEOUT": "2.5",
    }

    settings = resolve_settings(env=env, user_home=tmp_path)

    assert settings.cache_file == tmp_path / "cache.json"
    assert settings.comparator == "version,vendor"
    assert settings.mode is UsageMode.NEVER
    assert not settings.discover
    assert settings.max_workers == 4
    assert settings.probe_timeout == 2.5


@pytest.mark.parametrize("token", ["none", "OFF", "memory"])
def test_cache_can_be_disabled(tmp_path: Path, token: str) -> None:
    settings = resolve_settings(env={"JDK_TOOLCHAINS_CACHE": token}, user_home=tmp_path)

    assert settings.cache_file is None
    assert isinstance(create_cache_store(settings), InMemoryCacheStore)


def test_explicit_overrides_win_and_none_is_ignored(tmp_path: Path) -> None:
    env = {"JDK_TOOLCHAINS_COMPARATOR": "version", "JDK_TOOLCHAINS_MODE": "IfSame"}

    settings = resolve_settings({"comparator": "vendor", "mode": None}, env=env, user_home=tmp_path)

    assert settings.comparator == "vendor"
    assert settings.mode is UsageMode.IF_SAME


@pytest.mark.parametrize(
    "env",
    [
        {"JDK_TOOLCHAINS_MODE": "sometimes"},
        {"JDK_TOOLCHAINS_DISCOVER": "maybe"},
        {"JDK_TOOLCHAINS_WORKERS": "0"},
        {"JDK_TOOLCHAINS_PROBE_TIMEOUT": "soon"},
    ],
)
def test_invalid_values_raise_settings_error(tmp_path: Path, env: dict[str, str]) -> None:
    with pytest.raises(SettingsError):
        resolve_settings(env=env, user_home=tmp_path)


def test_unknown_comparator_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedComparatorError):
        resolve_settings({"comparator": "lts,fastest"}, env={}, user_home=tmp_path)


def test_create_discoverer_wires_settings(tmp_path: Path, jdks) -> None:
    home = jdks.create("current", "21.0.1")
    settings = resolve_settings(env={}, user_home=tmp_path)

    discoverer = create_discoverer(
        settings,
        environ={"JAVA_HOME": str(home)},
        user_home=jdks.home,
        os_family=OsFamily.LINUX,
    )

    assert discoverer.current_home == home
    assert isinstance(create_cache_store(settings), JsonFileCacheStore)
    assert discoverer.current_runtime_toolchain().version == "21.0.1"


def test_create_discoverer_accepts_probe_and_store(tmp_path: Path, jdks, counting_store) -> None:
    home = jdks.create("pointed", "17.0.9")
    store = counting_store()
    settings = resolve_settings({"max_workers": 2}, env={"JDK_TOOLCHAINS_CACHE": "none"}, user_home=tmp_path)

    discoverer = create_discoverer(
        settings,
        environ={"JAVA17_HOME": str(home)},
        user_home=jdks.home,
        os_family=OsFamily.LINUX,
        probe=jdks.probe,
        store=store,
    )
    found = discoverer.discover()

    assert [model.install_path for model in found if model.install_path == home] == [home]
    assert store.saves == 1
