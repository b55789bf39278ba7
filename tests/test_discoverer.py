# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests for the discovery engine."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from jdk_toolchains.errors import UnsupportedComparatorError


class ExplodingProbe:
    def probe(self, jdk_home: Path):
        raise RuntimeError(f"boom at {jdk_home}")


def _install_three(jdks) -> tuple[Path, Path, Path]:
    root = jdks.home / ".jdks"
    return (
        jdks.create("temurin-17", "17.0.9", vendor="Eclipse Adoptium", parent=root),
        jdks.create("zulu-22", "22.0.1", vendor="Azul Systems, Inc.", parent=root),
        jdks.create("corretto-21", "21.0.1", vendor="Amazon.com Inc.", parent=root),
    )


def test_discover_ranks_and_flags(jdks) -> None:
    jdk17, jdk22, jdk21 = _install_three(jdks)
    discoverer = jdks.discoverer(environ={"JAVA17_HOME": str(jdk17)}, current_home=jdk21)

    found = discoverer.discover()

    assert [model.install_path for model in found] == [jdk21, jdk17, jdk22]
    assert found[0].provides["current"] == "true"
    assert found[0].provides["lts"] == "true"
    assert found[1].provides["env"] == "JAVA17_HOME"
    assert "lts" not in found[2].provides


def test_discover_by_version_only(jdks) -> None:
    jdk17, jdk22, jdk21 = _install_three(jdks)

    found = jdks.discoverer().discover("version")

    assert [model.version for model in found] == ["22.0.1", "21.0.1", "17.0.9"]


def test_repeated_discovery_is_stable_and_probes_once(jdks) -> None:
    _install_three(jdks)
    discoverer = jdks.discoverer()

    first = discoverer.discover()
    second = discoverer.discover()

    assert first == second
    assert len(jdks.probe.calls) == 3


def test_shared_store_avoids_probing(jdks, counting_store) -> None:
    _install_three(jdks)
    store = counting_store()
    jdks.discoverer(store=store).discover()
    probes_before = len(jdks.probe.calls)

    found = jdks.discoverer(store=store).discover()

    assert len(found) == 3
    assert len(jdks.probe.calls) == probes_before
    assert store.saves == 1
    assert all("lts" not in model.provides for model in store.load())


def test_refresh_probes_again(jdks) -> None:
    _install_three(jdks)
    discoverer = jdks.discoverer()
    discoverer.discover()

    discoverer.refresh()
    discoverer.discover()

    assert len(jdks.probe.calls) == 6


def test_unknown_comparator_fails_before_probing(jdks) -> None:
    _install_three(jdks)

    with pytest.raises(UnsupportedComparatorError):
        jdks.discoverer().discover("version,foo")

    assert jdks.probe.calls == []


def test_probe_crash_yields_empty_list(jdks, caplog) -> None:
    _install_three(jdks)
    discoverer = jdks.discoverer(probe=ExplodingProbe())

    with caplog.at_level(logging.WARNING, logger="jdk_toolchains"):
        assert discoverer.discover() == []

    assert "Error discovering toolchains" in caplog.text


def test_unprobeable_homes_are_skipped(jdks) -> None:
    jdk17, _jdk22, _jdk21 = _install_three(jdks)
    del jdks.registry[jdk17]

    found = jdks.discoverer().discover()

    assert jdk17 not in {model.install_path for model in found}
    assert len(found) == 2


def test_current_runtime_toolchain_reads_release_file(jdks) -> None:
    home = jdks.create("current", "21.0.1", vendor="Eclipse Adoptium")
    discoverer = jdks.discoverer(environ={"JAVA_HOME": str(home)}, current_home=home)

    current = discoverer.current_runtime_toolchain()

    assert current is not None
    assert current.install_path == home
    assert current.provides["version"] == "21.0.1"
    assert current.provides["vendor"] == "Eclipse Adoptium"
    assert current.provides["runtime.version"] == "21.0.1+7"
    assert current.provides["current"] == "true"
    assert current.provides["env"] == "JAVA_HOME"
    assert current.provides["lts"] == "true"
    assert jdks.probe.calls == []


def test_current_runtime_toolchain_requires_release_file(jdks) -> None:
    home = jdks.create("current", "21.0.1", release=False)

    assert jdks.discoverer(current_home=home).current_runtime_toolchain() is None


def test_current_runtime_toolchain_absent(jdks) -> None:
    assert jdks.discoverer().current_runtime_toolchain() is None
