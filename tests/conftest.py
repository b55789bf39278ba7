# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures building fake JDK installations."""

from __future__ import annotations

import stat
from collections.abc import Mapping
from pathlib import Path
from threading import Lock

import pytest

from jdk_toolchains.discovery.cache import CacheStore, InMemoryCacheStore, MetadataCache
from jdk_toolchains.discovery.discoverer import ToolchainDiscoverer
from jdk_toolchains.models import ToolchainModel
from jdk_toolchains.platform import OsFamily
from jdk_toolchains.platform.paths import install_roots


class FakeProbe:
    """Probe answering from a registry and recording every call."""

    def __init__(self, registry: Mapping[Path, dict[str, str]]) -> None:
        self._registry = registry
        self._lock = Lock()
        self.calls: list[Path] = []

    def probe(self, jdk_home: Path) -> ToolchainModel | None:
        with self._lock:
            self.calls.append(jdk_home)
        provides = self._registry.get(jdk_home)
        if provides is None:
            return None
        return ToolchainModel.from_parts(jdk_home=jdk_home, provides=provides)


class CountingStore(InMemoryCacheStore):
    """In-memory store recording how often it is loaded and saved."""

    def __init__(self, toolchains=()) -> None:
        super().__init__(toolchains)
        self._count_lock = Lock()
        self.loads = 0
        self.saves = 0

    def load(self) -> list[ToolchainModel]:
        with self._count_lock:
            self.loads += 1
        return super().load()

    def save(self, toolchains) -> None:
        with self._count_lock:
            self.saves += 1
        super().save(toolchains)


class JdkFactory:
    """Create fake JDK trees under a temporary home directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.home = root / "home"
        self.home.mkdir()
        self.registry: dict[Path, dict[str, str]] = {}
        self.probe = FakeProbe(self.registry)

    def create(
        self,
        name: str,
        version: str,
        *,
        vendor: str = "Acme",
        parent: Path | None = None,
        release: bool = True,
        compiler: bool = True,
    ) -> Path:
        """Create ``<parent>/<name>`` looking like a JDK and register its probe answer."""

        home = (parent or self.root / "jdks") / name
        bin_dir = home / "bin"
        bin_dir.mkdir(parents=True)
        if compiler:
            (bin_dir / "javac").write_text("", encoding="utf-8")
        launcher = bin_dir / "java"
        launcher.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR)
        if release:
            (home / "release").write_text(
                f'JAVA_VERSION="{version}"\nIMPLEMENTOR="{vendor}"\nJAVA_RUNTIME_VERSION="{version}+7"\n',
                encoding="utf-8",
            )
        canonical = home.resolve()
        self.registry[canonical] = {"version": version, "vendor": vendor, "runtime.name": "Fake Runtime"}
        return canonical

    def discoverer(
        self,
        *,
        environ: Mapping[str, str] | None = None,
        current_home: Path | None = None,
        store: CacheStore | None = None,
        probe: FakeProbe | None = None,
    ) -> ToolchainDiscoverer:
        return ToolchainDiscoverer(
            cache=MetadataCache(store if store is not None else InMemoryCacheStore()),
            probe=probe or self.probe,
            environ=environ or {},
            user_home=self.home,
            os_family=OsFamily.LINUX,
            current_home=current_home,
            roots=self.roots(OsFamily.LINUX),
        )

    def roots(self, os_family: OsFamily) -> list[Path]:
        """Return the default install roots that live under the fake home."""

        return [root for root in install_roots(self.home, os_family) if self.home in root.parents]


@pytest.fixture
def jdks(tmp_path: Path) -> JdkFactory:
    """Return a factory creating fake JDK installations under ``tmp_path``."""

    return JdkFactory(tmp_path)


def make_model(version: str, vendor: str = "Acme", *, home: str | None = None, **extra: str) -> ToolchainModel:
    provides = {"version": version, "vendor": vendor, **extra}
    return ToolchainModel.from_parts(jdk_home=Path(home or f"/opt/jdk-{vendor}-{version}"), provides=provides)


@pytest.fixture
def counting_store():
    """Return a factory for in-memory cache stores that count loads and saves."""

    return CountingStore


@pytest.fixture
def model_factory():
    """Return a helper building standalone toolchain models."""

    return make_model
