# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Annotate toolchains with ranking flags that are recomputed every pass."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from ..constants import CURRENT, ENV, LTS, LTS_VERSIONS, TRANSIENT_PROPERTIES, VERSION
from ..models import ToolchainModel
from ..platform.paths import canonical_path
from .scanner import java_home_variables


def is_lts_version(version: str | None, lts_versions: Iterable[str] = LTS_VERSIONS) -> bool:
    """Return ``True`` when ``version`` is, or starts with, an LTS release."""

    if not version:
        return False
    return any(version == lts or version.startswith(f"{lts}.") for lts in lts_versions)


def env_pointers(environ: Mapping[str, str]) -> dict[Path, list[str]]:
    """Group ``JAVA*_HOME`` variable names by the canonical path they point to."""

    pointers: dict[Path, list[str]] = {}
    for name, value in sorted(java_home_variables(environ).items()):
        pointers.setdefault(canonical_path(Path(value).expanduser()), []).append(name)
    return pointers


class FlagAnnotator:
    """Add ``current``, ``env`` and ``lts`` attributes for one discovery pass."""

    def __init__(self, *, current_home: Path | None, environ: Mapping[str, str]) -> None:
        self._current_home = current_home
        self._pointers = env_pointers(environ)

    def annotate(self, model: ToolchainModel) -> ToolchainModel:
        """Return a copy of ``model`` carrying freshly computed flags.

        Flags inherited from a cached entry are discarded first.
        """

        flags: dict[str, str] = {}
        if self._current_home is not None and model.install_path == self._current_home:
            flags[CURRENT] = "true"
        names = self._pointers.get(model.install_path)
        if names:
            flags[ENV] = ",".join(names)
        if is_lts_version(model.provides.get(VERSION)):
            flags[LTS] = "true"
        return model.with_provides(flags, drop=TRANSIENT_PROPERTIES)


__all__ = ["FlagAnnotator", "env_pointers", "is_lts_version"]
