# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Introspect JDK installations by asking their launcher for its properties."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Final, Protocol

from ..constants import PROBED_PROPERTIES, VERSION
from ..models import ToolchainModel
from ..platform.paths import find_launcher
from ..subprocess_utils import output_lines, run_command

LOGGER = logging.getLogger(__name__)

PROPERTIES_COMMAND: Final[tuple[str, ...]] = ("-XshowSettings:properties", "-version")

CommandRunner = Callable[..., subprocess.CompletedProcess[str]]


class ToolchainProbe(Protocol):
    """Narrow seam between discovery and the expensive launcher invocation."""

    def probe(self, jdk_home: Path) -> ToolchainModel | None:
        """Return a model for ``jdk_home`` or ``None`` when it is not a usable JDK."""
        ...


def parse_properties(lines: Iterable[str]) -> dict[str, str]:
    """Extract the tracked ``java.*`` properties from launcher diagnostics.

    The first line declaring each property wins; ``java.vendor.url`` does not
    shadow ``java.vendor`` because keys are compared exactly.

    Args:
        lines: Output of ``java -XshowSettings:properties -version``.

    Returns:
        dict[str, str]: Provides keys (without the ``java.`` prefix) mapped to
        their reported values, in probe order.
    """

    declared: dict[str, str] = {}
    for line in lines:
        key, separator, value = line.partition("=")
        if not separator:
            continue
        declared.setdefault(key.strip(), value.strip())
    return {name: declared[f"java.{name}"] for name in PROBED_PROPERTIES if f"java.{name}" in declared}


class JavaLauncherProbe:
    """Probe a JDK home by running ``bin/java -XshowSettings:properties -version``."""

    def __init__(self, *, timeout: float | None = None, runner: CommandRunner = run_command) -> None:
        self._timeout = timeout
        self._runner = runner

    def probe(self, jdk_home: Path) -> ToolchainModel | None:
        """Return the toolchain model describing ``jdk_home``.

        Args:
            jdk_home: Canonical JDK installation directory.

        Returns:
            ToolchainModel | None: Model carrying the parsed properties, or
            ``None`` when the launcher is missing, cannot run, or does not
            report ``java.version``.
        """

        LOGGER.debug("Computing model for %s", jdk_home)
        launcher = find_launcher(jdk_home)
        if launcher is None:
            LOGGER.debug("JDK toolchain discovered at %s will be ignored: unable to find java executable", jdk_home)
            return None
        command: Sequence[str] = (str(launcher), *PROPERTIES_COMMAND)
        try:
            completed = self._runner(command, timeout=self._timeout)
        except (OSError, ValueError, subprocess.SubprocessError) as exc:
            LOGGER.debug("JDK toolchain discovered at %s will be ignored: unable to execute java: %s", jdk_home, exc)
            return None
        properties = parse_properties(output_lines(completed))
        if VERSION not in properties:
            LOGGER.debug("JDK toolchain discovered at %s will be ignored: could not obtain java.version", jdk_home)
            return None
        return ToolchainModel.from_parts(jdk_home=jdk_home, provides=properties)


__all__ = ["JavaLauncherProbe", "PROPERTIES_COMMAND", "ToolchainProbe", "parse_properties"]
