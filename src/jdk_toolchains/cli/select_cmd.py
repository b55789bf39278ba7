# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command selecting the JDK toolchain matching a set of constraints."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Annotated

import typer

from ..constants import USER_TOOLCHAINS_RELATIVE_PATH
from ..errors import ToolchainError
from ..models import JdkConstraints, SelectionStatus, UsageMode
from ..persistence import read_toolchains
from ..selection import ToolchainSelector
from .shared import CLIError, build_cli_logger, build_discoverer, exit_with, load_settings, options_from


def _parse_mode(raw: str | None) -> UsageMode | None:
    if raw is None:
        return None
    try:
        return UsageMode.from_raw(raw)
    except ValueError as exc:
        raise CLIError(str(exc)) from exc


def select_command(
    ctx: typer.Context,
    version: Annotated[str | None, typer.Option("--version", help="Version or range, e.g. 17 or [17,21).")] = None,
    runtime_name: Annotated[str | None, typer.Option("--runtime-name", help="Exact runtime name.")] = None,
    runtime_version: Annotated[str | None, typer.Option("--runtime-version", help="Exact runtime version.")] = None,
    vendor: Annotated[str | None, typer.Option("--vendor", help="Exact vendor name.")] = None,
    env: Annotated[
        str | None,
        typer.Option("--env", help="Name of a JAVA*_HOME variable that must point to the JDK."),
    ] = None,
    mode: Annotated[str | None, typer.Option("--mode", help="Current JDK usage: IfMatch, IfSame or Never.")] = None,
    toolchains_file: Annotated[
        Path | None,
        typer.Option("--toolchains", help="Definitions file listing configured toolchains."),
    ] = None,
    discover: Annotated[
        bool | None,
        typer.Option("--discover/--no-discover", help="Fall back to discovery when nothing configured matches."),
    ] = None,
    comparator: Annotated[
        str | None,
        typer.Option("--comparator", "-c", help="Ranking criteria applied to discovered toolchains."),
    ] = None,
    export: Annotated[
        bool,
        typer.Option("--export", help="Print an 'export JAVA_HOME=...' line for the selected toolchain."),
    ] = False,
) -> None:
    """Select the JDK toolchain satisfying the given constraints."""

    options = options_from(ctx)
    logger = build_cli_logger(options)
    constraints = JdkConstraints(
        version=version,
        runtime_name=runtime_name,
        runtime_version=runtime_version,
        vendor=vendor,
        env=env,
    )
    if not constraints.to_requirements():
        logger.warn("No JDK constraints given; nothing to select.")
        return
    try:
        settings = load_settings({"mode": _parse_mode(mode), "discover": discover, "comparator": comparator})
        path = (toolchains_file or Path.home() / USER_TOOLCHAINS_RELATIVE_PATH).expanduser()
        configured = read_toolchains(path)
        result = ToolchainSelector(build_discoverer(settings)).select(
            constraints,
            mode=settings.mode,
            configured=configured,
            discover=settings.discover,
            comparator=settings.comparator,
        )
    except (CLIError, ToolchainError) as exc:
        raise exit_with(logger, exc) from exc

    if result.status is SelectionStatus.USE_CURRENT:
        logger.ok(f"Not using an external toolchain: the current JDK satisfies the requirements ({result.toolchain}).")
        return
    source = result.source.value if result.source is not None else "unknown"
    logger.ok(f"Selected {source} JDK toolchain: {result.toolchain}")
    if export and result.toolchain is not None:
        logger.echo(f"export JAVA_HOME={shlex.quote(str(result.toolchain.install_path))}")


__all__ = ["select_command"]
