# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command checking configured toolchains of several kinds at once."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..constants import USER_TOOLCHAINS_RELATIVE_PATH
from ..errors import ToolchainError
from ..persistence import read_toolchains
from ..selection import select_toolchains
from .shared import CLIError, build_cli_logger, exit_with, options_from


def _parse_requirements(values: list[str]) -> dict[str, dict[str, str]]:
    """Group ``KIND[:KEY=VALUE]`` options into requirement sets per kind.

    Repeating a kind adds one more requirement to it, so values may contain
    commas, as in ``jdk:version=[17,21)``.

    Raises:
        CLIError: If an option has no kind or a requirement lacks ``=``.
    """

    requirements: dict[str, dict[str, str]] = {}
    for raw in values:
        kind, separator, requirement = raw.partition(":")
        kind = kind.strip()
        if not kind:
            raise CLIError(f"Invalid requirement {raw!r}: expected KIND[:KEY=VALUE]")
        params = requirements.setdefault(kind, {})
        if not separator:
            continue
        key, equals, value = requirement.partition("=")
        if not equals or not key.strip():
            raise CLIError(f"Invalid requirement {raw!r}: expected KIND:KEY=VALUE")
        params[key.strip()] = value.strip()
    return requirements


def toolchain_command(
    ctx: typer.Context,
    require: Annotated[
        list[str],
        typer.Option(
            "--require",
            "-r",
            help="Required toolchain as KIND or KIND:KEY=VALUE; repeat to add kinds or requirements.",
        ),
    ],
    toolchains_file: Annotated[
        Path | None,
        typer.Option("--toolchains", help="Definitions file listing configured toolchains."),
    ] = None,
) -> None:
    """Select one configured toolchain for every required kind."""

    logger = build_cli_logger(options_from(ctx))
    try:
        requirements = _parse_requirements(require)
        path = (toolchains_file or Path.home() / USER_TOOLCHAINS_RELATIVE_PATH).expanduser()
        selected = select_toolchains(requirements, read_toolchains(path))
    except (CLIError, ToolchainError) as exc:
        raise exit_with(logger, exc) from exc

    for kind, toolchain in selected.items():
        logger.ok(f"Found matching toolchain for type {kind}: {toolchain}")


__all__ = ["toolchain_command"]
