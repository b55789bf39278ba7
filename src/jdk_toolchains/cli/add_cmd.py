# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command registering a JDK in a toolchains definitions file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..constants import USER_TOOLCHAINS_RELATIVE_PATH
from ..errors import ToolchainError
from ..persistence import add_toolchain
from .shared import build_cli_logger, exit_with, options_from


def add_command(
    ctx: typer.Context,
    jdk_home: Annotated[Path, typer.Option("--jdk-home", help="JDK installation directory to register.")],
    vendor: Annotated[
        str | None,
        typer.Option("--vendor", help="Vendor name; read from the JDK release file when omitted."),
    ] = None,
    toolchain_id: Annotated[str | None, typer.Option("--id", help="Identifier stored as the 'id' attribute.")] = None,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Definitions file to update, ~/.m2/toolchains.xml by default."),
    ] = None,
) -> None:
    """Add a JDK described by its release file to a toolchains definitions file."""

    logger = build_cli_logger(options_from(ctx))
    destination = (file or Path.home() / USER_TOOLCHAINS_RELATIVE_PATH).expanduser()
    try:
        model = add_toolchain(destination, jdk_home.expanduser(), vendor=vendor, toolchain_id=toolchain_id)
    except ToolchainError as exc:
        raise exit_with(logger, exc) from exc
    logger.ok(f"Added {model} to {destination}")


__all__ = ["add_command"]
