# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command generating a toolchains definitions file from discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..constants import GENERATE_COMPARATOR
from ..errors import ToolchainError
from ..persistence import ToolchainsFormat, dump_toolchains, write_toolchains
from .shared import CLIError, build_cli_logger, build_discoverer, exit_with, load_settings, options_from


def generate_command(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Destination file; .xml writes Maven toolchains.xml, anything else JSON. Prints to stdout when omitted.",
        ),
    ] = None,
    comparator: Annotated[
        str,
        typer.Option("--comparator", "-c", help="Ranking criteria deciding the entry order."),
    ] = GENERATE_COMPARATOR,
    output_format: Annotated[
        ToolchainsFormat,
        typer.Option("--format", help="Encoding used when printing to stdout."),
    ] = ToolchainsFormat.XML,
) -> None:
    """Write every discovered JDK as a toolchain definition."""

    options = options_from(ctx)
    logger = build_cli_logger(options)
    try:
        settings = load_settings({"comparator": comparator})
    except CLIError as exc:
        raise exit_with(logger, exc) from exc

    discovered = build_discoverer(settings).discover(settings.comparator)
    toolchains = [model.without_transient() for model in discovered]
    if file is None:
        logger.echo(dump_toolchains(toolchains, output_format).rstrip("\n"))
        return
    destination = file.expanduser().absolute()
    try:
        write_toolchains(toolchains, destination)
    except ToolchainError as exc:
        raise exit_with(logger, exc) from exc
    logger.ok(f"Wrote {len(toolchains)} JDK toolchains to {destination}")


__all__ = ["generate_command"]
