# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared utilities for CLI commands (logging, errors, engine wiring)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import typer
from rich.console import Console

from ..config import DiscoverySettings, create_discoverer, resolve_settings
from ..discovery.discoverer import ToolchainDiscoverer
from ..errors import ToolchainError
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLIOptions:
    """Global presentation options shared by every command."""

    emoji: bool = True
    color: bool = True
    debug: bool = False


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console helpers honouring CLI emoji and colour settings."""

    console: Console
    use_emoji: bool
    use_color: bool

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout verbatim, for machine readable output."""

        typer.echo(message)


def options_from(ctx: typer.Context) -> CLIOptions:
    return ctx.obj if isinstance(ctx.obj, CLIOptions) else CLIOptions()


def build_cli_logger(options: CLIOptions) -> CLILogger:
    """Return a ``CLILogger`` configured from the global options.

    Args:
        options: Presentation options parsed by the application callback.

    Returns:
        CLILogger: Logger bound to a dedicated Rich console.
    """

    console = Console(no_color=not options.color, highlight=False, emoji=options.emoji)
    return CLILogger(console=console, use_emoji=options.emoji, use_color=options.color)


def load_settings(overrides: Mapping[str, object]) -> DiscoverySettings:
    """Resolve settings, translating validation failures into ``CLIError``."""

    try:
        return resolve_settings(overrides)
    except (ToolchainError, ValueError) as exc:
        raise CLIError(str(exc)) from exc


def build_discoverer(settings: DiscoverySettings) -> ToolchainDiscoverer:
    return create_discoverer(settings)


def exit_with(logger: CLILogger, exc: CLIError | ToolchainError) -> typer.Exit:
    """Report ``exc`` and return the ``typer.Exit`` the caller should raise."""

    logger.fail(str(exc))
    return typer.Exit(code=exc.exit_code if isinstance(exc, CLIError) else 1)


__all__ = [
    "CLIError",
    "CLILogger",
    "CLIOptions",
    "build_cli_logger",
    "build_discoverer",
    "exit_with",
    "load_settings",
    "options_from",
]
