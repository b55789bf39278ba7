# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path


def _resolve_command(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the executable turned into an absolute path."""

    if not args:
        raise ValueError("cannot run an empty command")
    executable = Path(args[0])
    if not executable.is_absolute():
        located = shutil.which(args[0])
        if located is None:
            raise FileNotFoundError(f"{args[0]!r} is not on PATH")
        executable = Path(located)
    return [str(executable), *args[1:]]


def run_command(
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Execute *args*, capturing both output streams as text.

    The call blocks until the child exits. A non-zero exit status is not an
    error here; callers inspect the captured output instead.
    """

    return subprocess.run(
        _resolve_command(args),
        env=dict(env) if env is not None else None,
        check=False,
        capture_output=True,
        text=True,
        errors="replace",
        stdin=subprocess.DEVNULL,
        timeout=timeout,
    )


def output_lines(completed: subprocess.CompletedProcess[str]) -> list[str]:
    """Return diagnostic lines from ``completed``, stderr first then stdout."""

    return [*(completed.stderr or "").splitlines(), *(completed.stdout or "").splitlines()]


__all__ = ["output_lines", "run_command"]
