# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models describing toolchains, requirements and selection outcomes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import (
    ENV,
    RUNTIME_NAME,
    RUNTIME_VERSION,
    TOOLCHAIN_KIND_JDK,
    TRANSIENT_PROPERTIES,
    VENDOR,
    VERSION,
)

RequirementSet = dict[str, str]


class ToolchainConfiguration(BaseModel):
    """Configuration block carried by a toolchain entry.

    JDK toolchains are located by ``jdk_home``. Other toolchain kinds carry
    their own settings, such as ``protocPath`` for ``protobuf``.
    """

    model_config = ConfigDict(frozen=True)

    jdk_home: Path | None = None
    settings: dict[str, str] = Field(default_factory=dict)


class ToolchainModel(BaseModel):
    """Discovered or declared toolchain installation.

    ``provides`` is an open attribute bag so entries written by other versions
    of the tool keep unknown keys intact.
    """

    model_config = ConfigDict(frozen=True)

    kind: str = TOOLCHAIN_KIND_JDK
    provides: dict[str, str] = Field(default_factory=dict)
    configuration: ToolchainConfiguration

    @model_validator(mode="after")
    def _require_jdk_home(self) -> ToolchainModel:
        if self.kind == TOOLCHAIN_KIND_JDK and self.configuration.jdk_home is None:
            raise ValueError("jdk toolchain entry is missing configuration/jdkHome")
        return self

    @classmethod
    def from_parts(
        cls,
        *,
        jdk_home: Path | None,
        provides: Mapping[str, str],
        kind: str = TOOLCHAIN_KIND_JDK,
        settings: Mapping[str, str] | None = None,
    ) -> ToolchainModel:
        """Build a model from loose parts.

        Args:
            jdk_home: Installation directory, required for ``jdk`` toolchains.
            provides: Attribute mapping describing the toolchain.
            kind: Toolchain discriminator.
            settings: Configuration values other than the JDK home.

        Returns:
            ToolchainModel: Newly constructed model.

        Raises:
            ValueError: If a ``jdk`` toolchain has no ``jdk_home``.
        """

        return cls(
            kind=kind,
            provides={str(key): str(value) for key, value in provides.items()},
            configuration=ToolchainConfiguration(jdk_home=jdk_home, settings=dict(settings or {})),
        )

    @property
    def install_path(self) -> Path | None:
        """Return the installation directory identifying a JDK toolchain."""

        return self.configuration.jdk_home

    @property
    def version(self) -> str | None:
        """Return the ``version`` attribute when the toolchain declares one."""

        return self.provides.get(VERSION)

    @property
    def vendor(self) -> str | None:
        """Return the ``vendor`` attribute when the toolchain declares one."""

        return self.provides.get(VENDOR)

    def with_provides(
        self,
        updates: Mapping[str, str] | None = None,
        *,
        drop: Iterable[str] = (),
    ) -> ToolchainModel:
        """Return a copy with ``updates`` merged into and ``drop`` removed from ``provides``.

        Args:
            updates: Attributes added or replaced on the copy.
            drop: Attribute names removed from the copy.

        Returns:
            ToolchainModel: Updated copy, the receiver is left untouched.
        """

        removed = set(drop)
        provides = {key: value for key, value in self.provides.items() if key not in removed}
        if updates:
            provides.update(updates)
        return self.model_copy(update={"provides": provides})

    def without_transient(self) -> ToolchainModel:
        """Return a copy stripped of the attributes recomputed every discovery pass."""

        return self.with_provides(drop=TRANSIENT_PROPERTIES)

    def __str__(self) -> str:
        if self.kind != TOOLCHAIN_KIND_JDK:
            attributes = ", ".join(f"{key}={value}" for key, value in self.provides.items())
            return f"{self.kind.upper()}[{attributes}]"
        version = self.version or "?"
        vendor = self.vendor or "unknown vendor"
        return f"JDK[{version} {vendor} {self.install_path}]"


class PersistedToolchains(BaseModel):
    """Shared persisted shape used by the cache file and definitions files."""

    toolchains: list[ToolchainModel] = Field(default_factory=list)


class JdkConstraints(BaseModel):
    """Caller supplied constraints for selecting a JDK toolchain."""

    model_config = ConfigDict(frozen=True)

    version: str | None = None
    runtime_name: str | None = None
    runtime_version: str | None = None
    vendor: str | None = None
    env: str | None = None

    def to_requirements(self) -> RequirementSet:
        """Return the requirement set built from supplied constraints only.

        Returns:
            RequirementSet: Mapping of provides keys to expected values; absent
            constraints are omitted rather than defaulted.
        """

        candidates = (
            (VERSION, self.version),
            (RUNTIME_NAME, self.runtime_name),
            (RUNTIME_VERSION, self.runtime_version),
            (VENDOR, self.vendor),
            (ENV, self.env),
        )
        return {key: value for key, value in candidates if value is not None}


class UsageMode(str, Enum):
    """Policy deciding whether the running JDK may satisfy a requirement."""

    NEVER = "Never"
    IF_SAME = "IfSame"
    IF_MATCH = "IfMatch"

    @classmethod
    def from_raw(cls, raw: str) -> UsageMode:
        """Return the mode matching ``raw`` case-insensitively.

        Args:
            raw: Mode name such as ``IfMatch`` or ``ifmatch``.

        Returns:
            UsageMode: Matching enum member.

        Raises:
            ValueError: If ``raw`` does not name a mode.
        """

        token = raw.strip().lower()
        for member in cls:
            if member.value.lower() == token:
                return member
        expected = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown usage mode {raw!r}; expected one of: {expected}")


class SelectionStatus(str, Enum):
    """Terminal states reached by the selection orchestrator."""

    NOTHING_TO_SELECT = "nothing-to-select"
    USE_CURRENT = "use-current"
    SELECTED = "selected"


class SelectionSource(str, Enum):
    """Where a selected toolchain came from."""

    CURRENT = "current"
    CONFIGURED = "configured"
    DISCOVERED = "discovered"


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Outcome of a selection pass.

    Attributes:
        status: Terminal state reached.
        requirements: Requirement set evaluated during the pass.
        toolchain: Matched toolchain, ``None`` when nothing was selected.
        source: Origin of ``toolchain`` when one matched.
    """

    status: SelectionStatus
    requirements: RequirementSet
    toolchain: ToolchainModel | None = None
    source: SelectionSource | None = None

    @property
    def requires_external_toolchain(self) -> bool:
        """Return ``True`` when the build must switch away from the current JDK."""

        return self.status is SelectionStatus.SELECTED


__all__ = [
    "JdkConstraints",
    "PersistedToolchains",
    "RequirementSet",
    "SelectionResult",
    "SelectionSource",
    "SelectionStatus",
    "ToolchainConfiguration",
    "ToolchainModel",
    "UsageMode",
]
