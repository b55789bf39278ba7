# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read and write toolchain definitions files.

Two encodings of the shared persisted shape are supported. JSON mirrors the
pydantic models directly::

    {"toolchains": [{"kind": "jdk", "provides": {...}, "configuration": {"jdk_home": "...", "settings": {}}}]}

XML follows the Maven ``toolchains.xml`` layout so generated files can be
consumed by Maven builds::

    <toolchains>
      <toolchain>
        <type>jdk</type>
        <provides><version>17.0.9</version>...</provides>
        <configuration><jdkHome>/opt/jdk-17</jdkHome></configuration>
      </toolchain>
    </toolchains>
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from .constants import TOOLCHAIN_KIND_JDK, VENDOR, VERSION
from .errors import ToolchainsFileError
from .models import PersistedToolchains, ToolchainModel
from .platform.paths import canonical_path
from .release import read_release_file, release_provides

LOGGER = logging.getLogger(__name__)

_JDK_HOME_ELEMENT = "jdkHome"


class ToolchainsFormat(str, Enum):
    """Encodings supported for definitions files."""

    JSON = "json"
    XML = "xml"

    @classmethod
    def for_path(cls, path: Path) -> ToolchainsFormat:
        return cls.XML if path.suffix.lower() == ".xml" else cls.JSON


def toolchains_to_json(toolchains: Iterable[ToolchainModel]) -> str:
    return PersistedToolchains(toolchains=list(toolchains)).model_dump_json(indent=2) + "\n"


def toolchains_from_json(text: str) -> list[ToolchainModel]:
    """Parse the JSON encoding.

    Raises:
        ValueError: If the payload is not valid JSON or does not match the
            persisted shape (pydantic's ``ValidationError`` is a ``ValueError``).
    """

    return PersistedToolchains.model_validate_json(text).toolchains


def toolchains_to_xml(toolchains: Iterable[ToolchainModel]) -> str:
    root = ET.Element("toolchains")
    for model in toolchains:
        element = ET.SubElement(root, "toolchain")
        ET.SubElement(element, "type").text = model.kind
        provides = ET.SubElement(element, "provides")
        for key, value in model.provides.items():
            ET.SubElement(provides, key).text = value
        configuration = ET.SubElement(element, "configuration")
        if model.install_path is not None:
            ET.SubElement(configuration, _JDK_HOME_ELEMENT).text = str(model.install_path)
        for key, value in model.configuration.settings.items():
            ET.SubElement(configuration, key).text = value
    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _text_map(element: ET.Element | None) -> dict[str, str]:
    if element is None:
        return {}
    return {_local_name(child.tag): (child.text or "").strip() for child in element}


def toolchains_from_xml(text: str) -> list[ToolchainModel]:
    """Parse a Maven style ``toolchains.xml`` document.

    Namespaced documents are accepted. Every toolchain kind is kept; only
    ``jdk`` entries must declare a ``jdkHome``.

    Raises:
        ValueError: If the document is malformed or a ``jdk`` entry has no
            ``jdkHome``.
    """

    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"invalid toolchains XML: {exc}") from exc
    models: list[ToolchainModel] = []
    for element in root:
        if _local_name(element.tag) != "toolchain":
            continue
        kind_element = _child(element, "type")
        kind = ((kind_element.text or "").strip() if kind_element is not None else "") or TOOLCHAIN_KIND_JDK
        settings = _text_map(_child(element, "configuration"))
        jdk_home = settings.pop(_JDK_HOME_ELEMENT, "")
        if kind == TOOLCHAIN_KIND_JDK and not jdk_home:
            raise ValueError("jdk toolchain entry is missing configuration/jdkHome")
        models.append(
            ToolchainModel.from_parts(
                kind=kind,
                provides=_text_map(_child(element, "provides")),
                jdk_home=Path(jdk_home) if jdk_home else None,
                settings=settings,
            ),
        )
    return models


def dump_toolchains(toolchains: Iterable[ToolchainModel], fmt: ToolchainsFormat) -> str:
    """Render ``toolchains`` in the requested encoding."""

    if fmt is ToolchainsFormat.XML:
        return toolchains_to_xml(toolchains)
    return toolchains_to_json(toolchains)


def read_toolchains(path: Path) -> list[ToolchainModel]:
    """Load toolchain definitions from ``path``.

    Args:
        path: Definitions file; the suffix selects the encoding.

    Returns:
        list[ToolchainModel]: Entries in file order, empty when the file does
        not exist.

    Raises:
        ToolchainsFileError: If the file exists but cannot be read or parsed.
    """

    if not path.is_file():
        return []
    try:
        text = path.read_text(encoding="utf-8")
        if ToolchainsFormat.for_path(path) is ToolchainsFormat.XML:
            return toolchains_from_xml(text)
        return toolchains_from_json(text)
    except (OSError, ValueError, ValidationError) as exc:
        raise ToolchainsFileError(f"Cannot read toolchains from {path}: {exc}") from exc


def write_toolchains(toolchains: Sequence[ToolchainModel], path: Path) -> None:
    """Write ``toolchains`` to ``path``, creating parent directories.

    Raises:
        ToolchainsFileError: If the file cannot be written.
    """

    payload = dump_toolchains(toolchains, ToolchainsFormat.for_path(path))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise ToolchainsFileError(f"Cannot persist toolchains to {path}: {exc}") from exc
    LOGGER.debug("Wrote %d toolchains to %s", len(toolchains), path)


def add_toolchain(
    path: Path,
    jdk_home: Path,
    *,
    vendor: str | None = None,
    toolchain_id: str | None = None,
) -> ToolchainModel:
    """Describe ``jdk_home`` from its ``release`` file and append it to ``path``.

    Args:
        path: Definitions file receiving the new entry.
        jdk_home: Installation directory of the JDK to register.
        vendor: Explicit vendor, otherwise taken from ``IMPLEMENTOR``.
        toolchain_id: Optional ``id`` attribute for the entry.

    Returns:
        ToolchainModel: Entry appended to the file.

    Raises:
        ToolchainsFileError: If the JDK home or its release file is unusable,
            or the definitions file cannot be read or written.
    """

    if not jdk_home.is_dir():
        raise ToolchainsFileError(f"JDK home {jdk_home} does not exist")
    try:
        properties = read_release_file(jdk_home)
    except OSError as exc:
        raise ToolchainsFileError(f"Cannot read JDK release file in {jdk_home}: {exc}") from exc
    provides = release_provides(properties)
    if VERSION not in provides:
        raise ToolchainsFileError(f"JAVA_VERSION missing in release file in JDK {jdk_home}")
    if vendor is not None:
        provides[VENDOR] = vendor
    if toolchain_id is not None:
        provides = {"id": toolchain_id, **provides}
    model = ToolchainModel.from_parts(jdk_home=canonical_path(jdk_home), provides=provides)
    toolchains = read_toolchains(path)
    toolchains.append(model)
    write_toolchains(toolchains, path)
    return model


__all__ = [
    "ToolchainsFormat",
    "add_toolchain",
    "dump_toolchains",
    "read_toolchains",
    "toolchains_from_json",
    "toolchains_from_xml",
    "toolchains_to_json",
    "toolchains_to_xml",
    "write_toolchains",
]
