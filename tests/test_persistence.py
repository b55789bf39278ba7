# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for toolchains definitions files."""

from __future__ import annotations

from pathlib import Path

import pytest

from jdk_toolchains.errors import ToolchainsFileError
from jdk_toolchains.persistence import (
    ToolchainsFormat,
    add_toolchain,
    read_toolchains,
    toolchains_from_xml,
    toolchains_to_xml,
    write_toolchains,
)

NAMESPACED_TOOLCHAINS = """<?xml version="1.0" encoding="UTF-8"?>
<toolchains xmlns="http://maven.apache.org/TOOLCHAINS/1.1.0">
  <toolchain>
    <type>jdk</type>
    <provides>
      <version>11</version>
      <vendor>Oracle Corporation</vendor>
    </provides>
    <configuration>
      <jdkHome>/opt/jdk-11</jdkHome>
    </configuration>
  </toolchain>
  <toolchain>
    <type>netbeans</type>
    <configuration>
      <jdkHome>/opt/netbeans</jdkHome>
    </configuration>
  </toolchain>
</toolchains>
"""

MIXED_TOOLCHAINS = """<?xml version="1.0" encoding="UTF-8"?>
<toolchains>
  <toolchain>
    <type>protobuf</type>
    <provides>
      <version>3.25.1</version>
    </provides>
    <configuration>
      <protocPath>/opt/protobuf/bin/protoc</protocPath>
    </configuration>
  </toolchain>
  <toolchain>
    <type>jdk</type>
    <provides>
      <version>17.0.9</version>
    </provides>
    <configuration>
      <jdkHome>/opt/jdk-17</jdkHome>
    </configuration>
  </toolchain>
</toolchains>
"""


def test_format_follows_suffix() -> None:
    assert ToolchainsFormat.for_path(Path("toolchains.xml")) is ToolchainsFormat.XML
    assert ToolchainsFormat.for_path(Path("toolchains.XML")) is ToolchainsFormat.XML
    assert ToolchainsFormat.for_path(Path("toolchains.json")) is ToolchainsFormat.JSON


@pytest.mark.parametrize("name", ["toolchains.json", "toolchains.xml"])
def test_write_then_read_preserves_entries(tmp_path: Path, model_factory, name: str) -> None:
    models = [
        model_factory("21.0.1", "Eclipse Adoptium", **{"runtime.name": "OpenJDK Runtime Environment"}),
        model_factory("17.0.9", "Amazon.com Inc.", id="corretto"),
    ]
    path = tmp_path / "conf" / name

    write_toolchains(models, path)

    assert read_toolchains(path) == models


def test_xml_layout(model_factory) -> None:
    payload = toolchains_to_xml([model_factory("17.0.9", home="/opt/jdk-17")])

    assert payload.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<type>jdk</type>" in payload
    assert "<version>17.0.9</version>" in payload
    assert "<jdkHome>/opt/jdk-17</jdkHome>" in payload


def test_namespaced_xml_is_accepted() -> None:
    models = toolchains_from_xml(NAMESPACED_TOOLCHAINS)

    assert [model.kind for model in models] == ["jdk", "netbeans"]
    assert models[0].provides == {"version": "11", "vendor": "Oracle Corporation"}
    assert models[0].install_path == Path("/opt/jdk-11")
    assert models[1].provides == {}


def test_xml_entry_without_home_is_rejected() -> None:
    with pytest.raises(ValueError, match="jdkHome"):
        toolchains_from_xml("<toolchains><toolchain><type>jdk</type></toolchain></toolchains>")


def test_missing_file_reads_as_empty(tmp_path: Path) -> None:
    assert read_toolchains(tmp_path / "toolchains.xml") == []


@pytest.mark.parametrize(("name", "content"), [("t.xml", "<toolchains>"), ("t.json", '{"toolchains": 3}')])
def test_malformed_file_raises(tmp_path: Path, name: str, content: str) -> None:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ToolchainsFileError, match="Cannot read toolchains"):
        read_toolchains(path)


def test_add_toolchain_appends_entry(jdks, tmp_path: Path, model_factory) -> None:
    existing = model_factory("11.0.2")
    path = tmp_path / "toolchains.xml"
    write_toolchains([existing], path)
    home = jdks.create("temurin-21", "21.0.1", vendor="Eclipse Adoptium")

    added = add_toolchain(path, home, toolchain_id="temurin21")

    assert list(added.provides) == ["id", "version", "runtime.version", "vendor"]
    assert added.provides["vendor"] == "Eclipse Adoptium"
    assert read_toolchains(path) == [existing, added]


def test_add_toolchain_vendor_override(jdks, tmp_path: Path) -> None:
    home = jdks.create("zulu-17", "17.0.9", vendor="Azul")

    added = add_toolchain(tmp_path / "toolchains.json", home, vendor="Azul Systems, Inc.")

    assert added.vendor == "Azul Systems, Inc."
    assert "id" not in added.provides


def test_add_toolchain_requires_java_version(jdks, tmp_path: Path) -> None:
    home = jdks.create("broken", "17", release=False)
    (home / "release").write_text('IMPLEMENTOR="Acme"\n', encoding="utf-8")

    with pytest.raises(ToolchainsFileError, match="JAVA_VERSION"):
        add_toolchain(tmp_path / "toolchains.xml", home)


def test_add_toolchain_requires_release_file(jdks, tmp_path: Path) -> None:
    home = jdks.create("bare", "17", release=False)

    with pytest.raises(ToolchainsFileError, match="release file"):
        add_toolchain(tmp_path / "toolchains.xml", home)

    assert not (tmp_path / "toolchains.xml").exists()


def test_non_jdk_toolchains_keep_their_configuration(tmp_path: Path) -> None:
    path = tmp_path / "toolchains.xml"
    path.write_text(MIXED_TOOLCHAINS, encoding="utf-8")

    protobuf, jdk = read_toolchains(path)

    assert protobuf.kind == "protobuf"
    assert protobuf.install_path is None
    assert protobuf.configuration.settings == {"protocPath": "/opt/protobuf/bin/protoc"}
    assert str(protobuf) == "PROTOBUF[version=3.25.1]"
    assert jdk.install_path == Path("/opt/jdk-17")
    assert jdk.configuration.settings == {}


@pytest.mark.parametrize("name", ["toolchains.json", "toolchains.xml"])
def test_mixed_kinds_survive_write_and_read(tmp_path: Path, name: str) -> None:
    source = tmp_path / "source.xml"
    source.write_text(MIXED_TOOLCHAINS, encoding="utf-8")
    models = read_toolchains(source)
    path = tmp_path / name

    write_toolchains(models, path)

    assert read_toolchains(path) == models


def test_json_jdk_entry_without_home_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "toolchains.json"
    payload = '{"toolchains": [{"kind": "jdk", "provides": {"version": "17"}, "configuration": {}}]}'
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(ToolchainsFileError, match="jdkHome"):
        read_toolchains(path)
