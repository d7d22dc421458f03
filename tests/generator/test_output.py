# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for writing schema documents to disk."""

import json
import os
import stat
import sys
from pathlib import Path

import pytest

from schemagen.generator import OutputError, SchemaWriter, schema_path
from schemagen.model import SchemaDocument

# ###############
# schema_path
# ###############


def test_schema_path_mirrors_namespace() -> None:
    assert schema_path(Path("out"), "a.b.Widget") == Path("out/a/b/Widget.json")


def test_schema_path_without_namespace() -> None:
    assert schema_path(Path("out"), "Widget") == Path("out/Widget.json")


def test_schema_path_for_nested_class() -> None:
    assert schema_path(Path("out"), "shop.models.Outer.Inner") == Path("out/shop/models/Outer/Inner.json")


# ###############
# SchemaWriter
# ###############


def test_prepare_creates_output_directory(tmp_path: Path) -> None:
    output_dir = tmp_path / "json-schemes" / "output"
    SchemaWriter(output_dir).prepare()
    assert output_dir.is_dir()


def test_prepare_accepts_existing_directory(tmp_path: Path) -> None:
    SchemaWriter(tmp_path).prepare()
    assert tmp_path.is_dir()


def test_prepare_below_a_file_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(OutputError, match="Cannot create output directory"):
        SchemaWriter(blocker / "out").prepare()


def test_persist_writes_document(tmp_path: Path) -> None:
    document = SchemaDocument(qualified_name="a.b.Widget", content={"title": "Widget", "description": "Größe"})
    written = SchemaWriter(tmp_path).persist(document)
    assert written == tmp_path / "a" / "b" / "Widget.json"
    text = written.read_text(encoding="utf-8")
    assert text == document.serialize()
    assert json.loads(text)["description"] == "Größe"


def test_persist_leaves_no_temporary_files(tmp_path: Path) -> None:
    writer = SchemaWriter(tmp_path)
    writer.persist(SchemaDocument(qualified_name="a.Widget", content={"title": "Widget"}))
    assert [p.name for p in (tmp_path / "a").iterdir()] == ["Widget.json"]


def test_persist_replaces_existing_document(tmp_path: Path) -> None:
    writer = SchemaWriter(tmp_path)
    writer.persist(SchemaDocument(qualified_name="a.Widget", content={"version": 1}))
    written = writer.persist(SchemaDocument(qualified_name="a.Widget", content={"version": 2}))
    assert json.loads(written.read_text(encoding="utf-8")) == {"version": 2}


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
@pytest.mark.parametrize(("umask", "mode"), [(0o022, 0o644), (0o027, 0o640)])
def test_persist_uses_umask_file_mode(tmp_path: Path, umask: int, mode: int) -> None:
    """Schemas get the permissions of a regular new file, not those of a private temporary file."""
    previous = os.umask(umask)
    try:
        written = SchemaWriter(tmp_path).persist(SchemaDocument(qualified_name="a.Widget", content={}))
    finally:
        os.umask(previous)
    assert stat.S_IMODE(written.stat().st_mode) == mode


def test_persist_into_blocked_namespace_raises(tmp_path: Path) -> None:
    """A file where a namespace directory belongs makes the write fail without partial output."""
    (tmp_path / "a").write_text("in the way", encoding="utf-8")
    writer = SchemaWriter(tmp_path)
    with pytest.raises(OutputError, match="Widget.json"):
        writer.persist(SchemaDocument(qualified_name="a.b.Widget", content={}))
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a"]


def test_persist_onto_directory_removes_temporary_file(tmp_path: Path) -> None:
    """When the final rename fails the temporary file is cleaned up."""
    (tmp_path / "a" / "Widget.json").mkdir(parents=True)
    writer = SchemaWriter(tmp_path)
    with pytest.raises(OutputError):
        writer.persist(SchemaDocument(qualified_name="a.Widget", content={}))
    assert [p.name for p in (tmp_path / "a").iterdir()] == ["Widget.json"]
    assert (tmp_path / "a" / "Widget.json").is_dir()
