"""End-to-end tests for a full run and the command-line entry point."""

import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from inheritdoc.build_index import build_index
from inheritdoc.cli import main
from inheritdoc.load_config import load_config
from inheritdoc.log_level import LogLevel
from inheritdoc.module_document import ModuleDocument
from inheritdoc.run_inheritdoc import build_registry, run_inheritdoc
from inheritdoc.type_descriptor import TypeDescriptor

METADATA = """### YamlMime:ManagedReference
items:
  - uid: Demo.IRunner
    type: Interface
    assemblies:
      - Demo
  - uid: Demo.Base
    type: Class
    assemblies:
      - Demo
    inheritance:
      - System.Object
    implements:
      - Demo.IRunner
  - uid: Demo.Derived
    type: Class
    assemblies:
      - Demo
    inheritance:
      - System.Object
      - Demo.Base
    implements:
      - Demo.IRunner
  - uid: Demo.FromLib
    type: Class
    assemblies:
      - Demo
    inheritance:
      - System.Object
      - Lib.Widget
  - uid: Lib.Widget
    type: Class
    assemblies:
      - Lib
    inheritance:
      - System.Object
"""

DOC = """<?xml version="1.0"?>
<doc>
    <assembly><name>Demo</name></assembly>
    <members>
        <member name="T:Demo.IRunner"><summary>Runs things.</summary></member>
        <member name="M:Demo.IRunner.Run(System.Int32)">
            <summary>Runs <paramref name="count"/> times.</summary>
            <param name="count">How many.</param>
        </member>
        <member name="T:Demo.Base"><inheritdoc/></member>
        <member name="T:Demo.Derived">
            <summary><inheritdoc cref="T:Lib.Widget"/></summary>
            <remarks>Derived runner.</remarks>
        </member>
        <member name="M:Demo.Derived.Run(System.Int32)"><inheritdoc/></member>
        <member name="T:Demo.FromLib"><inheritdoc/></member>
    </members>
</doc>
"""

LIB_DOC = """<?xml version="1.0"?>
<doc>
    <assembly><name>Lib</name></assembly>
    <members>
        <member name="T:Lib.Widget"><summary>A widget.</summary></member>
    </members>
</doc>
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Lay out DocFX metadata, a build output and a reference library."""
    (tmp_path / "api").mkdir()
    (tmp_path / "api" / "Demo.yml").write_text(METADATA, encoding="utf-8")
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "Demo.xml").write_text(DOC, encoding="utf-8")
    (tmp_path / "ref").mkdir()
    (tmp_path / "ref" / "Lib.xml").write_text(LIB_DOC, encoding="utf-8")
    return tmp_path


def config_for(project: Path, **overrides: Any) -> dict[str, Any]:
    config = load_config(None)
    config.update(
        base_path=str(project / "bin"),
        metadata_dir=str(project / "api"),
        global_source_files=str(project / "ref" / "Lib.xml"),
        **overrides,
    )
    return config


def summaries(path: Path) -> dict[str, str]:
    root = ET.parse(path).getroot()
    return {
        m.get("name", ""): "".join(m.find("summary").itertext()).strip()
        for m in root.iter("member")
        if m.find("summary") is not None
    }


def test_run_writes_new_files(project: Path, log: Any) -> None:
    """Verify a full run resolving type, member and cref placeholders."""
    written = run_inheritdoc(config_for(project), log)

    out = project / "bin" / "Demo.new.xml"
    assert written == [out]
    assert (project / "bin" / "Demo.xml").read_text(encoding="utf-8") == DOC
    text = out.read_text(encoding="utf-8")
    assert "<inheritdoc" not in text

    docs = summaries(out)
    assert docs["T:Demo.Base"] == "Runs things."
    assert docs["M:Demo.Base.Run(System.Int32)"] == "Runs  times."
    assert docs["T:Demo.Derived"] == "A widget."
    assert docs["M:Demo.Derived.Run(System.Int32)"] == "Runs  times."
    assert docs["T:Demo.FromLib"] == "A widget."
    assert "T:Lib.Widget" not in docs

    root = ET.parse(out).getroot()
    derived = root.find("members/member[@name='T:Demo.Derived']")
    assert derived is not None
    assert derived.findtext("remarks") == "Derived runner."
    assert (project / "ref" / "Lib.xml").read_text(encoding="utf-8") == LIB_DOC


def test_run_overwrites_in_place(project: Path, log: Any) -> None:
    """Verify that overwrite mode rewrites the original file."""
    written = run_inheritdoc(config_for(project, overwrite_existing=True), log)
    doc_file = project / "bin" / "Demo.xml"
    assert written == [doc_file]
    assert "<inheritdoc" not in doc_file.read_text(encoding="utf-8")
    assert not (project / "bin" / "Demo.new.xml").exists()


def test_run_without_placeholders_writes_nothing(project: Path, log: Any) -> None:
    """Verify that a run with nothing to replace leaves the files alone."""
    (project / "bin" / "Demo.xml").write_text(LIB_DOC, encoding="utf-8")
    assert run_inheritdoc(config_for(project), log) == []
    assert not (project / "bin" / "Demo.new.xml").exists()


def test_run_requires_metadata(tmp_path: Path, log: Any) -> None:
    """Verify that a run without DocFX metadata stops."""
    with pytest.raises(SystemExit):
        run_inheritdoc({"base_path": str(tmp_path)}, log)


def test_build_registry_prefers_loaded_modules(project: Path, log: Any) -> None:
    """Verify that module descriptors are registered before bare metadata."""
    descriptors = build_index([project / "api" / "Demo.yml"], log)
    module = ModuleDocument(
        name="Demo",
        document=ET.ElementTree(ET.Element("doc")),
        descriptors={"Demo.Derived": TypeDescriptor("Demo.Derived", "Lib.Widget")},
    )
    registry = build_registry([module], descriptors)
    assert registry.lookup("Demo.Derived").base_type_name == "Lib.Widget"
    assert "Lib.Widget" in registry
    assert len(registry) == 5


def test_main_integration(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test the main function with mocked arguments."""
    test_args = [
        "inheritdoc",
        "--base",
        str(project / "bin"),
        "--metadata",
        str(project / "api"),
        "-g",
        str(project / "ref" / "Lib.xml"),
        "-f",
        "Demo.*",
    ]
    with patch.object(sys, "argv", test_args):
        ret = main()
    assert ret == 0
    assert "Updated 1 XML documentation file(s)" in capsys.readouterr().out
    assert (project / "bin" / "Demo.new.xml").exists()


def test_main_reports_cyclic_hierarchy(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that a circular type hierarchy exits with status 1."""
    (tmp_path / "loop.yml").write_text(
        "items:\n"
        "  - uid: Demo.Ping\n    type: Class\n    inheritance: [Demo.Pong]\n"
        "  - uid: Demo.Pong\n    type: Class\n    inheritance: [Demo.Ping]\n",
        encoding="utf-8",
    )
    (tmp_path / "Loop.xml").write_text(
        '<doc><members><member name="T:Demo.Ping"><inheritdoc/></member>'
        "</members></doc>",
        encoding="utf-8",
    )
    with patch.object(sys, "argv", ["inheritdoc", "-b", str(tmp_path), "-o"]):
        ret = main()
    assert ret == 1
    assert "circular type dependency" in capsys.readouterr().err


FRAMEWORK_METADATA = """### YamlMime:ManagedReference
items:
  - uid: Demo.Base`1
    type: Class
    assemblies:
      - Demo
    inheritance:
      - System.Object
  - uid: Demo.Derived
    type: Class
    assemblies:
      - Demo
    inheritance:
      - System.Object
      - Demo.Base{System.Int32}
  - uid: Demo.Res
    type: Class
    assemblies:
      - Demo
    inheritance:
      - System.Object
    implements:
      - System.IDisposable
references:
  - uid: Demo.Base{System.Int32}
    definition: Demo.Base`1
  - uid: System.IDisposable
    isExternal: true
"""

FRAMEWORK_DOC = """<?xml version="1.0"?>
<doc>
    <assembly><name>Demo</name></assembly>
    <members>
        <member name="T:Demo.Base`1"><summary>Generic base.</summary></member>
        <member name="T:Demo.Derived"><inheritdoc/></member>
        <member name="M:Demo.Res.Dispose"><inheritdoc/></member>
        <member name="M:Demo.Res.Close"><inheritdoc/></member>
    </members>
</doc>
"""

MSCORLIB_DOC = """<?xml version="1.0"?>
<doc>
    <assembly><name>mscorlib</name></assembly>
    <members>
        <member name="M:System.IDisposable.Dispose">
            <summary>Releases resources.</summary>
        </member>
    </members>
</doc>
"""


@pytest.fixture
def framework_project(tmp_path: Path) -> Path:
    """Lay out a project deriving from a generic and a framework interface."""
    (tmp_path / "api").mkdir()
    (tmp_path / "api" / "Demo.yml").write_text(FRAMEWORK_METADATA, encoding="utf-8")
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "Demo.xml").write_text(FRAMEWORK_DOC, encoding="utf-8")
    (tmp_path / "ref").mkdir()
    (tmp_path / "ref" / "mscorlib.xml").write_text(MSCORLIB_DOC, encoding="utf-8")
    return tmp_path


def framework_config(project: Path, **overrides: Any) -> dict[str, Any]:
    config = load_config(None)
    config.update(
        base_path=str(project / "bin"),
        metadata_dir=str(project / "api"),
        global_source_files=str(project / "ref" / "mscorlib.xml"),
    )
    config.update(overrides)
    return config


def test_run_inherits_from_generic_base_and_framework(
    framework_project: Path, log: Any
) -> None:
    """Verify inheritance through a constructed generic and a reference file."""
    written = run_inheritdoc(framework_config(framework_project), log)

    out = framework_project / "bin" / "Demo.new.xml"
    assert written == [out]
    docs = summaries(out)
    assert docs["T:Demo.Derived"] == "Generic base."
    assert docs["M:Demo.Res.Dispose"] == "Releases resources."
    assert "M:Demo.Res.Close" not in docs

    infos = log.at(LogLevel.INFO)
    assert any("2 <inheritdoc/> tag(s) replaced in 1" in m for m in infos)
    assert "1 <inheritdoc/> tag(s) had nothing to inherit from" in log.warnings()
    mscorlib = framework_project / "ref" / "mscorlib.xml"
    assert mscorlib.read_text(encoding="utf-8") == MSCORLIB_DOC


def test_run_with_only_dropped_tags_reports_none_replaced(
    framework_project: Path, log: Any
) -> None:
    """Verify that tags with nothing to inherit are not counted as replaced."""
    written = run_inheritdoc(
        framework_config(framework_project, global_source_files=[]), log
    )

    assert written == [framework_project / "bin" / "Demo.new.xml"]
    infos = log.at(LogLevel.INFO)
    assert any("1 <inheritdoc/> tag(s) replaced in 1" in m for m in infos)
    assert "2 <inheritdoc/> tag(s) had nothing to inherit from" in log.warnings()

    (framework_project / "bin" / "Demo.xml").write_text(
        FRAMEWORK_DOC.replace("T:Demo.Base`1", "T:Demo.Unrelated"), encoding="utf-8"
    )
    log.messages.clear()
    written = run_inheritdoc(
        framework_config(framework_project, global_source_files=[]), log
    )
    assert written == []
    assert not any("replaced in" in m for m in log.at(LogLevel.INFO))
    assert any("No <inheritdoc/> tags replaced" in m for m in log.at(LogLevel.INFO))
    assert "3 <inheritdoc/> tag(s) had nothing to inherit from" in log.warnings()
