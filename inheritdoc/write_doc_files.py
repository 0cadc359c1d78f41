"""Serialization of merged documentation back to XML files."""

import xml.etree.ElementTree as ET
from pathlib import Path

from inheritdoc.documentation_tree import DocumentationTree
from inheritdoc.find_doc_files import NEW_FILE_SUFFIX
from inheritdoc.log_level import LogCallback, LogLevel
from inheritdoc.member_key import MemberKey, MemberKind
from inheritdoc.module_document import ModuleDocument
from inheritdoc.xml_nodes import member_element


def output_path(path: Path, *, overwrite: bool) -> Path:
    """Return the file a module's documentation is written to."""
    if overwrite:
        return path
    return path.with_name(path.name.removesuffix(".xml") + NEW_FILE_SUFFIX)


def _rebuild_members(module: ModuleDocument, trees: list[DocumentationTree]) -> None:
    root = module.document.getroot()
    members = root.find("members")
    if members is None:
        members = ET.SubElement(root, "members")
    for child in list(members):
        members.remove(child)
    members.text = None

    for tree in trees:
        if not tree.root.is_empty():
            type_key = MemberKey(MemberKind.TYPE, tree.type_name)
            members.append(member_element(str(type_key), tree.root))
        for member in tree.members:
            members.append(member_element(str(member.key), member.fragment))
    members.extend(module.passthrough)


def write_doc_files(
    modules: list[ModuleDocument],
    trees: dict[str, DocumentationTree],
    log: LogCallback,
    *,
    overwrite: bool = False,
) -> list[Path]:
    """Write every module holding a changed tree; return the files written.

    Reference modules are only read, never written.
    """
    written: list[Path] = []
    for module in modules:
        if module.is_reference:
            continue
        module_trees = [t for t in trees.values() if t.module == module.name]
        if not any(t.changed for t in module_trees):
            log(LogLevel.TRACE, f"write_doc_files():{module.name} unchanged")
            continue

        _rebuild_members(module, module_trees)
        ET.indent(module.document, space="    ")
        for path in module.doc_files:
            out = output_path(path, overwrite=overwrite)
            module.document.write(out, encoding="utf-8", xml_declaration=True)
            log(LogLevel.DEBUG, f"write_doc_files():wrote {out}")
            written.append(out)
    return written
