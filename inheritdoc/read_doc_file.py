"""Reading of XML documentation files into modules."""

import xml.etree.ElementTree as ET
from pathlib import Path

from inheritdoc.log_level import LogCallback, LogLevel
from inheritdoc.member_key import parse_member_key
from inheritdoc.module_document import ModuleDocument
from inheritdoc.type_descriptor import TypeDescriptor


def read_doc_file(path: Path, log: LogCallback) -> ET.ElementTree | None:
    """Parse an XML documentation file; return None if it is not one."""
    try:
        document = ET.parse(path)
    except (OSError, ET.ParseError) as e:
        log(LogLevel.WARN, f"Unable to parse {path} due to error {e} (skipping)")
        return None
    if document.getroot().tag != "doc":
        log(LogLevel.TRACE, f"read_doc_file():{path} is not a documentation file")
        return None
    return document


def assembly_name(document: ET.ElementTree) -> str:
    """Return the assembly named in a documentation file's header."""
    return (document.findtext("assembly/name") or "").strip()


def documented_types(
    document: ET.ElementTree, module: str
) -> dict[str, TypeDescriptor]:
    """Return a bare descriptor for every type a documentation file names.

    Used for reference files such as 'mscorlib.xml', whose types never
    appear as DocFX items. The descriptors carry no base type or interfaces.
    """
    result: dict[str, TypeDescriptor] = {}
    for elem in document.iter("member"):
        try:
            key = parse_member_key(elem.get("name", ""))
        except ValueError:
            continue
        if key.type_name not in result:
            result[key.type_name] = TypeDescriptor(key.type_name, module=module)
    return result


def load_modules(
    doc_files: list[Path],
    descriptors_by_module: dict[str, dict[str, TypeDescriptor]],
    log: LogCallback,
    *,
    is_reference: bool = False,
) -> list[ModuleDocument]:
    """Load documentation files, one module per distinct assembly name.

    Files naming an assembly that is already loaded are attached to that
    module, so every copy gets written back. Types of a reference module
    that no DocFX item describes are registered from the file itself.
    """
    log(
        LogLevel.DEBUG,
        f"load_modules():doc_files={','.join(str(f) for f in doc_files)}",
    )
    modules: dict[str, ModuleDocument] = {}
    known = {uid for by_uid in descriptors_by_module.values() for uid in by_uid}
    for path in doc_files:
        document = read_doc_file(path, log)
        if document is None:
            continue
        name = assembly_name(document)
        existing = modules.get(name)
        if existing is not None:
            log(LogLevel.TRACE, f"load_modules():Already loaded assembly {name}")
            existing.doc_files.append(path)
            continue
        log(LogLevel.TRACE, f"load_modules():Loading assembly {name} from {path}")
        descriptors = descriptors_by_module.get(name, {})
        if is_reference:
            extra = {
                uid: d
                for uid, d in documented_types(document, name).items()
                if uid not in known
            }
            if extra:
                log(
                    LogLevel.DEBUG,
                    f"load_modules():{len(extra)} type(s) of {name} have no metadata",
                )
                descriptors = {**descriptors, **extra}
        modules[name] = ModuleDocument(
            name=name,
            document=document,
            descriptors=descriptors,
            doc_files=[path],
            is_reference=is_reference,
        )
    return list(modules.values())
