"""Logic for building type descriptors from DocFX metadata files."""

from pathlib import Path
from typing import Any

import yaml

from inheritdoc.load_managed_reference import iter_type_items, load_managed_reference
from inheritdoc.log_level import LogCallback, LogLevel
from inheritdoc.type_descriptor import TypeDescriptor


def _uids(values: object) -> list[str]:
    if not isinstance(values, list):
        return []
    return [str(x.get("uid") if isinstance(x, dict) else x) for x in values]


def generic_definition_uid(uid: str) -> str:
    """Rewrite a constructed generic uid to its definition's uid.

    ``Demo.Base{System.Int32}`` becomes ``Demo.Base`1``, the form used by
    type items and XML documentation IDs. Each brace group is replaced by
    the count of its top-level type arguments.
    """
    if "{" not in uid:
        return uid
    out: list[str] = []
    depth = 0
    args = 0
    for ch in uid:
        if ch == "{":
            depth += 1
            if depth == 1:
                args = 1
                continue
        elif ch == "}":
            depth -= 1
            if depth == 0:
                out.append(f"`{args}")
                continue
        elif ch == "," and depth == 1:
            args += 1
        if depth == 0:
            out.append(ch)
    return "".join(out)


def _definitions(doc: dict[str, Any]) -> dict[str, str]:
    """Map constructed uids listed under ``references`` to their definitions."""
    result: dict[str, str] = {}
    for ref in doc.get("references") or []:
        if isinstance(ref, dict) and ref.get("uid") and ref.get("definition"):
            result[str(ref["uid"])] = str(ref["definition"])
    return result


def _resolved(values: object, definitions: dict[str, str]) -> list[str]:
    return [
        generic_definition_uid(definitions.get(uid, uid)) for uid in _uids(values)
    ]


def build_index(
    yml_files: list[Path], log: LogCallback
) -> dict[str, dict[str, TypeDescriptor]]:
    """Index DocFX YAML files into type descriptors grouped by assembly name.

    The base type is the last ``inheritance`` entry (DocFX lists the chain
    from the root down to the immediate base). Constructed generic bases and
    interfaces are mapped to their definitions through the file's
    ``references``. A type listed under several assemblies is registered
    with each of them.
    """
    by_module: dict[str, dict[str, TypeDescriptor]] = {}
    for f in yml_files:
        try:
            doc = load_managed_reference(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            log(LogLevel.WARN, f"Unable to parse {f} due to error {e} (skipping)")
            continue

        definitions = _definitions(doc)
        for it in iter_type_items(doc):
            uid = str(it["uid"])
            inheritance = _resolved(it.get("inheritance"), definitions)
            implements = _resolved(it.get("implements"), definitions)
            interfaces = tuple(dict.fromkeys(implements))
            for assembly in _uids(it.get("assemblies")) or [""]:
                by_module.setdefault(assembly, {})[uid] = TypeDescriptor(
                    name=uid,
                    base_type_name=inheritance[-1] if inheritance else None,
                    interface_names=interfaces,
                    module=assembly,
                )
        log(LogLevel.TRACE, f"build_index():indexed {f}")
    return by_module
