"""Loading of DocFX ManagedReference YAML metadata files."""

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

YAML_MIME_PREFIX = "### YamlMime:"
TYPE_KINDS = {"class", "struct", "interface", "enum", "delegate"}


def load_managed_reference(path: Path) -> dict[str, Any]:
    """Load and parse a DocFX ManagedReference YAML file."""
    lines = path.read_text(encoding="utf-8").splitlines()
    if lines and lines[0].startswith(YAML_MIME_PREFIX):
        lines = lines[1:]
    raw = "\n".join(lines)
    # Fix unquoted equals sign in VB names which confuses PyYAML
    raw = re.sub(r"^(\s*[\w\.]+\.vb:\s+)(=$)", r"\1'='", raw, flags=re.MULTILINE)
    doc = yaml.safe_load(raw)
    return doc if isinstance(doc, dict) else {}


def iter_type_items(doc: dict[str, Any]) -> Iterable[dict[str, Any]]:
    """Iterate over the type items (class, struct, ...) of a DocFX document."""
    for it in doc.get("items") or []:
        if not isinstance(it, dict) or not it.get("uid"):
            continue
        kind = str(it.get("type") or "").strip().lower()
        if kind in TYPE_KINDS:
            yield it
