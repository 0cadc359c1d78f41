"""Data model for one module (assembly) and its documentation files."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from inheritdoc.type_descriptor import TypeDescriptor


@dataclass
class ModuleDocument:
    """An assembly's type metadata bound to its XML documentation."""

    name: str
    document: ET.ElementTree
    descriptors: dict[str, TypeDescriptor] = field(default_factory=dict)
    doc_files: list[Path] = field(default_factory=list)
    passthrough: list[ET.Element] = field(default_factory=list)  # untouched members
    is_reference: bool = False  # global source, never written back
