"""Data model for a type declared by a compiled module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TypeDescriptor:
    """Represents a type and its direct inheritance edges."""

    name: str
    base_type_name: str | None = None
    interface_names: tuple[str, ...] = ()
    module: str = ""  # assembly that declares the type
