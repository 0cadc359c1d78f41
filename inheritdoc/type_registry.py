"""Name-keyed registry of type descriptors across loaded modules."""

from collections.abc import Iterable

from inheritdoc.errors import CyclicTypeDependencyError
from inheritdoc.type_descriptor import TypeDescriptor


class TypeRegistry:
    """Holds the type descriptors of every loaded module."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self.by_name: dict[str, TypeDescriptor] = {}

    def add_module(self, descriptors: Iterable[TypeDescriptor]) -> int:
        """Add a module's descriptors; return how many were new.

        The first module to declare a name wins. Reference modules are loaded
        after the primary ones, so their copies never shadow a primary type.
        """
        added = 0
        for descriptor in descriptors:
            if descriptor.name not in self.by_name:
                self.by_name[descriptor.name] = descriptor
                added += 1
        return added

    def lookup(self, name: str | None) -> TypeDescriptor | None:
        """Return the descriptor registered under ``name``."""
        if not name:
            return None
        return self.by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    def __len__(self) -> int:
        return len(self.by_name)

    def ancestor_chain(self, descriptor: TypeDescriptor) -> list[TypeDescriptor]:
        """Return the reachable base types and interfaces of a type.

        Each base type is preceded by the interfaces it declares; the type's
        own interfaces come last. The list is ordered from the root of the
        hierarchy to the nearest ancestor. Bases or interfaces that are not
        registered end that branch of the walk.
        """
        result: list[TypeDescriptor] = []
        visited: set[str] = set()
        current: TypeDescriptor | None = descriptor
        while current is not None:
            if current.name in visited:
                raise CyclicTypeDependencyError(sorted(visited))
            visited.add(current.name)

            batch = [
                iface
                for iface in map(self.lookup, current.interface_names)
                if iface is not None and iface.name != descriptor.name
            ]
            if current is not descriptor:
                batch.append(current)
            result[0:0] = batch

            current = self.lookup(current.base_type_name)
        return result
