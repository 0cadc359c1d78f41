"""Exceptions raised while resolving inherited documentation."""


class InheritDocError(Exception):
    """Base class for all inheritdoc errors."""


class CyclicTypeDependencyError(InheritDocError):
    """Raised when types cannot be ordered because they depend on each other."""

    def __init__(self, type_names: list[str]) -> None:
        """Record the types involved in the cycle."""
        self.type_names = type_names
        super().__init__(
            "Could not sort types (circular type dependency): "
            + ", ".join(type_names)
        )


class FragmentPathError(InheritDocError):
    """Raised when a documentation path matches more than one node."""
