"""Dependency ordering of documented types."""

from collections.abc import Callable, Iterable

from inheritdoc.errors import CyclicTypeDependencyError


def sort_types(
    type_names: Iterable[str], chain_of: Callable[[str], Iterable[str]]
) -> list[str]:
    """Order types so each one follows every ancestor in the working set.

    ``chain_of`` returns the ancestor-chain names of a type. Each pass scans
    the unordered types from last to first and appends every type whose
    ancestors in the working set are already ordered. A pass that places
    nothing means the remaining types depend on each other.
    """
    unsorted = list(type_names)
    working_set = set(unsorted)
    chains = {name: list(chain_of(name)) for name in unsorted}

    result: list[str] = []
    placed: set[str] = set()
    while unsorted:
        last_count = len(unsorted)
        for i in range(len(unsorted) - 1, -1, -1):
            name = unsorted[i]
            ready = all(
                dep == name or dep not in working_set or dep in placed
                for dep in chains[name]
            )
            if ready:
                result.append(name)
                placed.add(name)
                del unsorted[i]
        if len(unsorted) == last_count:
            raise CyclicTypeDependencyError(sorted(unsorted))
    return result
