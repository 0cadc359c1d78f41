"""Replacement of ``<inheritdoc/>`` placeholders with inherited documentation.

Types are merged in dependency order (see ``hierarchy_resolver``), so when a
type is processed every ancestor in the working set is already resolved.
For each placeholder the merger removes it, picks the candidate types to
inherit from (an explicit ``cref`` target or the ancestor chain, nearest
first) and copies the first usable content found at the placeholder's path.
"""

import logging

from inheritdoc.documentation_tree import DocumentationTree, MemberFragment
from inheritdoc.errors import FragmentPathError
from inheritdoc.fragment import Fragment
from inheritdoc.log_level import LogCallback, LogLevel, logging_callback
from inheritdoc.member_key import MemberKey, parse_member_key
from inheritdoc.type_registry import TypeRegistry

logger = logging.getLogger(__name__)


class _Placeholder:
    """A placeholder taken out of a fragment, with the context it left behind."""

    def __init__(self, fragment: Fragment) -> None:
        index_path = fragment.find_first()
        if index_path is None:
            msg = "Fragment holds no placeholder"
            raise ValueError(msg)
        node = fragment.node_at(index_path)
        self.cref = node.attributes.get("cref")
        self.path = fragment.name_path(index_path)
        self.target: MemberKey | None = None
        if self.cref:
            try:
                self.target = parse_member_key(self.cref)
            except ValueError:
                self.target = None
        fragment.remove_at(index_path)

    @property
    def is_top_level(self) -> bool:
        return not self.path and not self.cref


class InheritanceMerger:
    """Rewrites documentation trees in place, resolving every placeholder."""

    def __init__(
        self,
        registry: TypeRegistry,
        trees: dict[str, DocumentationTree],
        log: LogCallback | None = None,
    ) -> None:
        """Initialize the merger over a registry and the trees to rewrite."""
        self.registry = registry
        self.trees = trees
        self.log = log or logging_callback(logger)
        self._chains: dict[str, list[str]] = {}
        self.dropped = 0  # placeholders removed with nothing to inherit

    def merge(self, order: list[str]) -> int:
        """Merge every tree in ``order``; return the placeholders processed."""
        count = 0
        for type_name in order:
            tree = self.trees.get(type_name)
            if tree is not None:
                count += self.merge_type(tree)
        return count

    def merge_type(self, tree: DocumentationTree) -> int:
        """Resolve the root fragment, then every member fragment, of a type."""
        count = 0
        while tree.root.find_first() is not None:
            placeholder = _Placeholder(tree.root)
            copied = self._merge_root(tree, placeholder)
            if placeholder.is_top_level:
                copied = self._merge_members(tree, placeholder, None) or copied
            self._report_unresolved(tree.type_name, placeholder, copied)
            if not copied:
                self.dropped += 1
            count += 1

        for member in list(tree.members):
            while member.fragment.find_first() is not None:
                placeholder = _Placeholder(member.fragment)
                copied = self._merge_members(tree, placeholder, member)
                self._report_unresolved(str(member.key), placeholder, copied)
                if not copied:
                    self.dropped += 1
                count += 1

        if count:
            self.log(
                LogLevel.DEBUG,
                f"Resolved {count} placeholder(s) in {tree.type_name}",
            )
        return count

    def _chain_names(self, type_name: str) -> list[str]:
        """Return the ancestor chain of a type, nearest ancestor first."""
        if type_name not in self._chains:
            descriptor = self.registry.lookup(type_name)
            names: list[str] = []
            if descriptor is not None:
                chain = self.registry.ancestor_chain(descriptor)
                names = [d.name for d in reversed(chain)]
            self._chains[type_name] = names
        return self._chains[type_name]

    def _candidates(
        self, tree: DocumentationTree, placeholder: _Placeholder
    ) -> list[DocumentationTree]:
        """Return the documented types to inherit from, nearest first."""
        target = placeholder.target
        if target is not None and self.registry.lookup(target.type_name) is not None:
            names = [target.type_name]
        else:
            names = self._chain_names(tree.type_name)
        return [self.trees[name] for name in names if name in self.trees]

    def _usable(
        self, fragment: Fragment, path: list[str], source_name: str
    ) -> Fragment | None:
        """Return the fragment to copy from, or None if ``path`` is empty there.

        A source that still holds placeholders has not been merged yet; they
        are stripped from a copy so they never spread into the target.
        """
        source = fragment
        stripped = 0
        if fragment.find_first() is not None:
            source = fragment.copy()
            stripped = source.strip()
        try:
            if not source.has_content(path):
                return None
        except FragmentPathError as e:
            self.log(LogLevel.WARN, str(e))
            return None
        if stripped:
            self.log(
                LogLevel.WARN,
                f"{source_name} still holds {stripped} unresolved <inheritdoc/> "
                "tag(s); they are dropped from the inherited copy",
            )
        return source

    def _copy(
        self,
        tree: DocumentationTree,
        target: Fragment,
        path: list[str],
        source: Fragment,
        source_name: str,
    ) -> bool:
        try:
            target.replace_at(path, source)
        except FragmentPathError as e:
            self.log(LogLevel.WARN, f"Cannot copy from {source_name}: {e}")
            return False
        tree.changed = True
        scope = "/".join(path) or "<all>"
        self.log(
            LogLevel.TRACE,
            f"Copied {scope} from {source_name} into {tree.type_name}",
        )
        return True

    def _merge_root(self, tree: DocumentationTree, placeholder: _Placeholder) -> bool:
        """Copy type-level content from the first candidate that has some."""
        path = placeholder.path
        for candidate in self._candidates(tree, placeholder):
            source = self._usable(candidate.root, path, candidate.type_name)
            if source is None:
                continue
            if self._copy(tree, tree.root, path, source, candidate.type_name):
                return True
        return False

    @staticmethod
    def _matches(
        base_key: MemberKey,
        placeholder: _Placeholder,
        member: MemberFragment | None,
    ) -> bool:
        if member is None:
            return True
        target = placeholder.target
        if target is not None and not target.is_type_only:
            return base_key == target
        return base_key.same_member(member.key)

    def _merge_members(
        self,
        tree: DocumentationTree,
        placeholder: _Placeholder,
        member: MemberFragment | None,
    ) -> bool:
        """Copy member documentation from every matching candidate member.

        With ``member`` set only that member is resolved; otherwise every
        member of each candidate is inherited under the current type. A
        destination that already holds content at the path is never
        overwritten, so the nearest candidate wins.
        """
        path = placeholder.path
        copied = False
        for candidate in self._candidates(tree, placeholder):
            for base in list(candidate.members):
                if not self._matches(base.key, placeholder, member):
                    continue
                source = self._usable(base.fragment, path, str(base.key))
                if source is None:
                    continue

                if member is not None:
                    new_key = member.key
                else:
                    new_key = base.key.for_type(tree.type_name)
                existing = tree.members_with_key(new_key)
                if not existing:
                    tree.add_member(new_key, source.copy())
                    tree.changed = True
                    copied = True
                    continue
                if len(existing) > 1:
                    self.log(
                        LogLevel.WARN,
                        f"Found multiple matching elements where name='{new_key}'",
                    )
                destination = existing[0].fragment
                try:
                    if destination.has_content(path):
                        continue
                except FragmentPathError as e:
                    self.log(LogLevel.WARN, f"Skipping {new_key}: {e}")
                    continue
                if self._copy(tree, destination, path, source, str(base.key)):
                    copied = True
        return copied

    def _report_unresolved(
        self, owner: str, placeholder: _Placeholder, copied: bool
    ) -> None:
        if placeholder.cref and not copied:
            self.log(
                LogLevel.WARN,
                f"Nothing to inherit from cref '{placeholder.cref}' in {owner}",
            )
