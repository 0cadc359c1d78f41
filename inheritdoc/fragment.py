"""Path-addressed documentation fragments.

A fragment owns a tree of ``DocNode``s. Nodes hold mixed content (text runs
and child nodes, in document order) so inline markup survives a round trip.
Nodes have no parent pointers: lookups walk name paths from the root and
removals walk index paths into ``content`` lists.
"""

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field

from inheritdoc.errors import FragmentPathError

PLACEHOLDER = "inheritdoc"

IndexPath = tuple[int, ...]


@dataclass
class DocNode:
    """A named documentation node, e.g. ``summary`` or ``param``."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    content: list["str | DocNode"] = field(default_factory=list)

    def children(self, name: str | None = None) -> list["DocNode"]:
        """Return child nodes, optionally only those with the given name."""
        return [
            c
            for c in self.content
            if isinstance(c, DocNode) and (name is None or c.name == name)
        ]

    def text(self) -> str:
        """Return the concatenated text of this node and its descendants."""
        return "".join(c if isinstance(c, str) else c.text() for c in self.content)

    def is_empty(self) -> bool:
        """Check if the node has no child nodes and only blank text."""
        return not self.children() and not self.text().strip()


@dataclass
class Fragment:
    """An owned documentation tree rooted at an anonymous node."""

    root: DocNode = field(default_factory=lambda: DocNode("root"))

    def copy(self) -> "Fragment":
        """Return a deep copy of the fragment."""
        return copy.deepcopy(self)

    def is_empty(self) -> bool:
        """Check if the fragment holds no content."""
        return self.root.is_empty()

    def _iter_nodes(
        self, node: DocNode, prefix: IndexPath
    ) -> Iterator[tuple[IndexPath, DocNode]]:
        for i, child in enumerate(node.content):
            if isinstance(child, DocNode):
                path = (*prefix, i)
                yield path, child
                yield from self._iter_nodes(child, path)

    def find_first(self, name: str = PLACEHOLDER) -> IndexPath | None:
        """Return the index path of the first node named ``name`` in pre-order."""
        for path, node in self._iter_nodes(self.root, ()):
            if node.name == name:
                return path
        return None

    def node_at(self, index_path: IndexPath) -> DocNode:
        """Return the node at an index path; the empty path is the root."""
        node = self.root
        for i in index_path:
            child = node.content[i]
            if not isinstance(child, DocNode):
                msg = f"Index path {index_path} does not address a node"
                raise FragmentPathError(msg)
            node = child
        return node

    def name_path(self, index_path: IndexPath) -> list[str]:
        """Return the names of the nodes enclosing the node at ``index_path``.

        The root and the addressed node itself are not included, so a node
        directly under the root yields an empty path.
        """
        return [self.node_at(index_path[:k]).name for k in range(1, len(index_path))]

    def remove_at(self, index_path: IndexPath) -> None:
        """Remove a node, then remove ancestors it leaves empty.

        Cleanup stops below the root; a root left with only blank text is
        cleared.
        """
        parent_path = index_path[:-1]
        del self.node_at(parent_path).content[index_path[-1]]
        while parent_path and self.node_at(parent_path).is_empty():
            del self.node_at(parent_path[:-1]).content[parent_path[-1]]
            parent_path = parent_path[:-1]
        survivor = self.node_at(parent_path)
        if survivor.is_empty():
            survivor.content.clear()

    def strip(self, name: str = PLACEHOLDER) -> int:
        """Remove every node named ``name``; return how many were removed."""
        count = 0
        while (path := self.find_first(name)) is not None:
            self.remove_at(path)
            count += 1
        return count

    @staticmethod
    def _single_child(node: DocNode, name: str, names: list[str]) -> DocNode | None:
        matches = node.children(name)
        if len(matches) > 1:
            msg = f"Found multiple elements '{name}' along path {'/'.join(names)}"
            raise FragmentPathError(msg)
        return matches[0] if matches else None

    def _find(self, names: list[str]) -> DocNode | None:
        node: DocNode | None = self.root
        for name in names:
            if node is None:
                return None
            node = self._single_child(node, name, names)
        return node

    def _ensure(self, names: list[str]) -> DocNode:
        node = self.root
        for name in names:
            child = self._single_child(node, name, names)
            if child is None:
                child = DocNode(name)
                node.content.append(child)
            node = child
        return node

    def select(self, path: list[str]) -> list[DocNode]:
        """Return the nodes at a name path; the empty path selects the root.

        Every step but the last must match at most one node. The last step
        returns all matching siblings.
        """
        if not path:
            return [self.root]
        parent = self._find(path[:-1])
        if parent is None:
            return []
        return parent.children(path[-1])

    def has_content(self, path: list[str]) -> bool:
        """Check if any node at ``path`` holds non-empty content."""
        return any(not node.is_empty() for node in self.select(path))

    def replace_at(self, path: list[str], source: "Fragment") -> None:
        """Overwrite the content at ``path`` with a copy of ``source``'s.

        Missing nodes along the path are created. A single target node keeps
        its attributes and receives the source node's content. When either
        side holds several siblings at the last step, the target siblings
        are replaced by copies of the source siblings.
        """
        if not path:
            self.root.content = copy.deepcopy(source.root.content)
            return

        last = path[-1]
        source_nodes = source.select(path)
        target_parent = self._ensure(path[:-1])
        target_nodes = target_parent.children(last)

        if len(source_nodes) == 1 and len(target_nodes) <= 1:
            if target_nodes:
                target = target_nodes[0]
            else:
                target = DocNode(last, dict(source_nodes[0].attributes))
                target_parent.content.append(target)
            target.content = copy.deepcopy(source_nodes[0].content)
            return

        positions = [
            i
            for i, c in enumerate(target_parent.content)
            if isinstance(c, DocNode) and c.name == last
        ]
        insert_at = positions[0] if positions else len(target_parent.content)
        for i in reversed(positions):
            del target_parent.content[i]
        target_parent.content[insert_at:insert_at] = copy.deepcopy(source_nodes)
