"""Per-type documentation: a root fragment plus keyed member fragments."""

from dataclasses import dataclass, field

from inheritdoc.fragment import Fragment
from inheritdoc.member_key import MemberKey


@dataclass
class MemberFragment:
    """Documentation for one field, property, method or event."""

    key: MemberKey
    fragment: Fragment = field(default_factory=Fragment)


@dataclass
class DocumentationTree:
    """All documentation entries of one type."""

    type_name: str
    module: str = ""
    root: Fragment = field(default_factory=Fragment)
    members: list[MemberFragment] = field(default_factory=list)
    changed: bool = False

    def members_with_key(self, key: MemberKey) -> list[MemberFragment]:
        """Return the member fragments bound to ``key``, in document order."""
        return [m for m in self.members if m.key == key]

    def add_member(self, key: MemberKey, fragment: Fragment) -> MemberFragment:
        """Append a member fragment and return it."""
        member = MemberFragment(key, fragment)
        self.members.append(member)
        return member
