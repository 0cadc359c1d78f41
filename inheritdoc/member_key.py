"""Identity of a documented element and parsing of XML documentation IDs."""

from dataclasses import dataclass
from enum import Enum


class MemberKind(Enum):
    """Kind prefix of an XML documentation ID."""

    TYPE = "T"
    FIELD = "F"
    PROPERTY = "P"
    METHOD = "M"
    EVENT = "E"


@dataclass(frozen=True)
class MemberKey:
    """Identity of a documented type or member.

    ``signature`` holds the parameter list of methods and indexers, e.g.
    ``(System.Int32)``, so overloads get distinct keys.
    """

    kind: MemberKind
    type_name: str
    member_name: str | None = None
    signature: str | None = None

    def __str__(self) -> str:
        """Render the key as an XML documentation ID."""
        if not self.member_name:
            return f"{self.kind.value}:{self.type_name}"
        signature = self.signature or ""
        return f"{self.kind.value}:{self.type_name}.{self.member_name}{signature}"

    @property
    def is_type_only(self) -> bool:
        """Check if the key names a type rather than one of its members."""
        return self.member_name is None

    def same_member(self, other: "MemberKey") -> bool:
        """Check kind, name and signature, ignoring the owning type."""
        return (
            self.kind == other.kind
            and self.member_name == other.member_name
            and self.signature == other.signature
        )

    def for_type(self, type_name: str) -> "MemberKey":
        """Return the same member re-keyed onto another type."""
        return MemberKey(self.kind, type_name, self.member_name, self.signature)


def parse_member_key(text: str) -> MemberKey:
    """Parse an XML documentation ID such as ``M:Ns.Type.Method(System.String)``.

    Raises ValueError for text without a known kind prefix.
    """
    text = text.strip()
    kind_text, sep, rest = text.partition(":")
    if not sep or not rest:
        msg = f"Missing kind prefix in '{text}'"
        raise ValueError(msg)
    kind = MemberKind(kind_text)

    if kind is MemberKind.TYPE:
        return MemberKey(kind, rest)

    paren = rest.find("(")
    head = rest if paren == -1 else rest[:paren]
    signature = None if paren == -1 else rest[paren:]
    dot = head.rfind(".")
    if dot == -1:
        # No member separator: a reference to the type itself.
        return MemberKey(kind, head)
    return MemberKey(kind, head[:dot], head[dot + 1 :], signature)
