"""Data models for package snapshots.

A snapshot is the extractor-produced description of one package's public
type graph at one version. Records are frozen once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeKind(str, Enum):
    """Kinds of exported types."""

    CLASS = "Class"
    INTERFACE = "Interface"
    ENUM = "Enum"
    STRUCT = "Struct"
    DELEGATE = "Delegate"


class MemberKind(str, Enum):
    """Kinds of type members."""

    METHOD = "Method"
    PROPERTY = "Property"
    FIELD = "Field"
    EVENT = "Event"
    CONSTRUCTOR = "Constructor"


def split_full_name(full_name: str) -> tuple[str, str | None]:
    """Split a namespace-qualified type name.

    Args:
        full_name: Full type name, e.g. ``"Acme.Billing.Invoice"``

    Returns:
        Tuple of (simple_name, namespace). Namespace is None for types
        declared outside any namespace.
    """
    namespace, sep, simple_name = full_name.rpartition(".")
    if not sep:
        return full_name, None
    return simple_name, namespace


@dataclass(frozen=True)
class AttributeRecord:
    """Declarative annotation attached to a type or member."""

    name: str
    arguments: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.arguments:
            return f"[{self.name}]"
        return f"[{self.name}({', '.join(self.arguments)})]"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": list(self.arguments)}


@dataclass(frozen=True)
class MemberRecord:
    """Exported member of a type.

    The signature is the member's identity within its type, which is what
    lets overloads with distinct parameter lists be tracked separately.
    """

    name: str
    kind: MemberKind
    signature: str
    is_public: bool = True
    attributes: tuple[AttributeRecord, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "signature": self.signature,
            "isPublic": self.is_public,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
        }


@dataclass(frozen=True)
class TypeRecord:
    """Exported type with its members and attributes."""

    full_name: str
    simple_name: str
    namespace: str | None
    kind: TypeKind
    is_public: bool = True
    members: tuple[MemberRecord, ...] = ()
    attributes: tuple[AttributeRecord, ...] = ()

    @classmethod
    def create(
        cls,
        full_name: str,
        kind: TypeKind,
        members: tuple[MemberRecord, ...] = (),
        attributes: tuple[AttributeRecord, ...] = (),
        is_public: bool = True,
    ) -> "TypeRecord":
        """Build a record, deriving simple name and namespace from the full name."""
        simple_name, namespace = split_full_name(full_name)
        return cls(
            full_name=full_name,
            simple_name=simple_name,
            namespace=namespace,
            kind=kind,
            is_public=is_public,
            members=tuple(members),
            attributes=tuple(attributes),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase snapshot document shape."""
        return {
            "fullName": self.full_name,
            "simpleName": self.simple_name,
            "namespace": self.namespace,
            "kind": self.kind.value,
            "isPublic": self.is_public,
            "members": [member.to_dict() for member in self.members],
            "attributes": [attribute.to_dict() for attribute in self.attributes],
        }


@dataclass(frozen=True)
class PackageSnapshot:
    """Public surface of one package version.

    Types keep their discovery order; they need not be sorted.
    """

    package_id: str
    version: str
    types: tuple[TypeRecord, ...] = field(default_factory=tuple)

    @property
    def display_name(self) -> str:
        """Name used in comparison results, e.g. ``"Acme.Core 2.1.0"``."""
        return f"{self.package_id} {self.version}"

    @property
    def member_count(self) -> int:
        """Total number of members across all types."""
        return sum(len(type_record.members) for type_record in self.types)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase snapshot document shape."""
        return {
            "packageId": self.package_id,
            "version": self.version,
            "types": [type_record.to_dict() for type_record in self.types],
        }
