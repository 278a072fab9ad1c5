import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import package_comparer without installing
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from package_comparer.snapshot.models import (  # noqa: E402
    AttributeRecord,
    MemberKind,
    MemberRecord,
    PackageSnapshot,
    TypeKind,
    TypeRecord,
)


def member(
    name: str,
    signature: str | None = None,
    kind: MemberKind = MemberKind.METHOD,
    is_public: bool = True,
    attributes: tuple[AttributeRecord, ...] = (),
) -> MemberRecord:
    return MemberRecord(
        name=name,
        kind=kind,
        signature=signature if signature is not None else f"void {name}()",
        is_public=is_public,
        attributes=tuple(attributes),
    )


def prop(name: str, type_name: str = "string") -> MemberRecord:
    return member(name, f"public {type_name} {name} {{ get; set; }}", MemberKind.PROPERTY)


def enum_values(*names: str) -> tuple[MemberRecord, ...]:
    return tuple(member(n, n, MemberKind.FIELD) for n in names)


def type_record(
    full_name: str,
    *members: MemberRecord,
    kind: TypeKind = TypeKind.CLASS,
    attributes: tuple[AttributeRecord, ...] = (),
) -> TypeRecord:
    return TypeRecord.create(full_name, kind, members=members, attributes=attributes)


def snapshot(*types: TypeRecord, package_id: str = "Acme.Core", version: str = "1.0.0") -> PackageSnapshot:
    return PackageSnapshot(package_id=package_id, version=version, types=tuple(types))


@pytest.fixture
def make_member():
    """Factory for member records (methods by default)."""
    return member


@pytest.fixture
def make_prop():
    """Factory for auto-property members."""
    return prop


@pytest.fixture
def make_enum_values():
    """Factory for enum value members, one per name."""
    return enum_values


@pytest.fixture
def make_type():
    """Factory for type records with derived simple name and namespace."""
    return type_record


@pytest.fixture
def make_snapshot():
    """Factory for package snapshots."""
    return snapshot


@pytest.fixture
def user_snapshots():
    """Foo.User gains an Email property between versions."""
    old = snapshot(
        type_record("Foo.User", prop("Id", "int"), prop("Name")),
        version="1.0.0",
    )
    new = snapshot(
        type_record("Foo.User", prop("Id", "int"), prop("Name"), prop("Email")),
        version="2.0.0",
    )
    return old, new


@pytest.fixture
def widget_snapshots():
    """Widget moves from namespace A to namespace B unchanged."""
    members = (member("Render", "void Render()"), member("Resize", "void Resize(int width, int height)"))
    old = snapshot(type_record("A.Widget", *members), version="1.0.0")
    new = snapshot(type_record("B.Widget", *members), version="2.0.0")
    return old, new


@pytest.fixture
def color_snapshots():
    """Color enum moves namespace; Black is replaced by Purple."""
    old = snapshot(
        type_record(
            "NS1.Color",
            *enum_values("Red", "Green", "Blue", "Yellow", "Black"),
            kind=TypeKind.ENUM,
        ),
        version="1.0.0",
    )
    new = snapshot(
        type_record(
            "NS2.Color",
            *enum_values("Red", "Green", "Blue", "Yellow", "Purple"),
            kind=TypeKind.ENUM,
        ),
        version="2.0.0",
    )
    return old, new


@pytest.fixture
def snapshot_dir(tmp_path: Path, user_snapshots):
    """Snapshot root laid out as <packageId>/<version>.json."""
    old, new = user_snapshots
    package_dir = tmp_path / "snapshots" / old.package_id
    package_dir.mkdir(parents=True)
    for snap in (old, new):
        (package_dir / f"{snap.version}.json").write_text(json.dumps(snap.to_dict()))
    return tmp_path / "snapshots"
