"""Snapshot persistence for loading extractor output and saving comparisons.

Snapshot files use the camelCase document shape produced by the metadata
extractor. They are validated with pydantic and converted to the frozen
records the comparison engine consumes.
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from package_comparer.comparison.models import ComparisonResult
from package_comparer.exceptions import SnapshotLoadError
from package_comparer.snapshot.models import (
    AttributeRecord,
    MemberKind,
    MemberRecord,
    PackageSnapshot,
    TypeKind,
    TypeRecord,
    split_full_name,
)
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AttributeDocument(_Document):
    """Attribute as written in a snapshot file."""

    name: str = Field(..., min_length=1)
    arguments: list[str] = Field(default_factory=list)

    def to_record(self) -> AttributeRecord:
        return AttributeRecord(name=self.name, arguments=tuple(self.arguments))


class MemberDocument(_Document):
    """Member as written in a snapshot file."""

    name: str = Field(..., min_length=1)
    kind: MemberKind
    signature: str
    is_public: bool = True
    attributes: list[AttributeDocument] = Field(default_factory=list)

    def to_record(self) -> MemberRecord:
        return MemberRecord(
            name=self.name,
            kind=self.kind,
            signature=self.signature,
            is_public=self.is_public,
            attributes=tuple(a.to_record() for a in self.attributes),
        )


class TypeDocument(_Document):
    """Type as written in a snapshot file.

    ``simpleName`` and ``namespace`` may be omitted; they are then derived
    from ``fullName``.
    """

    full_name: str = Field(..., min_length=1)
    simple_name: str | None = None
    namespace: str | None = None
    kind: TypeKind
    is_public: bool = True
    members: list[MemberDocument] = Field(default_factory=list)
    attributes: list[AttributeDocument] = Field(default_factory=list)

    def to_record(self) -> TypeRecord:
        derived_simple_name, derived_namespace = split_full_name(self.full_name)
        has_explicit_namespace = "namespace" in self.model_fields_set
        return TypeRecord(
            full_name=self.full_name,
            simple_name=self.simple_name or derived_simple_name,
            namespace=self.namespace if has_explicit_namespace else derived_namespace,
            kind=self.kind,
            is_public=self.is_public,
            members=tuple(m.to_record() for m in self.members),
            attributes=tuple(a.to_record() for a in self.attributes),
        )


class SnapshotDocument(_Document):
    """Top-level snapshot file."""

    package_id: str = Field(..., min_length=1)
    version: str
    types: list[TypeDocument] = Field(default_factory=list)

    def to_snapshot(self) -> PackageSnapshot:
        return PackageSnapshot(
            package_id=self.package_id,
            version=self.version,
            types=tuple(t.to_record() for t in self.types),
        )


def parse_snapshot(data: Any, source: str = "<memory>") -> PackageSnapshot:
    """Validate raw snapshot data and build a PackageSnapshot.

    Args:
        data: Decoded JSON/YAML document
        source: Where the data came from, for error messages

    Returns:
        PackageSnapshot built from the document

    Raises:
        SnapshotLoadError: If the document does not match the snapshot shape
    """
    try:
        document = SnapshotDocument.model_validate(data)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot document {source}: {e}") from e
    return document.to_snapshot()


def load_snapshot(snapshot_file: Path | str) -> PackageSnapshot:
    """Load a package snapshot from a JSON or YAML file.

    Args:
        snapshot_file: Path to the snapshot file

    Returns:
        Loaded PackageSnapshot

    Raises:
        SnapshotLoadError: If the file is missing, unparsable or invalid
    """
    snapshot_path = Path(snapshot_file)

    if not snapshot_path.is_file():
        raise SnapshotLoadError(f"Snapshot file not found: {snapshot_path}")

    try:
        with open(snapshot_path, encoding="utf-8") as f:
            if snapshot_path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotLoadError(f"Could not parse snapshot {snapshot_path}: {e}") from e
    except OSError as e:
        raise SnapshotLoadError(f"Could not read snapshot {snapshot_path}: {e}") from e

    snapshot = parse_snapshot(data, str(snapshot_path))

    logger.info(
        "snapshot_loaded",
        file=str(snapshot_path),
        package_id=snapshot.package_id,
        version=snapshot.version,
        types=len(snapshot.types),
        members=snapshot.member_count,
    )

    return snapshot


def save_snapshot(snapshot: PackageSnapshot, output_file: Path | str) -> Path:
    """Save a package snapshot as JSON.

    Args:
        snapshot: Snapshot to save
        output_file: Destination path

    Returns:
        Path of the written file
    """
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, indent=2)

    logger.info("snapshot_saved", file=str(output_path), package_id=snapshot.package_id)
    return output_path


def save_comparison(result: ComparisonResult, output_file: Path | str) -> Path:
    """Save a comparison result as JSON.

    Args:
        result: Comparison to save
        output_file: Destination path

    Returns:
        Path of the written file
    """
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = {"generatedAt": datetime.now(UTC).isoformat(), **result.to_dict()}

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    logger.info(
        "comparison_saved",
        file=str(output_path),
        type_comparisons=len(result.type_comparisons),
        breaking_changes=result.has_breaking_changes,
    )
    return output_path
