from __future__ import annotations
"""Data models representing parsed bucket listings."""
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_BUCKET_NAME = "Unknown Bucket"
NO_EXTENSION = "FILE"


class SortDirection(str, Enum):
    """Direction used when ordering objects by their last modified time."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    def toggled(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


@dataclass(frozen=True)
class Owner:
    """Owner information attached to an object, when the provider exposes it."""

    id: str = ""
    display_name: str = ""


@dataclass(frozen=True)
class ObjectEntry:
    """Metadata about a single object in a listing."""

    key: str
    size_bytes: int = 0
    last_modified: str = ""
    etag: str = ""
    storage_class: str = ""
    checksum_algorithm: str = ""
    owner: Optional[Owner] = None

    @property
    def extension(self) -> str:
        if "." not in self.key:
            return NO_EXTENSION
        return self.key.rsplit(".", 1)[-1].upper()


@dataclass(frozen=True)
class BucketListing:
    """Represents one parsed listing document."""

    bucket_name: str = DEFAULT_BUCKET_NAME
    prefix: str = ""
    max_keys: str = ""
    is_truncated: bool = False
    objects: tuple[ObjectEntry, ...] = field(default_factory=tuple)

    @property
    def total_count(self) -> int:
        return len(self.objects)

    @property
    def total_size_bytes(self) -> int:
        return sum(entry.size_bytes for entry in self.objects)

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["objects"] = [
            {**asdict(entry), "extension": entry.extension} for entry in self.objects
        ]
        payload["total_count"] = self.total_count
        payload["total_size_bytes"] = self.total_size_bytes
        return payload
