from __future__ import annotations
"""UI-agnostic helpers for formatting listing values."""
from dataclasses import dataclass
from datetime import timezone
from importlib.metadata import PackageNotFoundError, metadata, version
import math

from .models import BucketListing, Owner
from .query import parse_timestamp

DIST_NAME = "bucket-explorer"
SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
DEFAULT_STORAGE_CLASS = "STANDARD"
UNKNOWN_DATE = "Unknown"


@dataclass(frozen=True)
class PackageInfo:
    name: str
    version: str
    summary: str
    homepage: str | None
    repository: str | None
    author: str | None


def load_package_info(dist_name: str = DIST_NAME) -> PackageInfo:
    try:
        distribution_metadata = metadata(dist_name)
        package_version = version(dist_name)
    except PackageNotFoundError:
        return PackageInfo(
            name="S3 Bucket Explorer",
            version="",
            summary="Browse the objects of a public bucket listing.",
            homepage=None,
            repository=None,
            author=None,
        )
    summary = distribution_metadata.get("Summary") or ""
    author = distribution_metadata.get("Author") or distribution_metadata.get("Author-email")
    homepage = distribution_metadata.get("Home-page")
    repository = None
    for entry in distribution_metadata.get_all("Project-URL") or []:
        label, _, link = entry.partition(",")
        label = label.strip().lower()
        url = link.strip()
        if label == "repository":
            repository = url
        elif label == "homepage" and not homepage:
            homepage = url
    return PackageInfo(
        name=distribution_metadata.get("Name"),
        version=package_version,
        summary=summary,
        homepage=homepage or None,
        repository=repository,
        author=author or None,
    )


def format_size(size_bytes: int | None) -> str:
    """Render a byte count with 1024-based units and at most two decimals."""

    if not size_bytes or size_bytes <= 0:
        return "0 B"
    exponent = min(int(math.log(size_bytes, 1024)), len(SIZE_UNITS) - 1)
    # log() can land just below an exact power of 1024
    if exponent + 1 < len(SIZE_UNITS) and size_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{size_bytes / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"


def format_last_modified(last_modified: str | None) -> str:
    if not last_modified:
        return UNKNOWN_DATE
    moment = parse_timestamp(last_modified)
    if moment is None:
        return last_modified
    try:
        moment = moment.astimezone(timezone.utc)
    except OverflowError:
        return last_modified
    return f"{moment:%b} {moment.day}, {moment:%Y, %I:%M %p}"


def storage_class_label(storage_class: str | None) -> str:
    return storage_class or DEFAULT_STORAGE_CLASS


def describe_owner(owner: Owner | None) -> str:
    if owner is None:
        return "-"
    return owner.display_name or owner.id or "-"


def summarize_listing(listing: BucketListing, visible_count: int | None = None) -> str:
    noun = "object" if listing.total_count == 1 else "objects"
    summary = f"{listing.total_count} {noun}, {format_size(listing.total_size_bytes)}"
    if visible_count is not None and visible_count != listing.total_count:
        summary = f"Showing {visible_count} of {summary}"
    if listing.is_truncated:
        summary += " (truncated)"
    return summary
