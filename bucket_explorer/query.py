from __future__ import annotations
"""Search and ordering over parsed listings."""
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from .models import BucketListing, ObjectEntry, SortDirection

EPOCH = 0.0


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse ISO-8601 or RFC 1123 text into an aware datetime.

    Naive values are taken as UTC. Returns ``None`` when neither format applies.
    """

    text = (value or "").strip()
    if not text:
        return None
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        moment = datetime.fromisoformat(iso_text)
    except ValueError:
        try:
            moment = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def timestamp_of(last_modified: str | None) -> float:
    """Return POSIX seconds for ``last_modified``, or the epoch when unusable."""

    moment = parse_timestamp(last_modified)
    if moment is None:
        return EPOCH
    try:
        return moment.timestamp()
    except (OverflowError, OSError):
        return EPOCH


def normalize_direction(direction: SortDirection | str | None) -> SortDirection:
    if isinstance(direction, SortDirection):
        return direction
    try:
        return SortDirection(str(direction or "").strip().lower())
    except ValueError:
        return SortDirection.ASCENDING


def matches_search(entry: ObjectEntry, needle: str) -> bool:
    return needle in entry.key.casefold()


def query_objects(
    listing: BucketListing,
    search_text: str | None = "",
    direction: SortDirection | str | None = SortDirection.ASCENDING,
) -> list[ObjectEntry]:
    """Return the listing's objects filtered by key and ordered by last modified time.

    The filter is a case-insensitive substring match on the key and is skipped
    when ``search_text`` is blank. The sort is stable, so objects with equal
    timestamps keep their document order in both directions.
    """

    needle = (search_text or "").strip().casefold()
    objects = list(listing.objects)
    if needle:
        objects = [entry for entry in objects if matches_search(entry, needle)]
    objects.sort(
        key=lambda entry: timestamp_of(entry.last_modified),
        reverse=normalize_direction(direction) is SortDirection.DESCENDING,
    )
    return objects
