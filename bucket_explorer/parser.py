from __future__ import annotations
"""Parsing of ``ListBucketResult`` documents into :class:`BucketListing` values."""
from enum import Enum
import logging
import re
from typing import Iterator, Optional
from xml.etree import ElementTree

from .models import DEFAULT_BUCKET_NAME, BucketListing, ObjectEntry, Owner

LOGGER = logging.getLogger(__name__)

PARSER_ERROR_TAG = "parsererror"
_LEADING_INT = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))")


class ParseErrorKind(str, Enum):
    MALFORMED_XML = "malformed_xml"


class ListingParseError(ValueError):
    """Raised when a listing document cannot be turned into a :class:`BucketListing`."""

    def __init__(
        self,
        detail: str,
        *,
        kind: ParseErrorKind = ParseErrorKind.MALFORMED_XML,
        position: tuple[int, int] | None = None,
    ):
        super().__init__(f"Failed to parse XML: {detail}")
        self.kind = kind
        self.detail = detail
        self.position = position


def local_name(tag: object) -> str:
    """Return ``tag`` without its ``{namespace}`` prefix."""

    if not isinstance(tag, str):
        # comments and processing instructions carry a factory as their tag
        return ""
    return tag.rsplit("}", 1)[-1]


def iter_named(element: ElementTree.Element, name: str) -> Iterator[ElementTree.Element]:
    """Yield ``element`` and its descendants named ``name`` in document order."""

    for candidate in element.iter():
        if local_name(candidate.tag) == name:
            yield candidate


def find_first(element: ElementTree.Element, name: str) -> Optional[ElementTree.Element]:
    return next(iter_named(element, name), None)


def text_content(element: Optional[ElementTree.Element]) -> str:
    if element is None:
        return ""
    return "".join(element.itertext())


def find_text(element: ElementTree.Element, name: str, default: str = "") -> str:
    return text_content(find_first(element, name)) or default


def coerce_int(text: str | None) -> int:
    """Best-effort integer parse that keeps the leading numeric prefix.

    ``"2048"`` gives 2048, ``"12abc"`` gives 12 and anything without leading
    digits gives 0.
    """

    match = _LEADING_INT.match(text or "")
    if not match:
        return 0
    sign, hex_digits, digits = match.groups()
    value = int(hex_digits, 16) if hex_digits else int(digits)
    return -value if sign == "-" else value


def derive_extension(key: str) -> str:
    return ObjectEntry(key=key).extension


def parse_listing(xml_text: str | bytes) -> BucketListing:
    """Parse a bucket listing document.

    Raises:
        ListingParseError: when the text is not well-formed XML.
    """

    try:
        root = ElementTree.fromstring(xml_text)
    except ElementTree.ParseError as exc:
        raise ListingParseError(str(exc), position=getattr(exc, "position", None)) from exc
    if local_name(root.tag) == PARSER_ERROR_TAG:
        raise ListingParseError(text_content(root).strip() or "Invalid XML format")

    objects: list[ObjectEntry] = []
    skipped = 0
    for contents in iter_named(root, "Contents"):
        entry = _parse_contents(contents)
        if entry is None:
            skipped += 1
            continue
        objects.append(entry)
    if skipped:
        LOGGER.debug("Skipped %d Contents element(s) without a key", skipped)

    listing = BucketListing(
        bucket_name=find_text(root, "Name", DEFAULT_BUCKET_NAME),
        prefix=find_text(root, "Prefix"),
        max_keys=find_text(root, "MaxKeys"),
        is_truncated=find_text(root, "IsTruncated") == "true",
        objects=tuple(objects),
    )
    LOGGER.debug(
        "Parsed listing for bucket '%s' (%d object(s), %d byte(s))",
        listing.bucket_name,
        listing.total_count,
        listing.total_size_bytes,
    )
    return listing


def _parse_contents(contents: ElementTree.Element) -> ObjectEntry | None:
    key = find_text(contents, "Key")
    if not key:
        return None

    owner = None
    owner_element = find_first(contents, "Owner")
    if owner_element is not None:
        owner = Owner(
            id=find_text(owner_element, "ID"),
            display_name=find_text(owner_element, "DisplayName"),
        )

    return ObjectEntry(
        key=key,
        size_bytes=coerce_int(find_text(contents, "Size", "0")),
        last_modified=find_text(contents, "LastModified"),
        etag=find_text(contents, "ETag").replace('"', ""),
        storage_class=find_text(contents, "StorageClass"),
        checksum_algorithm=find_text(contents, "ChecksumAlgorithm"),
        owner=owner,
    )
