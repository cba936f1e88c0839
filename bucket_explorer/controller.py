from __future__ import annotations
"""Controller layer holding the current listing and the view's query state."""

from .models import BucketListing, ObjectEntry, SortDirection
from .query import normalize_direction, query_objects
from .services import BucketExplorerService


class NoListingError(RuntimeError):
    """Raised when listing contents are requested before a listing was loaded."""


class BucketExplorerController:
    """Coordinates user actions with the :class:`BucketExplorerService`."""

    def __init__(
        self,
        service: BucketExplorerService | None = None,
        *,
        sort_direction: SortDirection | str = SortDirection.ASCENDING,
    ):
        self._service = service or BucketExplorerService()
        self._listing: BucketListing | None = None
        self._source_url: str | None = None
        self._search_text = ""
        self._sort_direction = normalize_direction(sort_direction)

    @property
    def has_listing(self) -> bool:
        return self._listing is not None

    @property
    def listing(self) -> BucketListing | None:
        return self._listing

    @property
    def source_url(self) -> str | None:
        return self._source_url

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def sort_direction(self) -> SortDirection:
        return self._sort_direction

    def load_url(self, url: str) -> BucketListing:
        listing = self._service.fetch_listing(url)
        self._listing = listing
        self._source_url = url.strip()
        return listing

    def load_text(self, xml_text: str | bytes) -> BucketListing:
        listing = self._service.parse_listing(xml_text)
        self._listing = listing
        self._source_url = None
        return listing

    def clear(self) -> None:
        self._listing = None
        self._source_url = None

    def set_search_text(self, text: str | None) -> None:
        self._search_text = text or ""

    def set_sort_direction(self, direction: SortDirection | str) -> None:
        self._sort_direction = normalize_direction(direction)

    def toggle_sort_direction(self) -> SortDirection:
        self._sort_direction = self._sort_direction.toggled()
        return self._sort_direction

    def visible_objects(self) -> list[ObjectEntry]:
        listing = self._require_listing()
        return query_objects(listing, self._search_text, self._sort_direction)

    def _require_listing(self) -> BucketListing:
        if self._listing is None:
            raise NoListingError("No listing loaded")
        return self._listing
