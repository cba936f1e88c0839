from __future__ import annotations
"""Fetching and parsing of remote bucket listings."""
import logging
from typing import Callable

import requests

from .models import BucketListing
from .parser import parse_listing

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
USER_AGENT = "bucket-explorer"


class ListingFetchError(RuntimeError):
    """Raised when the listing document cannot be retrieved."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ListingFetcher:
    """Retrieves listing documents over HTTP."""

    def __init__(
        self,
        session_factory: Callable[[], requests.Session] | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._session_factory = session_factory or requests.Session
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    @timeout.setter
    def timeout(self, value: float) -> None:
        if value <= 0:
            raise ValueError("timeout must be greater than zero")
        self._timeout = value

    def fetch_document(self, url: str) -> bytes:
        """Return the raw body of ``url``, leaving decoding to the XML parser.

        Raises:
            ValueError: when ``url`` is blank.
            ListingFetchError: on a non-success response or a network failure.
        """

        target = (url or "").strip()
        if not target:
            raise ValueError("URL cannot be empty")

        LOGGER.debug("Fetching listing from %s", target)
        session = self._session_factory()
        try:
            response = session.get(
                target,
                timeout=self._timeout,
                headers={"User-Agent": USER_AGENT, "Accept": "application/xml, text/xml, */*"},
            )
        except requests.RequestException as exc:
            raise ListingFetchError(f"Error fetching listing: {exc}") from exc
        finally:
            session.close()

        if not response.ok:
            raise ListingFetchError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
            )
        LOGGER.debug("Fetched %d byte(s) from %s", len(response.content), target)
        return response.content


class BucketExplorerService:
    """Encapsulates listing retrieval independent of any UI technology."""

    def __init__(self, fetcher: ListingFetcher | None = None):
        self._fetcher = fetcher or ListingFetcher()

    def fetch_listing(self, url: str) -> BucketListing:
        """Fetch and parse the listing published at ``url``.

        Raises:
            ListingFetchError: when unable to retrieve the document.
            ListingParseError: when the document is not well-formed XML.
        """

        return self.parse_listing(self._fetcher.fetch_document(url))

    def parse_listing(self, xml_text: str | bytes) -> BucketListing:
        return parse_listing(xml_text)
