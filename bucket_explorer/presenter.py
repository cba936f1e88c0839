from __future__ import annotations
"""View-agnostic presenter that wraps controller operations."""
from dataclasses import replace
import logging
import threading
from typing import Callable

from .controller import BucketExplorerController
from .models import BucketListing, ObjectEntry, SortDirection
from .parser import ListingParseError
from .services import BucketExplorerService, ListingFetcher, ListingFetchError
from .settings import AppSettings, SettingsStorage
from .ui_utils import PackageInfo, load_package_info


DispatchFn = Callable[[Callable[[], None]], None]
ErrorFn = Callable[[str], None]
DoneFn = Callable[[], None]

LOGGER = logging.getLogger(__name__)


def _format_error(exc: Exception) -> str:
    return str(exc)


class BucketExplorerPresenter:
    """Runs background fetches and returns results via callbacks."""

    def __init__(
        self,
        *,
        controller: BucketExplorerController | None = None,
        settings_storage: SettingsStorage | None = None,
        dispatch: DispatchFn | None = None,
    ) -> None:
        self._settings_storage = settings_storage or SettingsStorage()
        self._settings = self._settings_storage.load()
        self._controller = controller or BucketExplorerController(
            BucketExplorerService(ListingFetcher(timeout=self._settings.request_timeout)),
            sort_direction=self._settings.default_sort,
        )
        self._dispatch = dispatch or (lambda func: func())
        self._package_info = load_package_info()

    @property
    def settings(self) -> AppSettings:
        return replace(self._settings)

    @property
    def package_info(self) -> PackageInfo:
        return self._package_info

    @property
    def has_listing(self) -> bool:
        return self._controller.has_listing

    @property
    def listing(self) -> BucketListing | None:
        return self._controller.listing

    @property
    def sort_direction(self) -> SortDirection:
        return self._controller.sort_direction

    def update_last_url(self, url: str) -> None:
        if not self._settings.remember_last_url:
            return
        self._settings = replace(self._settings, last_url=url or "")
        self._settings_storage.save(self._settings)

    def initial_url(self) -> str:
        if not self._settings.remember_last_url:
            return ""
        return self._settings.last_url

    def set_search_text(self, text: str) -> list[ObjectEntry]:
        self._controller.set_search_text(text)
        return self.visible_objects()

    def toggle_sort_direction(self) -> SortDirection:
        direction = self._controller.toggle_sort_direction()
        LOGGER.debug("Sort direction is now '%s'", direction.value)
        return direction

    def visible_objects(self) -> list[ObjectEntry]:
        if not self._controller.has_listing:
            return []
        return self._controller.visible_objects()

    def load_text(self, xml_text: str | bytes) -> BucketListing:
        return self._controller.load_text(xml_text)

    def fetch_listing(
        self,
        *,
        url: str,
        on_success: Callable[[BucketListing], None],
        on_error: ErrorFn,
        on_done: DoneFn | None = None,
    ) -> None:
        LOGGER.debug("Fetching listing from '%s'", url)
        def task() -> None:
            try:
                listing = self._controller.load_url(url)
            except (ListingFetchError, ListingParseError, ValueError) as exc:
                LOGGER.warning("Listing error for '%s': %s", url, exc)
                message = _format_error(exc)
                self._dispatch(lambda msg=message: on_error(msg))
            except Exception as exc:
                LOGGER.exception("Unexpected listing error for '%s'", url)
                message = _format_error(exc)
                self._dispatch(lambda msg=message: on_error(msg))
            else:
                LOGGER.debug(
                    "Loaded %d object(s) from bucket '%s'",
                    listing.total_count,
                    listing.bucket_name,
                )
                self.update_last_url(url)
                self._dispatch(lambda: on_success(listing))
            finally:
                if on_done:
                    self._dispatch(on_done)

        threading.Thread(target=task, daemon=True).start()
