from __future__ import annotations
"""Application settings persistence helpers."""

from dataclasses import asdict, dataclass
import json
from pathlib import Path

from .models import SortDirection

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppSettings:
    """Simple container for persistent app settings."""

    request_timeout: int = 30
    default_sort: str = SortDirection.ASCENDING.value
    remember_last_url: bool = True
    last_url: str = ""
    log_level: str = "WARNING"


class SettingsStorage:
    """JSON-backed persistence for :class:`AppSettings`."""

    def __init__(self, storage_path: str | Path | None = None):
        if storage_path is None:
            storage_path = Path.home() / ".bucket_explorer_settings.json"
        self._path = Path(storage_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppSettings:
        if not self._path.exists():
            return AppSettings()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return AppSettings()
        if not isinstance(data, dict):
            return AppSettings()

        timeout = data.get("request_timeout", AppSettings.request_timeout)
        try:
            timeout_value = int(timeout)
        except (TypeError, ValueError):
            timeout_value = AppSettings.request_timeout
        if timeout_value <= 0:
            timeout_value = AppSettings.request_timeout

        default_sort = data.get("default_sort")
        if default_sort not in {direction.value for direction in SortDirection}:
            default_sort = AppSettings.default_sort

        remember = data.get("remember_last_url", AppSettings.remember_last_url)
        if not isinstance(remember, bool):
            remember = AppSettings.remember_last_url

        last_url = data.get("last_url")
        if not isinstance(last_url, str):
            last_url = ""

        log_level = data.get("log_level")
        if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
            log_level = AppSettings.log_level

        return AppSettings(
            request_timeout=timeout_value,
            default_sort=default_sort,
            remember_last_url=remember,
            last_url=last_url,
            log_level=log_level.upper(),
        )

    def save(self, settings: AppSettings) -> None:
        payload = asdict(settings)
        payload["request_timeout"] = max(int(settings.request_timeout), 1)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError:
            # Persist best-effort; ignore filesystem issues.
            return
