"""Application settings via QSettings."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PySide6.QtCore import QSettings

from localmusic.core.classifier import RESERVED_SEGMENTS
from localmusic.core.filename_parser import UNKNOWN_TITLE
from localmusic.core.options import (
    MAX_DEPTH,
    MIN_DURATION_MS,
    UNKNOWN_TAG_VALUES,
    ScanOptions,
)

logger = logging.getLogger(__name__)


def _as_int(raw: object, default: int, minimum: int) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Invalid integer setting %r, using %d", raw, default)
        return default
    if value < minimum:
        logger.warning("Setting %d below minimum %d, using %d", value, minimum, default)
        return default
    return value


def _as_str_list(raw: object) -> list[str] | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        # QSettings ini backend returns single-element lists as plain strings
        return [raw]
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw]
    return None


class AppSettings:
    """Wraps QSettings for persistent scan configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("LocalMusic", "LocalMusic")

    # -- directories --

    @property
    def last_root(self) -> str:
        return self._qs.value("dirs/last_root", "", type=str)

    @last_root.setter
    def last_root(self, value: str) -> None:
        self._qs.setValue("dirs/last_root", value)

    # -- filtering --

    @property
    def min_duration_ms(self) -> int:
        return _as_int(self._qs.value("scan/min_duration_ms", MIN_DURATION_MS), MIN_DURATION_MS, 0)

    @min_duration_ms.setter
    def min_duration_ms(self, value: int) -> None:
        if value < 0:
            raise ValueError("min_duration_ms must be >= 0")
        self._qs.setValue("scan/min_duration_ms", int(value))

    @property
    def max_depth(self) -> int:
        return _as_int(self._qs.value("scan/max_depth", MAX_DEPTH), MAX_DEPTH, 0)

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        if value < 0:
            raise ValueError("max_depth must be >= 0")
        self._qs.setValue("scan/max_depth", int(value))

    # -- tag handling --

    @property
    def unknown_tag_values(self) -> frozenset[str]:
        items = _as_str_list(self._qs.value("tags/unknown_values"))
        if items is None:
            return UNKNOWN_TAG_VALUES
        # The empty string always means "no data".
        return frozenset(item.strip() for item in items) | {""}

    @unknown_tag_values.setter
    def unknown_tag_values(self, value: list[str] | frozenset[str]) -> None:
        self._qs.setValue("tags/unknown_values", sorted(item.strip() for item in value if item.strip()))

    @property
    def unknown_title(self) -> str:
        raw = self._qs.value("tags/unknown_title", UNKNOWN_TITLE, type=str)
        value = (raw or "").strip()
        return value or UNKNOWN_TITLE

    @unknown_title.setter
    def unknown_title(self, value: str) -> None:
        cleaned = (value or "").strip() or UNKNOWN_TITLE
        self._qs.setValue("tags/unknown_title", cleaned)

    # -- pruning --

    @property
    def reserved_segments(self) -> tuple[str, ...]:
        items = _as_str_list(self._qs.value("scan/reserved_segments"))
        if not items:
            return RESERVED_SEGMENTS
        return tuple(item for item in items if item)

    @reserved_segments.setter
    def reserved_segments(self, value: list[str] | tuple[str, ...]) -> None:
        self._qs.setValue("scan/reserved_segments", [item for item in value if item])

    # -- helpers --

    def scan_options(self) -> ScanOptions:
        """Build the immutable options the scan pipeline consumes."""
        return ScanOptions(
            min_duration_ms=self.min_duration_ms,
            max_depth=self.max_depth,
            reserved_segments=self.reserved_segments,
            unknown_tag_values=self.unknown_tag_values,
            unknown_title=self.unknown_title,
        )

    def sync(self) -> None:
        self._qs.sync()

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "localmusic"
