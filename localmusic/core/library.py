"""Operations on individual tracks returned by a scan."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    success: bool
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass
class FileUrlResult(OperationResult):
    url: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload = super().as_dict()
        if self.url is not None:
            payload["url"] = self.url
        return payload


def get_local_file_url(local_path: str | None) -> FileUrlResult:
    """Convert a scanned track path into a ``file://`` URL a player can open."""
    if not local_path:
        return FileUrlResult(success=False, error="localPath is required")
    try:
        path = Path(local_path)
        if not path.exists():
            return FileUrlResult(success=False, error="File not found")
        return FileUrlResult(success=True, url=path.resolve().as_uri())
    except (OSError, ValueError) as exc:
        return FileUrlResult(success=False, error=f"Failed to get file URL: {exc}")


def delete_local_track(local_path: str | None) -> OperationResult:
    """Remove a track from storage. A file that is already gone counts as deleted."""
    if not local_path:
        return OperationResult(success=False, error="localPath is required")
    path = Path(local_path)
    try:
        path.unlink()
    except FileNotFoundError:
        return OperationResult(success=True)
    except PermissionError as exc:
        return OperationResult(success=False, error=f"Permission denied: {exc}")
    except OSError as exc:
        logger.warning("Failed to delete %s: %s", path, exc)
        return OperationResult(success=False, error=f"Failed to delete file: {exc}")
    logger.info("Deleted %s", path)
    return OperationResult(success=True)
