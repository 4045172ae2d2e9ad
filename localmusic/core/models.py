"""Result types produced by a storage scan."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass, field
from typing import Any


def track_id_for(path: str | os.PathLike) -> str:
    """Derive an identifier that is stable for a given absolute path."""
    digest = hashlib.sha1(os.fspath(path).encode("utf-8", "surrogateescape"))
    return digest.hexdigest()[:16]


@dataclass
class AudioTrack:
    """A playable audio file discovered on storage."""
    id: str
    name: str
    local_path: str
    file_size: int = 0
    artist: str | None = None
    album: str | None = None
    duration: int = 0  # milliseconds, 0 means unknown

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "artist": self.artist,
            "album": self.album,
            "duration": self.duration,
            "localPath": self.local_path,
            "fileSize": self.file_size,
        }


@dataclass
class ScanResult:
    """Structured outcome of a scan request."""
    success: bool
    files: list[AudioTrack] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def ok(cls, files: list[AudioTrack]) -> ScanResult:
        return cls(success=True, files=list(files))

    @classmethod
    def failure(cls, error: str) -> ScanResult:
        return cls(success=False, files=[], error=error)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "files": [track.as_dict() for track in self.files],
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload
