"""Decide which filesystem entries a scan should look at."""

from __future__ import annotations

import os
from pathlib import Path

AUDIO_EXTENSIONS = frozenset({
    ".mp3", ".flac", ".wav", ".m4a", ".aac",
    ".ogg", ".wma", ".ape", ".opus", ".m4b",
})

# Matched as substrings of the absolute, '/'-separated path.
RESERVED_SEGMENTS = ("/Android/data/", "/Android/obb/", "/.trash", "/.cache")


def is_audio_file(name: str | None, extensions=AUDIO_EXTENSIONS) -> bool:
    """Return True if *name* ends with one of the allowed audio extensions."""
    if not name:
        return False
    lower = name.lower()
    return any(lower.endswith(ext) for ext in extensions)


def is_prunable_directory(path: str | Path | None, reserved_segments=RESERVED_SEGMENTS) -> bool:
    """Return True if the directory must never be descended into.

    Hidden directories (leaf name starting with a dot) and OS-reserved
    locations such as ``Android/data`` are pruned.
    """
    if path is None:
        return True
    text = os.fspath(path)
    leaf = os.path.basename(text.rstrip("/\\"))
    if leaf.startswith("."):
        return True
    normalized = text.replace("\\", "/").rstrip("/") + "/"
    return any(segment in normalized for segment in reserved_segments)
