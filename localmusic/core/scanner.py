"""Walk a storage root and collect playable audio files."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from localmusic.core.classifier import is_audio_file, is_prunable_directory
from localmusic.core.models import AudioTrack
from localmusic.core.options import ScanOptions
from localmusic.core.tagger import MetadataExtractor

logger = logging.getLogger(__name__)

TrackCallback = Callable[[AudioTrack, int], None]


class DirectoryWalker:
    """Depth-bounded traversal of a directory tree.

    Hidden and OS-reserved directories are pruned, unreadable branches are
    skipped silently, and every audio file found is run through the
    metadata extractor.
    """

    def __init__(
        self,
        options: ScanOptions | None = None,
        extractor: MetadataExtractor | None = None,
    ) -> None:
        self._options = options or ScanOptions()
        self._extractor = extractor or MetadataExtractor(self._options)

    @property
    def options(self) -> ScanOptions:
        return self._options

    def walk(self, root: str | Path | None, on_track: TrackCallback | None = None) -> list[AudioTrack]:
        """Return all tracks under *root*."""
        results: list[AudioTrack] = []
        for track in self.iter_tracks(root):
            results.append(track)
            if on_track is not None:
                on_track(track, len(results))
        return results

    def iter_tracks(self, root: str | Path | None) -> Iterator[AudioTrack]:
        """Yield tracks one at a time (for progress reporting)."""
        if root is None:
            return
        stack: list[tuple[str, int]] = [(os.path.abspath(root), 0)]
        while stack:
            directory, depth = stack.pop()
            if depth > self._options.max_depth:
                continue
            if not os.path.isdir(directory) or not os.access(directory, os.R_OK):
                logger.debug("Skipping unreadable directory %s", directory)
                continue

            subdirs: list[str] = []
            for entry in self._list(directory):
                try:
                    if entry.is_dir():
                        if not is_prunable_directory(entry.path, self._options.reserved_segments):
                            subdirs.append(entry.path)
                    elif entry.is_file() and is_audio_file(entry.name, self._options.audio_extensions):
                        track = self._extractor.extract(entry.path)
                        if track is not None:
                            yield track
                except OSError as exc:
                    logger.debug("Skipping entry %s: %s", entry.path, exc)

            # Reversed so the stack pops subdirectories in name order.
            for subdir in reversed(subdirs):
                stack.append((subdir, depth + 1))

    @staticmethod
    def _list(directory: str) -> list[os.DirEntry]:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", directory, exc)
            return []
