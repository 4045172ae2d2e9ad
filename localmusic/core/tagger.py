"""Read container metadata for discovered audio files via mutagen."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import mutagen

from localmusic.core.filename_parser import parse_filename
from localmusic.core.models import AudioTrack, track_id_for
from localmusic.core.options import ScanOptions
from localmusic.errors import ErrorCode, LocalMusicError, classify_exception

logger = logging.getLogger(__name__)

# Native tag keys per field, tried in order. ID3 frames cover MP3, WAV and
# AIFF; then MP4 atoms, ASF attributes, and Vorbis/APEv2 field names
# (case-insensitive in mutagen).
TITLE_KEYS = ("TIT2", "\xa9nam", "Title", "title")
ARTIST_KEYS = ("TPE1", "\xa9ART", "Author", "artist")
ALBUM_KEYS = ("TALB", "\xa9alb", "WM/AlbumTitle", "album")


@dataclass
class ContainerTags:
    """Raw tag values as read from the container, before any fallback."""
    title: str | None = None
    artist: str | None = None
    album: str | None = None
    duration_ms: int | None = None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return _text(value[0]) if value else None
    # ID3 text frames hold their values in .text
    frame_text = getattr(value, "text", None)
    if isinstance(frame_text, list):
        return _text(frame_text[0]) if frame_text else None
    # APEv2 joins multiple values with NUL
    return str(value).split("\0")[0]


def _first(tags: Any, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        try:
            value = tags.get(key)
        except (KeyError, ValueError):
            # Vorbis comments reject keys outside their charset
            continue
        text = _text(value)
        if text:
            return text
    return None


def _duration_ms(audio: Any) -> int | None:
    info = getattr(audio, "info", None)
    length = getattr(info, "length", None)
    if length is None:
        return None
    try:
        seconds = float(length)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(seconds):
        return None
    if seconds <= 0:
        return 0
    return int(round(seconds * 1000))


def read_container_tags(path: str | Path) -> ContainerTags:
    """Open *path* as a media container and read its basic tags.

    Tags are read from the container's native keys, so ID3 in WAV/AIFF and
    ASF attributes in WMA are covered as well as MP3, MP4, FLAC and Ogg.
    The file handle is closed before returning on every path.

    Raises:
        LocalMusicError: If the container format is not recognised.
        OSError, mutagen.MutagenError: If the file cannot be read.
    """
    path = Path(path)
    with open(path, "rb") as fh:
        audio = mutagen.File(fh)
        if audio is None:
            raise LocalMusicError(ErrorCode.TAG_UNSUPPORTED_FORMAT, path=path)
        tags = getattr(audio, "tags", None)
        if tags is None:
            return ContainerTags(duration_ms=_duration_ms(audio))
        return ContainerTags(
            title=_first(tags, TITLE_KEYS),
            artist=_first(tags, ARTIST_KEYS),
            album=_first(tags, ALBUM_KEYS),
            duration_ms=_duration_ms(audio),
        )


class MetadataExtractor:
    """Builds AudioTrack records from files, preferring embedded tags."""

    def __init__(self, options: ScanOptions | None = None) -> None:
        self._options = options or ScanOptions()

    @property
    def options(self) -> ScanOptions:
        return self._options

    def _usable(self, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        if not cleaned or cleaned in self._options.unknown_tag_values:
            return None
        return cleaned

    def extract(self, path: str | Path) -> AudioTrack | None:
        """Return a track for *path*, or None if it must not be listed.

        None means the file vanished or is unreadable, or its container
        reports a duration shorter than the configured minimum. Tag read
        failures never propagate; the filename-derived fields are kept.
        """
        path = Path(path)
        try:
            size = path.stat().st_size
        except OSError as exc:
            logger.debug("Skipping %s: %s", path, exc)
            return None
        if not os.access(path, os.R_OK):
            logger.debug("Skipping unreadable file %s", path)
            return None

        absolute = os.path.abspath(path)
        parsed = parse_filename(path.name, self._options.unknown_title)
        track = AudioTrack(
            id=track_id_for(absolute),
            name=parsed.title,
            local_path=absolute,
            file_size=size,
            artist=parsed.artist,
        )

        try:
            tags = read_container_tags(path)
        except Exception as exc:
            error = classify_exception(exc, path)
            logger.debug("Tag read failed for %s (%s): %s", path, error.code.name, exc)
            track.album = None
            track.duration = 0
            return track

        if tags.duration_ms is not None:
            if tags.duration_ms < self._options.min_duration_ms:
                logger.debug("Dropping %s: duration %d ms below minimum", path, tags.duration_ms)
                return None
            track.duration = tags.duration_ms

        title = self._usable(tags.title)
        if title:
            track.name = title
        artist = self._usable(tags.artist)
        if artist:
            track.artist = artist
        track.album = self._usable(tags.album)
        return track
