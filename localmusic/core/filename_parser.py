"""Fallback title/artist parsing from bare filenames."""

from __future__ import annotations

from typing import NamedTuple

UNKNOWN_TITLE = "Unknown track"
SEPARATOR = " - "


class ParsedName(NamedTuple):
    title: str
    artist: str | None


def strip_extension(filename: str) -> str:
    """Drop the last ``.ext``; a leading dot is part of the name, not an extension."""
    dot = filename.rfind(".")
    return filename[:dot] if dot > 0 else filename


def parse_filename(filename: str | None, unknown_title: str = UNKNOWN_TITLE) -> ParsedName:
    """Split ``"Title - Artist.ext"`` into its parts.

    Names without the separator, or where it sits at the very start or
    end of the stem, yield the whole stem as the title and no artist.
    """
    if not filename:
        return ParsedName(unknown_title, None)

    stem = strip_extension(filename)
    index = stem.find(SEPARATOR)
    if 0 < index < len(stem) - len(SEPARATOR):
        title = stem[:index].strip()
        artist = stem[index + len(SEPARATOR):].strip()
        return ParsedName(title or unknown_title, artist or None)

    return ParsedName(stem.strip() or unknown_title, None)
