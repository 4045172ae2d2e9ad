"""Tunable knobs shared by the scan pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace

from localmusic.core.classifier import AUDIO_EXTENSIONS, RESERVED_SEGMENTS
from localmusic.core.filename_parser import UNKNOWN_TITLE

MIN_DURATION_MS = 60_000
MAX_DEPTH = 20
UNKNOWN_TAG_VALUES = frozenset({"<unknown>", ""})


@dataclass(frozen=True)
class ScanOptions:
    """Immutable scan configuration.

    Tracks whose container reports a duration below ``min_duration_ms``
    are dropped; tag values found in ``unknown_tag_values`` are treated as
    missing.
    """
    min_duration_ms: int = MIN_DURATION_MS
    max_depth: int = MAX_DEPTH
    audio_extensions: frozenset[str] = AUDIO_EXTENSIONS
    reserved_segments: tuple[str, ...] = RESERVED_SEGMENTS
    unknown_tag_values: frozenset[str] = UNKNOWN_TAG_VALUES
    unknown_title: str = UNKNOWN_TITLE

    def with_overrides(self, **changes) -> ScanOptions:
        cleaned = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **cleaned)
