"""Shared fixtures for LocalMusic tests."""

from __future__ import annotations

import os
import struct
import wave
from pathlib import Path

import pytest

from localmusic.core import tagger


class _Info:
    def __init__(self, length):
        self.length = length


class FakeAudio:
    """Mimics a ``mutagen.File`` result: native ``tags`` plus ``info.length``."""

    def __init__(self, tags: dict[str, list], length):
        self.tags = tags
        self.info = _Info(length)


class FakeContainer:
    """Registry of per-filename container responses.

    Unregistered files behave like an unrecognised format.
    """

    def __init__(self) -> None:
        self.responses: dict[str, object] = {}
        self.opened: list = []

    def set(self, filename: str, length=None, **tags: str) -> None:
        """Register Vorbis-style lowercase tags for *filename*."""
        self.set_native(filename, {key: [value] for key, value in tags.items()}, length)

    def set_native(self, filename: str, tags: dict[str, list], length=None) -> None:
        """Register tags keyed exactly as the container stores them."""
        self.responses[filename] = FakeAudio(tags, length)

    def fail(self, filename: str, exc: Exception) -> None:
        self.responses[filename] = exc

    def __call__(self, fh, *args, **kwargs):
        self.opened.append(fh)
        response = self.responses.get(os.path.basename(fh.name))
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_container(monkeypatch) -> FakeContainer:
    container = FakeContainer()
    monkeypatch.setattr(tagger.mutagen, "File", container)
    return container


def make_file(path: Path, content: bytes = b"\x00" * 64) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def make_wav(path: Path, seconds: float, rate: int = 8000) -> Path:
    """Write a silent 8-bit mono PCM WAV file of the given length."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as out:
        out.setnchannels(1)
        out.setsampwidth(1)
        out.setframerate(rate)
        out.writeframes(b"\x80" * int(seconds * rate))
    return path


def make_flac(path: Path, seconds: int, rate: int = 44100) -> Path:
    """Write a FLAC stream holding only a STREAMINFO block.

    mutagen takes the length from STREAMINFO, so no audio frames are needed.
    """
    packed = (rate << 44) | (1 << 41) | (15 << 36) | (seconds * rate)
    streaminfo = (
        struct.pack(">HH", 4096, 4096)
        + b"\x00" * 6
        + struct.pack(">Q", packed)
        + b"\x00" * 16
    )
    header = bytes([0x80]) + len(streaminfo).to_bytes(3, "big")
    return make_file(path, b"fLaC" + header + streaminfo)


def make_mp3(path: Path, frames: int = 40) -> Path:
    """Write *frames* silent MPEG1 Layer3 frames (128kbps, 44100Hz)."""
    frame = bytes([0xFF, 0xFB, 0x90, 0x00]) + b"\x00" * 413
    return make_file(path, frame * frames)
