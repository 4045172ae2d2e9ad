"""Worker for running a full storage scan off the caller's thread."""

from __future__ import annotations

from time import monotonic

from localmusic.core.coordinator import ScanCoordinator
from localmusic.core.models import AudioTrack
from localmusic.workers.base_worker import BaseWorker


class ScanWorker(BaseWorker):
    """Runs ScanCoordinator.start_full_scan in a background thread."""

    def __init__(self, coordinator: ScanCoordinator, root_dir: str) -> None:
        super().__init__()
        self._coordinator = coordinator
        self._root_dir = root_dir
        self._last_emit = 0.0

    def _on_track(self, track: AudioTrack, count: int) -> None:
        now = monotonic()
        # Throttle progress events to avoid flooding the receiver's event queue.
        if count == 1 or count % 25 == 0 or (now - self._last_emit) >= 0.05:
            self.progress.emit(count, 0, track.name)
            self._last_emit = now

    def run(self) -> None:
        self.started.emit()
        result = self._coordinator.start_full_scan(self._root_dir, on_track=self._on_track)
        if result.success and result.files:
            self.progress.emit(len(result.files), 0, result.files[-1].name)
        if not result.success:
            self.error.emit(result.error or "")
        self.finished.emit(result.as_dict())
