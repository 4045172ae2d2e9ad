"""QCoreApplication bootstrap for command-line scans."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import sys
from typing import Any, Callable

from PySide6.QtCore import QCoreApplication, QObject, QThread, Slot

from localmusic.config.settings import AppSettings
from localmusic.core.coordinator import ScanCoordinator
from localmusic.core.options import ScanOptions
from localmusic.workers.scan_worker import ScanWorker

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings: AppSettings, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("localmusic")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler = RotatingFileHandler(
        settings.log_dir / "scan.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(console)
    logger.propagate = False
    return logger


class _ResultReceiver(QObject):
    """Collects the worker's payload on the thread that created it."""

    def __init__(self, on_result: Callable[[dict[str, Any]], None]) -> None:
        super().__init__()
        self._on_result = on_result
        self.payload: dict[str, Any] | None = None

    @Slot(object)
    def receive(self, payload: dict[str, Any]) -> None:
        self.payload = payload
        self._on_result(payload)
        QCoreApplication.quit()


def run_scan(
    root: str,
    options: ScanOptions,
    on_result: Callable[[dict[str, Any]], None],
) -> dict[str, Any]:
    """Scan *root* on a worker thread and hand the payload to *on_result* on this thread."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    coordinator = ScanCoordinator(options)
    worker = ScanWorker(coordinator, root)
    receiver = _ResultReceiver(on_result)
    thread = QThread()
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    worker.finished.connect(receiver.receive)
    worker.finished.connect(thread.quit)

    try:
        thread.start()
        app.exec()
    finally:
        thread.quit()
        thread.wait()
        coordinator.shutdown()

    return receiver.payload or {"success": False, "files": [], "error": "Scan did not complete"}
