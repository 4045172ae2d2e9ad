"""Base worker class with standard signals for background operations."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class BaseWorker(QObject):
    """Base class for background workers using moveToThread pattern.

    Signals emitted from the worker thread are delivered to receivers on
    their own thread through queued connections.

    Usage:
        worker = SomeWorker(args)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.start()
    """

    started = Signal()
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # result payload
    error = Signal(str)                 # error message

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)

    def run(self) -> None:
        """Override in subclass. Called when thread starts."""
        raise NotImplementedError
