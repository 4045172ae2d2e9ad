"""Error codes and error handling utilities for LocalMusic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path


class ErrorCode(Enum):
    """Standardized error codes for LocalMusic operations."""

    # Scan lifecycle
    SCAN_IN_PROGRESS = auto()
    PERMISSION_DENIED = auto()

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    PATH_INVALID = auto()

    # Tag errors
    TAG_READ_FAILED = auto()
    TAG_CORRUPT = auto()
    TAG_UNSUPPORTED_FORMAT = auto()

    OPERATION_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.SCAN_IN_PROGRESS: "Scan already in progress",
    ErrorCode.PERMISSION_DENIED: "Permission denied",

    ErrorCode.FILE_NOT_FOUND: "File not found",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check storage permissions for this folder.",
    ErrorCode.PATH_INVALID: "The specified path is invalid or inaccessible.",

    ErrorCode.TAG_READ_FAILED: "Failed to read tags. The file format may not be supported.",
    ErrorCode.TAG_CORRUPT: "The tag metadata is corrupt.",
    ErrorCode.TAG_UNSUPPORTED_FORMAT: "This file format is not supported for tag reading.",

    ErrorCode.OPERATION_FAILED: "Operation failed.",
}


@dataclass
class LocalMusicError(Exception):
    """Scan or file error carrying an ErrorCode and the affected path."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        if self.path:
            return f"{self.message}: {self.path}"
        return self.message


def classify_exception(exc: Exception, path: Path | None = None) -> LocalMusicError:
    """Classify a generic exception into a LocalMusicError with appropriate code."""
    if isinstance(exc, LocalMusicError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    # File system errors
    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return LocalMusicError(ErrorCode.FILE_NOT_FOUND, path=path)
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return LocalMusicError(ErrorCode.FILE_ACCESS_DENIED, path=path)
    if isinstance(exc, (NotADirectoryError, IsADirectoryError)):
        return LocalMusicError(ErrorCode.PATH_INVALID, path=path)

    # Tag errors - mutagen raises format specific subclasses of MutagenError
    if "HeaderNotFoundError" in exc_name or "sync" in exc_str or "frame" in exc_str:
        return LocalMusicError(ErrorCode.TAG_CORRUPT, path=path)
    if "NotImplementedError" in exc_name or "unsupported" in exc_str or "not a valid" in exc_str:
        return LocalMusicError(ErrorCode.TAG_UNSUPPORTED_FORMAT, path=path)
    if "MutagenError" in exc_name or type(exc).__module__.startswith("mutagen"):
        return LocalMusicError(ErrorCode.TAG_READ_FAILED, path=path)
    if "corrupt" in exc_str or "invalid" in exc_str:
        return LocalMusicError(ErrorCode.TAG_CORRUPT, path=path)
    if isinstance(exc, OSError):
        return LocalMusicError(ErrorCode.PATH_INVALID, path=path)

    return LocalMusicError(ErrorCode.OPERATION_FAILED, message=f"{exc_name}: {exc}", path=path)


def format_error_for_user(error: LocalMusicError | Exception) -> str:
    """Format an error as the single-line string carried by scan results."""
    if isinstance(error, LocalMusicError):
        if error.path:
            return f"{error.message} ({error.path.name})"
        return error.message

    classified = classify_exception(error)
    return format_error_for_user(classified)
