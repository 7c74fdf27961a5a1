from __future__ import annotations


class ScreenerError(RuntimeError):
    """Base class for library-level screener errors."""

    code = "SCREENER_ERROR"

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message or message


class ScreenerValidationError(ScreenerError):
    code = "VALIDATION_ERROR"


class SnapshotFetchError(ScreenerError):
    """Raised when the snapshot store cannot be reached or read."""

    code = "FETCH_ERROR"


class FetchInProgressError(ScreenerError):
    """Raised when a fetch is requested while another one is outstanding."""

    code = "FETCH_IN_PROGRESS"


class SelectionMismatchError(ScreenerError):
    """Raised by strict selection when the record is not in the current view."""

    code = "SELECTION_MISMATCH"
