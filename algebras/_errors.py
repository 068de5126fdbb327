from __future__ import annotations

# Literal failure messages. Tests and callers compare against these verbatim.
UNKNOWN_ERROR = "Unknown error"
OPTION_EMPTY = "Option had no value."
TRY_NOT_SUCCESSFUL = "Try was not successful."
OPERATION_CANCELLED = "Operation was cancelled."
HTTP_CANCELLED = "HTTP request was cancelled."
HTTP_PAYLOAD_EMPTY = "HTTP payload was empty."
CHANNEL_WRITE_CANCELLED = "Channel write was cancelled."
CHANNEL_COMPLETED = "Channel was already completed."
DB_CANCELLED = "Database operation was cancelled."
NO_TRANSACTION = "No active transaction and begin_if_missing is disabled."
LENS_NOT_INITIALIZED = "Lens is not initialized."


class InvalidOperationError(RuntimeError):
    """A value was unwrapped in a state that has no value to give."""


class LensNotInitializedError(InvalidOperationError):
    """get/set was called on a Lens built without accessors."""

    def __init__(self) -> None:
        super().__init__(LENS_NOT_INITIALIZED)


__all__ = (
    "InvalidOperationError",
    "LensNotInitializedError",
    "UNKNOWN_ERROR",
    "OPTION_EMPTY",
    "TRY_NOT_SUCCESSFUL",
    "OPERATION_CANCELLED",
    "HTTP_CANCELLED",
    "HTTP_PAYLOAD_EMPTY",
    "CHANNEL_WRITE_CANCELLED",
    "CHANNEL_COMPLETED",
    "DB_CANCELLED",
    "NO_TRANSACTION",
    "LENS_NOT_INITIALIZED",
)
