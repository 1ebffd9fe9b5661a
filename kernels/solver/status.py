from __future__ import annotations

from enum import Enum


class Status(Enum):
    """
    Status codes returned by every solver entry point and handle operation.

    Entry points never raise for bad arguments; they report one of these.
    """

    SUCCESS = "success"
    INVALID_HANDLE = "invalid_handle"
    INVALID_POINTER = "invalid_pointer"
    INVALID_SIZE = "invalid_size"
    MEMORY_ERROR = "memory_error"
    SIZE_QUERY_MISMATCH = "size_query_mismatch"
    SIZE_INCREASED = "size_increased"
    SIZE_UNCHANGED = "size_unchanged"
    INVALID_VALUE = "invalid_value"
    # Internal: argument checking passed, keep going.
    CONTINUE = "continue"

    def __str__(self) -> str:
        return self.value


# Statuses a kernel may legitimately return while the handle is in
# memory-size query mode.
QUERY_OK = frozenset({Status.SIZE_INCREASED, Status.SIZE_UNCHANGED})


__all__ = ["Status", "QUERY_OK"]
