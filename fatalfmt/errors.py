"""
Exceptions raised while rendering fatal diagnostic messages.

FatalError is the only exception a caller is expected to see in normal operation:
it carries the rendered message. NotEnoughSpace is an internal retry signal between
the buffer-fill driver and the escalating-capacity controller. InternalFaultError
flags an accounting defect and is never a consequence of the input.
"""

# Classes --------------------------------------------------------------------------------------------------------------


class FatalError(Exception):
    """
    Fatal diagnostic raised by concat_panic() and friends.

    Attributes:
        message: The fully rendered diagnostic text.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotEnoughSpace(Exception):
    """Buffer capacity of the current tier is too small, retry at the next one."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"not enough space in a buffer of {capacity} bytes")
        self.capacity = capacity


class InternalFaultError(RuntimeError):
    """Capacity/truncation accounting is inconsistent."""


class BufferOverflowError(InternalFaultError):
    """A write went past the fixed buffer capacity."""
