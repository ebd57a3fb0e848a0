#
# Fatalfmt Fixed-Capacity Buffer
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import BufferOverflowError
from .utils import fmt_type

SPACE = ord(" ")


# Classes --------------------------------------------------------------------------------------------------------------

class FixedBuffer:
    """
    Byte buffer preallocated at a fixed capacity.

    The backing bytearray is allocated once, at construction, and never resized.
    Writes past the capacity raise BufferOverflowError.

    Examples:
        >>> buf = FixedBuffer(8)
        >>> buf.extend(b"abc")
        >>> buf.pad(2)
        >>> buf.getvalue()
        b'abc  '
        >>> buf.remaining
        3
    """
    __slots__ = ("_data", "_len")

    def __init__(self, capacity: int) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError(f"capacity must be int, but got {fmt_type(capacity)}")
        if capacity < 0:
            raise ValueError(f"capacity must be nonnegative, but got {capacity}")
        self._data = bytearray(capacity)
        self._len = 0

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self._len

    def __len__(self) -> int:
        return self._len

    def push(self, byte: int) -> None:
        if self._len >= len(self._data):
            raise BufferOverflowError(f"write past the end of a {len(self._data)}-byte buffer")
        self._data[self._len] = byte
        self._len += 1

    def extend(self, data: Iterable[int]) -> None:
        for byte in data:
            self.push(byte)

    def pad(self, count: int) -> None:
        """Write count spaces."""
        for _ in range(count):
            self.push(SPACE)

    def getvalue(self) -> bytes:
        """Bytes written so far."""
        return bytes(self._data[:self._len])

    def __repr__(self) -> str:
        return f"FixedBuffer(len={self._len}, capacity={len(self._data)})"
