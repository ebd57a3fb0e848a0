"""
Truncated-length computation for Display and Debug text.

Given the UTF-8 bytes of a text run and a byte budget, work out how many source
bytes can be rendered and how many output bytes they occupy. Debug text is
measured in whole escape units, so a cut never lands inside a backslash or \\xHH
sequence. Both modes back off to a UTF-8 character boundary.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass

# Local ----------------------------------------------------------------------------------------------------------------
from .escaping import escaped_width


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Cut:
    """
    Outcome of fitting content into a byte budget.

    Attributes:
        length: Number of source bytes that are rendered.
        width: Number of output bytes the rendering occupies, Debug quotes and
            escapes included.
        truncated: True when the full content could not be rendered.
    """
    length: int
    width: int
    truncated: bool = False

    @classmethod
    def whole(cls, length: int, width: int | None = None) -> "Cut":
        return cls(length, length if width is None else width, False)

    @classmethod
    def partial(cls, length: int = 0, width: int | None = None) -> "Cut":
        return cls(length, length if width is None else width, True)


# Methods --------------------------------------------------------------------------------------------------------------

def truncated_str_len(data: bytes, budget: int) -> Cut:
    """
    Fit Display-mode text into budget bytes.

    Examples:
        >>> truncated_str_len(b"hello", 10)
        Cut(length=5, width=5, truncated=False)
        >>> truncated_str_len(b"hello", 3)
        Cut(length=3, width=3, truncated=True)
        >>> truncated_str_len("aé".encode(), 2)
        Cut(length=1, width=1, truncated=True)
    """
    if len(data) <= budget:
        return Cut.whole(len(data))
    length = _char_boundary(data, max(budget, 0))
    return Cut.partial(length)


def truncated_debug_str_len(data: bytes, budget: int) -> Cut:
    """
    Fit Debug-mode text into budget bytes, quotes included.

    The opening quote takes one byte, every source byte takes its escaped width,
    and the closing quote takes one more byte. Escape sequences are never split:
    the first byte whose escape does not fit ends the visible content.

    A zero budget renders nothing, not even the opening quote.

    Examples:
        >>> truncated_debug_str_len(b"a\\tb", 6)
        Cut(length=3, width=6, truncated=False)
        >>> truncated_debug_str_len(b"a\\tb", 3)
        Cut(length=1, width=2, truncated=True)
    """
    if budget <= 0:
        return Cut.partial(0, 0)

    room = budget - 1  # opening quote
    used = 0
    for i, byte in enumerate(data):
        w = escaped_width(byte)
        if used + w > room:
            length = _char_boundary(data, i)
            # Bytes skipped by the boundary back-off are never escaped, one byte each
            used -= i - length
            return Cut.partial(length, 1 + used)
        used += w

    if used + 1 > room:
        return Cut.partial(len(data), 1 + used)
    return Cut.whole(len(data), used + 2)


# Private Methods ------------------------------------------------------------------------------------------------------

def _char_boundary(data: bytes, index: int) -> int:
    """Largest index <= index that does not fall inside a UTF-8 multi-byte sequence."""
    while 0 < index < len(data) and 0x80 <= data[index] <= 0xBF:
        index -= 1
    return index
