"""
Byte escaping for Debug-mode text.

Debug text is quoted and every byte that would be ambiguous or invisible in a
terminal is escaped: the classic control characters get a backslash shorthand
(\\t, \\n, \\r, \\\\, \\"), every other control byte gets a \\xHH escape.
Non-ASCII bytes are left alone, so valid UTF-8 stays valid UTF-8.

All functions operate on single byte values (ints in 0..255).
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Final

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type


# @formatter:off

class EscapeConf:
    """
    Escaping constants.

    Attributes:
        BACKSLASH_ESCAPES: Bytes with a two-byte backslash shorthand, mapped to
            the byte that follows the backslash.
        HEX_DIGITS: ASCII hex digits used for \\xHH escapes, uppercase.
        DEL: The DEL control byte, escaped like C0 control bytes.
    """
    BACKSLASH_ESCAPES: Final = frozendict({
        0x09: ord("t"),   # \t
        0x0A: ord("n"),   # \n
        0x0D: ord("r"),   # \r
        0x22: ord('"'),   # \"
        0x5C: ord("\\"),  # \\
    })

    HEX_DIGITS: Final = b"0123456789ABCDEF"

    DEL: Final = 0x7F

# @formatter:on

BACKSLASH: Final = ord("\\")
QUOTE: Final = ord('"')


# Methods --------------------------------------------------------------------------------------------------------------


def needs_escaping(byte: int) -> bool:
    """
    Return True if byte must be escaped inside Debug-mode text.

    Examples:
        >>> needs_escaping(ord("a"))
        False
        >>> needs_escaping(ord("\\t"))
        True
    """
    _check_byte(byte)
    return byte < 0x20 or byte == EscapeConf.DEL or byte in EscapeConf.BACKSLASH_ESCAPES


def backslash_shorthand(byte: int) -> int | None:
    """Return the byte following the backslash for a shorthand escape, or None if byte has none."""
    _check_byte(byte)
    return EscapeConf.BACKSLASH_ESCAPES.get(byte)


def hex_nibble_to_ascii(nibble: int) -> int:
    """
    Convert a 4-bit value to its ASCII hex digit.

    Raises:
        ValueError: If nibble is outside 0..15.
    """
    if not isinstance(nibble, int) or isinstance(nibble, bool):
        raise TypeError(f"nibble must be int, but got {fmt_type(nibble)}")
    if not 0 <= nibble <= 15:
        raise ValueError(f"nibble must be in range 0..15, but got {nibble}")
    return EscapeConf.HEX_DIGITS[nibble]


def escaped_width(byte: int) -> int:
    """
    Number of bytes the Debug-mode rendering of byte occupies.

    Returns:
        1 for plain bytes, 2 for backslash shorthands, 4 for \\xHH escapes.
    """
    if not needs_escaping(byte):
        return 1
    if byte in EscapeConf.BACKSLASH_ESCAPES:
        return 2
    return 4


def escape_byte(byte: int) -> bytes:
    """
    Debug-mode rendering of a single byte.

    Examples:
        >>> escape_byte(0x09)
        b'\\\\t'
        >>> escape_byte(0x01)
        b'\\\\x01'
    """
    if not needs_escaping(byte):
        return bytes((byte,))
    shorthand = backslash_shorthand(byte)
    if shorthand is not None:
        return bytes((BACKSLASH, shorthand))
    return bytes((BACKSLASH, ord("x"), hex_nibble_to_ascii(byte >> 4), hex_nibble_to_ascii(byte & 0x0F)))


def escape_bytes(data: bytes) -> bytes:
    """
    Escape every byte of data, without surrounding quotes.

    Examples:
        >>> escape_bytes(b'say "hi"\\n')
        b'say \\\\"hi\\\\"\\\\n'
    """
    return b"".join(escape_byte(b) for b in data)


# Private Methods ------------------------------------------------------------------------------------------------------


def _check_byte(byte: int) -> None:
    if not isinstance(byte, int) or isinstance(byte, bool):
        raise TypeError(f"byte must be int, but got {fmt_type(byte)}")
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"byte must be in range 0..255, but got {byte}")
