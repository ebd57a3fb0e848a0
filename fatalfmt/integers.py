#
# Fatalfmt Integer Scratch
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import Enum, unique
from typing import Final, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type


class IntConf:
    """
    Integer encoding constants.

    Attributes:
        SCRATCH_LEN: Size of the decimal scratch buffer. Holds the digits and sign
            of any integer up to MAX_BITS wide.
        MAX_BITS: Widest supported integer width.
    """
    SCRATCH_LEN: Final = 40
    MAX_BITS: Final = 128


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Sign(Enum):
    POSITIVE = "+"
    NEGATIVE = "-"


class IntScratch:
    """
    Decimal digits of an integer held in a fixed 40-byte buffer.

    Digits are written from the end of the buffer backward, followed by an optional
    leading '-'. The valid text is buffer[start:]. Instances are immutable once built.

    Examples:
        >>> IntScratch.from_signed(-42).digits
        b'-42'
        >>> IntScratch.from_unsigned(0).digits
        b'0'
        >>> len(IntScratch.from_unsigned(2**128 - 1))
        39
    """
    __slots__ = ("_buffer", "_start")

    def __init__(self, sign: Sign, magnitude: int) -> None:
        if not isinstance(sign, Sign):
            raise TypeError(f"sign must be Sign, but got {fmt_type(sign)}")
        _check_int(magnitude, "magnitude")
        if magnitude < 0:
            raise ValueError(f"magnitude must be nonnegative, but got {magnitude}")
        if magnitude.bit_length() > IntConf.MAX_BITS:
            raise OverflowError(f"magnitude does not fit in {IntConf.MAX_BITS} bits")

        buffer = bytearray(IntConf.SCRATCH_LEN)
        start = IntConf.SCRATCH_LEN
        n = magnitude
        while True:
            start -= 1
            n, digit = divmod(n, 10)
            buffer[start] = ord("0") + digit
            if n == 0:
                break

        if sign is Sign.NEGATIVE:
            start -= 1
            buffer[start] = ord("-")

        object.__setattr__(self, "_buffer", bytes(buffer))
        object.__setattr__(self, "_start", start)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_signed(cls, n: int, bits: int = IntConf.MAX_BITS) -> Self:
        """
        Encode a signed integer of the given width.

        Raises:
            TypeError: If n is not an int (bool is rejected too).
            OverflowError: If n does not fit in a signed integer of `bits` width.
        """
        _check_int(n, "n")
        _check_bits(bits)
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        if not low <= n <= high:
            raise OverflowError(f"{n} is out of range for a signed {bits}-bit integer")
        sign = Sign.NEGATIVE if n < 0 else Sign.POSITIVE
        return cls(sign, abs(n))

    @classmethod
    def from_unsigned(cls, n: int, bits: int = IntConf.MAX_BITS) -> Self:
        """
        Encode an unsigned integer of the given width.

        Raises:
            TypeError: If n is not an int (bool is rejected too).
            OverflowError: If n is negative or does not fit in `bits` width.
        """
        _check_int(n, "n")
        _check_bits(bits)
        if not 0 <= n < (1 << bits):
            raise OverflowError(f"{n} is out of range for an unsigned {bits}-bit integer")
        return cls(Sign.POSITIVE, n)

    @property
    def start(self) -> int:
        """Offset of the first valid byte in the scratch buffer."""
        return self._start

    @property
    def digits(self) -> bytes:
        return bytes(self._buffer[self._start:])

    def __len__(self) -> int:
        return IntConf.SCRATCH_LEN - self._start

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntScratch):
            return NotImplemented
        return self.digits == other.digits

    def __hash__(self) -> int:
        return hash(self.digits)

    def __repr__(self) -> str:
        return f"IntScratch({self.digits.decode('ascii')})"


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_int(value, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, but got {fmt_type(value)}")


def _check_bits(bits: int) -> None:
    _check_int(bits, "bits")
    if not 1 <= bits <= IntConf.MAX_BITS:
        raise ValueError(f"bits must be in range 1..{IntConf.MAX_BITS}, but got {bits}")


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# The most negative supported value must fit in the scratch buffer together with its sign.
if len(str(-(1 << (IntConf.MAX_BITS - 1)))) > IntConf.SCRATCH_LEN \
        or len(str((1 << IntConf.MAX_BITS) - 1)) > IntConf.SCRATCH_LEN:
    raise AssertionError(
        "Configuration Error: IntConf.SCRATCH_LEN is too small for IntConf.MAX_BITS integers."
    )
