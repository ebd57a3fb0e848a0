#
# Fatalfmt - Buffer Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from fatalfmt.buffer import FixedBuffer
from fatalfmt.errors import BufferOverflowError, InternalFaultError


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFixedBuffer:
    def test_writes(self):
        buf = FixedBuffer(8)
        buf.push(ord("a"))
        buf.extend(b"bc")
        buf.pad(2)
        assert buf.getvalue() == b"abc  "
        assert len(buf) == 5
        assert buf.capacity == 8
        assert buf.remaining == 3

    def test_fill_to_capacity(self):
        buf = FixedBuffer(3)
        buf.extend(b"xyz")
        assert buf.remaining == 0
        assert buf.getvalue() == b"xyz"

    def test_overflow(self):
        buf = FixedBuffer(2)
        buf.extend(b"ab")
        with pytest.raises(BufferOverflowError) as exc_info:
            buf.push(ord("c"))
        assert isinstance(exc_info.value, InternalFaultError)
        assert buf.getvalue() == b"ab"

    def test_zero_capacity(self):
        buf = FixedBuffer(0)
        buf.pad(0)
        assert buf.getvalue() == b""
        with pytest.raises(BufferOverflowError):
            buf.pad(1)

    @pytest.mark.parametrize(
        "capacity, exc",
        [
            pytest.param(-1, ValueError, id="negative"),
            pytest.param(1.5, TypeError, id="float"),
            pytest.param(None, TypeError, id="none"),
        ],
    )
    def test_invalid_capacity(self, capacity, exc):
        with pytest.raises(exc):
            FixedBuffer(capacity)

    def test_repr(self):
        buf = FixedBuffer(4)
        buf.push(ord("a"))
        assert repr(buf) == "FixedBuffer(len=1, capacity=4)"
