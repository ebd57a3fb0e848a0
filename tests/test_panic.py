#
# Fatalfmt - Panic Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
import fatalfmt.panic as panic_module
from fatalfmt.convert import debug
from fatalfmt.errors import FatalError, InternalFaultError, NotEnoughSpace
from fatalfmt.fragments import DisplayMode, Fragment
from fatalfmt.panic import PanicConf, concat_assert, concat_panic, fatal, render_message


def text(s: str) -> Fragment:
    return Fragment.write_str(s)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestRenderMessage:
    def test_small_message(self, dbg):
        assert render_message([[text("value: "), dbg("a\tb")]]) == 'value: "a\\tb"'

    def test_escalates_tiers(self, caplog):
        args = [[text("x" * 2000)]]
        with caplog.at_level(logging.DEBUG, logger="fatalfmt.panic"):
            assert render_message(args) == "x" * 2000
        assert "1024 bytes" in caplog.text
        assert "6144 bytes" not in caplog.text

    def test_escalates_to_max(self, caplog):
        args = [[text("x" * 10_000)]]
        with caplog.at_level(logging.DEBUG, logger="fatalfmt.panic"):
            assert render_message(args) == "x" * 10_000
        assert "1024 bytes" in caplog.text
        assert "6144 bytes" in caplog.text

    def test_truncated_at_ceiling(self):
        message = render_message([[text("x" * 40_000)]])
        assert message == "x" * PanicConf.MAX_CAPACITY

    def test_debug_unterminated_at_ceiling(self):
        args = [[text("x" * (PanicConf.MAX_CAPACITY - 8)), Fragment.from_str("abcdefghij", DisplayMode.DEBUG)]]
        message = render_message(args)
        assert len(message) == PanicConf.MAX_CAPACITY
        assert message.endswith('"abcdefg')

    def test_idempotent(self, dbg):
        args = [[text("key "), dbg("\x00" * 5000), Fragment.from_int(-1).padded(1, 1)]]
        assert render_message(args) == render_message(args)

    def test_custom_tiers(self):
        args = [[text("abcdef")]]
        assert render_message(args, tiers=(4, 8)) == "abcdef"
        assert render_message(args, tiers=[2, 4]) == "abcd"
        assert render_message(args, tiers=(3,)) == "abc"

    @pytest.mark.parametrize(
        "tiers, exc",
        [
            pytest.param((), ValueError, id="empty"),
            pytest.param((8, 4), ValueError, id="descending"),
            pytest.param((4, 4), ValueError, id="repeated"),
            pytest.param((0, 4), ValueError, id="zero"),
            pytest.param((1.5, 4), TypeError, id="float"),
            pytest.param("abc", TypeError, id="str"),
            pytest.param(16, TypeError, id="int"),
        ],
    )
    def test_invalid_tiers(self, tiers, exc):
        with pytest.raises(exc):
            render_message([[text("a")]], tiers=tiers)

    def test_internal_fault(self, monkeypatch, caplog):
        def always_short(args, capacity, max_capacity):
            raise NotEnoughSpace(capacity)

        monkeypatch.setattr(panic_module, "fill_buffer", always_short)
        with caplog.at_level(logging.ERROR, logger="fatalfmt.panic"):
            with pytest.raises(InternalFaultError) as exc_info:
                render_message([[text("a")]])
        assert str(exc_info.value) == PanicConf.UNREACHABLE
        assert not isinstance(exc_info.value, FatalError)
        assert "maximum tier" in caplog.text


class TestConcatPanic:
    def test_raises_message(self):
        with pytest.raises(FatalError) as exc_info:
            concat_panic([[text("index out of range: "), Fragment.from_int(7)]])
        assert exc_info.value.message == "index out of range: 7"
        assert str(exc_info.value) == "index out of range: 7"

    def test_fatal_builds_fragments(self):
        with pytest.raises(FatalError) as exc_info:
            fatal("bad key ", debug("a\nb"), " at ", 3, " in ", [1, 2])
        assert exc_info.value.message == 'bad key "a\\nb" at 3 in [1, 2]'

    def test_fatal_no_values(self):
        with pytest.raises(FatalError) as exc_info:
            fatal()
        assert exc_info.value.message == ""


class TestConcatAssert:
    def test_passes(self):
        assert concat_assert(True, "unused") is None
        assert concat_assert([0], "unused") is None

    def test_fails(self):
        with pytest.raises(FatalError) as exc_info:
            concat_assert(False, "expected ", 3, ", got ", debug("x"))
        assert exc_info.value.message == 'assertion failed.\nexpected 3, got "x"'

    def test_falsy_condition(self):
        with pytest.raises(FatalError, match="assertion failed"):
            concat_assert(0)
