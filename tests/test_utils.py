#
# Fatalfmt - Utils Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from fatalfmt.fragments import Fragment
from fatalfmt.utils import class_name, fmt_type


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassName:
    @pytest.mark.parametrize(
        "obj, fully_qualified, expected",
        [
            pytest.param(10, False, "int", id="instance"),
            pytest.param(int, False, "int", id="class"),
            pytest.param(int, True, "int", id="builtin_qualified"),
            pytest.param(Fragment.EMPTY, False, "Fragment", id="user_instance"),
            pytest.param(Fragment, True, "fatalfmt.fragments.Fragment", id="user_qualified"),
        ],
    )
    def test_class_name(self, obj, fully_qualified, expected):
        assert class_name(obj, fully_qualified=fully_qualified) == expected


class TestFmtType:
    def test_instance(self):
        assert fmt_type(3.5) == "<float>"

    def test_class(self):
        assert fmt_type(float) == "<class: float>"
