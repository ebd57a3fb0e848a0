#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from typing import Callable

# Local ----------------------------------------------------------------------------------------------------------------
from fatalfmt.fragments import DisplayMode, Fragment
from fatalfmt.render import format_message


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def render() -> Callable[..., str]:
    """Render an argument list at a fixed capacity, truncation accepted."""

    def _render(args, capacity: int = 1024, max_capacity: int | None = None) -> str:
        return format_message(args, capacity, max_capacity)

    return _render


@pytest.fixture
def dbg() -> Callable[[str], Fragment]:
    """Build a Debug-mode text fragment."""

    def _dbg(text: str) -> Fragment:
        return Fragment.from_str(text, DisplayMode.DEBUG)

    return _dbg
