"""
Escalating-capacity rendering of fatal diagnostic messages.

Most messages are short, so rendering starts with a small buffer and only moves
to a bigger one when something did not fit. The last tier is the hard ceiling:
whatever does not fit there is truncated.

Examples:
    >>> from fatalfmt.fragments import Fragment, DisplayMode
    >>> render_message([[Fragment.write_str("value: "), Fragment.from_str("a\\tb", DisplayMode.DEBUG)]])
    'value: "a\\\\tb"'

    >>> concat_panic([[Fragment.write_str("index out of range: "), Fragment.from_int(7)]])
    Traceback (most recent call last):
    ...
    fatalfmt.errors.FatalError: index out of range: 7
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging
from typing import Any, Final, NoReturn, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .convert import to_fragments
from .errors import FatalError, InternalFaultError, NotEnoughSpace
from .fragments import Fragment
from .render import ArgList, fill_buffer
from .utils import fmt_type

logger = logging.getLogger(__name__)


class PanicConf:
    """
    Controller constants.

    Attributes:
        TIERS: Buffer capacities tried in order, smallest first.
        MAX_CAPACITY: The hard ceiling, always the last tier.
        ASSERT_PREFIX: First line of messages raised by concat_assert().
        UNREACHABLE: Message of the InternalFaultError raised when the last tier
            reports insufficient capacity instead of truncating.
    """
    TIERS: Final = (1024, 1024 * 6, 32768)
    MAX_CAPACITY: Final = 32768
    ASSERT_PREFIX: Final = "assertion failed.\n"
    UNREACHABLE: Final = (
        "unreachable:\n"
        "the buffer-fill driver must not report insufficient capacity "
        "when the capacity equals the maximum capacity"
    )


# Methods --------------------------------------------------------------------------------------------------------------

def render_message(args: ArgList, *, tiers: Sequence[int] | None = None) -> str:
    """
    Render args into the final diagnostic text.

    Each tier is tried in turn; the first one that renders everything wins. The
    last tier is the maximum capacity, where truncation is accepted.

    Args:
        args: Groups of fragments.
        tiers: Ascending buffer capacities. Defaults to PanicConf.TIERS.

    Returns:
        The rendered message.

    Raises:
        InternalFaultError: If the last tier reports insufficient capacity.
        ValueError: If tiers is empty or not strictly ascending positive ints.
    """
    tiers = PanicConf.TIERS if tiers is None else _check_tiers(tiers)
    *smaller, max_capacity = tiers

    for capacity in smaller:
        try:
            return fill_buffer(args, capacity, max_capacity).decode("utf-8")
        except NotEnoughSpace:
            logger.debug("message does not fit in %d bytes, retrying with a bigger buffer", capacity)

    try:
        return fill_buffer(args, max_capacity, max_capacity).decode("utf-8")
    except NotEnoughSpace as e:
        logger.error("insufficient capacity reported at the maximum tier (%d bytes)", max_capacity)
        raise InternalFaultError(PanicConf.UNREACHABLE) from e


def concat_panic(args: ArgList) -> NoReturn:
    """
    Render args and raise the result as a FatalError.

    Raises:
        FatalError: Always, carrying the rendered message.
    """
    raise FatalError(render_message(args))


def fatal(*values: Any) -> NoReturn:
    """
    Convert values to fragments and raise them as a FatalError.

    Strings are printed verbatim; wrap a value with convert.debug() to quote it.

    Examples:
        >>> from fatalfmt.convert import debug
        >>> fatal("bad key ", debug("a\\nb"), " at ", 3)
        Traceback (most recent call last):
        ...
        fatalfmt.errors.FatalError: bad key "a\\nb" at 3
    """
    concat_panic([_as_group(values)])


def concat_assert(condition: Any, *values: Any) -> None:
    """
    Raise a FatalError with the rendered values when condition is falsy.

    Examples:
        >>> concat_assert(1 + 1 == 2, "math is broken")
        >>> concat_assert(False, "expected ", 3)
        Traceback (most recent call last):
        ...
        fatalfmt.errors.FatalError: assertion failed.
        expected 3
    """
    if condition:
        return
    concat_panic([[Fragment.write_str(PanicConf.ASSERT_PREFIX)], _as_group(values)])


# Private Methods ------------------------------------------------------------------------------------------------------

def _as_group(values: Sequence[Any]) -> list[Fragment]:
    group: list[Fragment] = []
    for value in values:
        group.extend(to_fragments(value))
    return group


def _check_tiers(tiers: Sequence[int]) -> tuple[int, ...]:
    if not isinstance(tiers, abc.Sequence) or isinstance(tiers, (str, bytes)):
        raise TypeError(f"tiers must be a sequence of int, but got {fmt_type(tiers)}")
    tiers = tuple(tiers)
    if not tiers:
        raise ValueError("tiers must not be empty")
    for capacity in tiers:
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError(f"tiers must contain int, but got {fmt_type(capacity)}")
        if capacity <= 0:
            raise ValueError(f"tier capacity must be positive, but got {capacity}")
    if any(a >= b for a, b in zip(tiers, tiers[1:])):
        raise ValueError(f"tiers must be strictly ascending, but got {tiers}")
    return tiers


# Module Sanity Checks -------------------------------------------------------------------------------------------------

if _check_tiers(PanicConf.TIERS)[-1] != PanicConf.MAX_CAPACITY:
    raise AssertionError("Configuration Error: the last of PanicConf.TIERS must equal PanicConf.MAX_CAPACITY.")
