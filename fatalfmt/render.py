"""
Buffer-fill driver.

Walks an argument list (a sequence of groups of fragments) and copies the
rendering of each fragment into a FixedBuffer: padding, verbatim Display text,
quoted and escaped Debug text. Group fragments are inlined one level deep.

When a fragment is truncated below the maximum capacity, the fill is abandoned
with NotEnoughSpace so the caller can retry with a bigger buffer. At the maximum
capacity truncation is final: rendering stops and the text written so far is the
message.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from typing import Iterator, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .buffer import FixedBuffer
from .errors import NotEnoughSpace
from .escaping import BACKSLASH, QUOTE, backslash_shorthand, hex_nibble_to_ascii, needs_escaping
from .fragments import DisplayMode, Fragment, Group
from .utils import fmt_type

ArgList = Sequence[Sequence[Fragment]]


# Methods --------------------------------------------------------------------------------------------------------------

def fill_buffer(args: ArgList, capacity: int, max_capacity: int) -> bytes:
    """
    Render args into a buffer of the given capacity.

    Args:
        args: Groups of fragments, rendered in order.
        capacity: Size of the buffer for this attempt.
        max_capacity: Largest capacity that will ever be tried. Truncation at this
            capacity is accepted instead of signalled.

    Returns:
        The rendered bytes, valid UTF-8.

    Raises:
        NotEnoughSpace: If some fragment was truncated and capacity < max_capacity.
        TypeError: If args is not a sequence of sequences of Fragment.
    """
    buffer = FixedBuffer(capacity)
    for fragment in _walk(args):
        if not write_fragment(buffer, fragment, max_capacity):
            break
    return buffer.getvalue()


def format_message(args: ArgList, capacity: int, max_capacity: int | None = None) -> str:
    """
    Render args at an explicit capacity and decode the result.

    Examples:
        >>> format_message([[Fragment.write_str("value: "), Fragment.from_int(-3)]], 64)
        'value: -3'
    """
    max_capacity = capacity if max_capacity is None else max_capacity
    return fill_buffer(args, capacity, max_capacity).decode("utf-8")


def write_fragment(buffer: FixedBuffer, fragment: Fragment, max_capacity: int) -> bool:
    """
    Write one non-group fragment into buffer.

    Returns:
        False if the fragment was truncated at the maximum capacity and rendering must stop.

    Raises:
        NotEnoughSpace: If the fragment was truncated and the buffer is smaller than max_capacity.
    """
    m = fragment.measure(buffer.remaining)

    buffer.pad(m.leftpad)

    visible = m.data[:m.cut.length]
    if m.mode is DisplayMode.DISPLAY:
        buffer.extend(visible)
    elif m.cut.width:
        buffer.push(QUOTE)
        for byte in visible:
            _write_escaped(buffer, byte)
        if not m.truncated:
            buffer.push(QUOTE)

    buffer.pad(m.rightpad)

    if m.truncated:
        if buffer.capacity < max_capacity:
            raise NotEnoughSpace(buffer.capacity)
        return False
    return True


# Private Methods ------------------------------------------------------------------------------------------------------

def _walk(args: ArgList) -> Iterator[Fragment]:
    """Yield the fragments of args in rendering order, with groups inlined."""
    if not isinstance(args, abc.Iterable) or isinstance(args, (str, bytes)):
        raise TypeError(f"args must be a sequence of fragment groups, but got {fmt_type(args)}")
    for group in args:
        if not isinstance(group, abc.Iterable) or isinstance(group, (str, bytes)):
            raise TypeError(f"each argument group must be a sequence of Fragment, but got {fmt_type(group)}")
        for fragment in group:
            if not isinstance(fragment, Fragment):
                raise TypeError(f"argument group items must be Fragment, but got {fmt_type(fragment)}")
            if isinstance(fragment.variant, Group):
                if fragment.leftpad:
                    yield Fragment.EMPTY.padded(fragment.leftpad, 0)
                yield from fragment.variant.items
                if fragment.rightpad:
                    yield Fragment.EMPTY.padded(0, fragment.rightpad)
            else:
                yield fragment


def _write_escaped(buffer: FixedBuffer, byte: int) -> None:
    if not needs_escaping(byte):
        buffer.push(byte)
        return
    buffer.push(BACKSLASH)
    shorthand = backslash_shorthand(byte)
    if shorthand is not None:
        buffer.push(shorthand)
    else:
        buffer.push(ord("x"))
        buffer.push(hex_nibble_to_ascii(byte >> 4))
        buffer.push(hex_nibble_to_ascii(byte & 0x0F))
