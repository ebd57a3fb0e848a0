"""
Conversion of Python values to message fragments.

to_fragments() dispatches on the value type and returns the fragments that render
it. Values may choose their display mode through display()/debug() wrappers, and
user types can take part by implementing the SupportsFragments protocol.

Examples:
    >>> to_fragments(42)
    [Fragment(42, display)]
    >>> to_fragments(debug("hi"))
    [Fragment('hi', debug)]
    >>> to_fragments([1, 2])
    [Fragment('[', display), Fragment([Fragment(1, display), Fragment(', ', display), Fragment(2, display)], display), Fragment(']', display)]
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .fragments import DisplayMode, Fragment, Group
from .utils import fmt_type


@runtime_checkable
class SupportsFragments(Protocol):
    """Protocol for user types that render themselves as fragments."""

    def to_fragments(self, mode: DisplayMode) -> list[Fragment]: ...


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Formatted:
    """A value paired with the display mode it should be rendered in."""
    value: Any
    mode: DisplayMode = DisplayMode.DISPLAY


# Methods --------------------------------------------------------------------------------------------------------------

def display(value: Any) -> Formatted:
    """Render value verbatim."""
    return Formatted(value, DisplayMode.DISPLAY)


def debug(value: Any) -> Formatted:
    """Render value quoted and escaped."""
    return Formatted(value, DisplayMode.DEBUG)


def to_fragments(value: Any, mode: DisplayMode = DisplayMode.DISPLAY) -> list[Fragment]:
    """
    Convert a value to the fragments that render it.

    Dispatch Logic:
        - Fragment → returned as is
        - Formatted → converted with its own mode
        - SupportsFragments → value.to_fragments(mode)
        - None, bool → text
        - int → integer fragment (signed, 128 bits max)
        - str, bytes → text in the given mode; bytes must be valid UTF-8
        - list, tuple → "[", a group of elements separated by ", ", "]".
          Nested sequences are flattened inline, as groups nest one level only.

    Raises:
        TypeError: If value has no fragment representation.
    """
    mode = DisplayMode(mode)

    if isinstance(value, Fragment):
        return [value]
    if isinstance(value, Formatted):
        return to_fragments(value.value, value.mode)
    if isinstance(value, SupportsFragments):
        return list(value.to_fragments(mode))

    if value is None or isinstance(value, bool):
        return [Fragment.write_str(str(value))]
    if isinstance(value, int):
        return [Fragment.from_int(value, mode)]
    if isinstance(value, (str, bytes)):
        return [Fragment.from_str(value, mode)]

    if isinstance(value, (list, tuple)):
        return _sequence_fragments(value, mode)

    raise TypeError(f"cannot convert {fmt_type(value)} to message fragments")


# Private Methods ------------------------------------------------------------------------------------------------------

def _sequence_fragments(items: list | tuple, mode: DisplayMode) -> list[Fragment]:
    open_, close = ("(", ")") if isinstance(items, tuple) else ("[", "]")
    sep = Fragment.write_str(", ")

    inner: list[Fragment] = []
    for i, item in enumerate(items):
        if i:
            inner.append(sep)
        inner.extend(to_fragments(item, mode))

    if any(_is_group(f) for f in inner):
        # Nested collections cannot be wrapped in another group, inline everything
        flat = []
        for f in inner:
            flat.extend(f.variant.items if _is_group(f) else (f,))
        body = flat
    else:
        body = [Fragment.group(inner)] if inner else []

    if isinstance(items, tuple) and len(items) == 1:
        body.append(Fragment.write_str(","))

    return [Fragment.write_str(open_), *body, Fragment.write_str(close)]


def _is_group(fragment: Fragment) -> bool:
    return isinstance(fragment.variant, Group)
