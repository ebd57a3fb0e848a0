"""
Fragment model of a fatal diagnostic message.

A message is built from fragments: text runs, integers and groups of fragments.
Each fragment carries its own padding and display mode, and knows how much of
itself fits into a given number of bytes (Fragment.measure()).

Examples:
    >>> f = Fragment.from_str("a\\tb", DisplayMode.DEBUG).padded(1, 1)
    >>> f.measure(100).cut
    Cut(length=3, width=6, truncated=False)
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from dataclasses import dataclass, field, replace
from enum import StrEnum, unique
from typing import Any, ClassVar, Final, Iterable, Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .escaping import escaped_width
from .integers import IntConf, IntScratch
from .truncation import Cut, truncated_debug_str_len, truncated_str_len
from .utils import fmt_type

MAX_PAD: Final = 255


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class DisplayMode(StrEnum):
    """
    How fragment content is rendered.

    Attributes:
        DISPLAY: Content emitted verbatim.
        DEBUG: Content quoted with '"' and byte-escaped.
    """
    DISPLAY = "display"
    DEBUG = "debug"


@dataclass(frozen=True)
class Text:
    """UTF-8 encoded text run."""
    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            raise TypeError(f"text data must be bytes, but got {fmt_type(self.data)}")
        try:
            self.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"text data must be valid UTF-8: {e}") from e


@dataclass(frozen=True)
class Int:
    """Integer already encoded to decimal digits."""
    scratch: IntScratch


@dataclass(frozen=True)
class Group:
    """
    Ordered fragments rendered as if inlined in place of the group.

    Only one level of nesting is supported: a group cannot contain another group.
    """
    items: tuple["Fragment", ...] = ()

    def __post_init__(self):
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Fragment):
                raise TypeError(f"group items must be Fragment, but got {fmt_type(item)}")
            if isinstance(item.variant, Group):
                raise ValueError("groups cannot be nested more than one level deep")
        object.__setattr__(self, "items", items)


Variant = Text | Int | Group


@dataclass(frozen=True)
class Measure:
    """
    How a fragment fits into the remaining buffer space.

    Attributes:
        leftpad: Spaces to emit before the content.
        rightpad: Spaces to emit after the content.
        data: Source bytes of the content; only data[:cut.length] is rendered.
        mode: Display mode used for the content.
        cut: Rendered length, occupied width and truncation flag.
    """
    leftpad: int
    rightpad: int
    data: bytes
    mode: DisplayMode
    cut: Cut

    @property
    def truncated(self) -> bool:
        return self.cut.truncated

    @property
    def width(self) -> int:
        """Total output bytes, padding included."""
        return self.leftpad + self.cut.width + self.rightpad


@dataclass(frozen=True)
class Fragment:
    """
    One renderable unit of a fatal diagnostic message.

    Attributes:
        variant: Text, Int or Group content.
        leftpad: Number of spaces printed before the content, 0..255.
        rightpad: Number of spaces printed after the content, 0..255.
        mode: DisplayMode.DISPLAY to print verbatim, DisplayMode.DEBUG to quote and escape.

    Padding is advisory: it is printed only as far as the remaining space allows.
    """
    variant: Variant
    leftpad: int = 0
    rightpad: int = 0
    mode: DisplayMode = field(default=DisplayMode.DISPLAY)

    EMPTY: ClassVar["Fragment"]

    def __post_init__(self):
        if not isinstance(self.variant, (Text, Int, Group)):
            raise TypeError(f"variant must be Text, Int or Group, but got {fmt_type(self.variant)}")
        _check_pad(self.leftpad, "leftpad")
        _check_pad(self.rightpad, "rightpad")
        object.__setattr__(self, "mode", DisplayMode(self.mode))
        if isinstance(self.variant, Group) and self.mode is not DisplayMode.DISPLAY:
            raise ValueError("group fragments are always in display mode, set the mode on their items")

    # ----- Constructors -----

    @classmethod
    def write_str(cls, text: str) -> Self:
        """Text printed verbatim, with no padding. Same as from_str(text, DisplayMode.DISPLAY)."""
        return cls.from_str(text, DisplayMode.DISPLAY)

    @classmethod
    def from_str(cls, text: str | bytes, mode: DisplayMode = DisplayMode.DISPLAY) -> Self:
        if isinstance(text, str):
            data = text.encode("utf-8")
        elif isinstance(text, (bytes, bytearray, memoryview)):
            data = bytes(text)
        else:
            raise TypeError(f"text must be str or bytes, but got {fmt_type(text)}")
        return cls(Text(data), mode=mode)

    @classmethod
    def from_int(cls, n: int, mode: DisplayMode = DisplayMode.DISPLAY, *, bits: int = IntConf.MAX_BITS) -> Self:
        """Signed integer fragment. Integers render identically in both modes."""
        return cls(Int(IntScratch.from_signed(n, bits)), mode=mode)

    @classmethod
    def from_uint(cls, n: int, mode: DisplayMode = DisplayMode.DISPLAY, *, bits: int = IntConf.MAX_BITS) -> Self:
        """Unsigned integer fragment."""
        return cls(Int(IntScratch.from_unsigned(n, bits)), mode=mode)

    @classmethod
    def group(cls, items: Iterable["Fragment"]) -> Self:
        """Fragments inlined in place. Items keep their own display modes; the group pads around them."""
        if not isinstance(items, abc.Iterable) or isinstance(items, (str, bytes)):
            raise TypeError(f"items must be an iterable of Fragment, but got {fmt_type(items)}")
        return cls(Group(tuple(items)))

    # ----- Padding -----

    def padded(self, leftpad: int = 0, rightpad: int = 0) -> Self:
        """Copy of this fragment with the given padding."""
        return replace(self, leftpad=leftpad, rightpad=rightpad)

    def aligned(self, width: int, align: Literal["left", "right", "center"] = "left") -> Self:
        """
        Copy of this fragment padded so that it occupies at least `width` bytes.

        Examples:
            >>> Fragment.from_int(42).aligned(5, "right").leftpad
            3
        """
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError(f"width must be int, but got {fmt_type(width)}")
        fill = max(0, width - self.content_len)
        if align == "left":
            return self.padded(0, fill)
        if align == "right":
            return self.padded(fill, 0)
        if align == "center":
            return self.padded(fill // 2, fill - fill // 2)
        raise ValueError(f"align must be 'left', 'right' or 'center', but got {align!r}")

    # ----- Measurement -----

    @property
    def content_len(self) -> int:
        """Rendered length of the content without padding, assuming nothing is truncated."""
        v = self.variant
        if isinstance(v, Text):
            if self.mode is DisplayMode.DEBUG:
                return 2 + sum(escaped_width(b) for b in v.data)
            return len(v.data)
        if isinstance(v, Int):
            return len(v.scratch)
        return sum(item.leftpad + item.content_len + item.rightpad for item in v.items)

    def measure(self, remaining: int) -> Measure:
        """
        Work out how this fragment fits into `remaining` bytes.

        Leftpad that does not fit fills the remaining space and leaves no room for
        content. Integers are never partially printed. Rightpad is cut to what is
        left after the content.

        Raises:
            ValueError: If called on a Group fragment; groups are inlined by the renderer.
        """
        leftpad = self.leftpad
        if leftpad > remaining:
            return Measure(max(remaining, 0), 0, b"", DisplayMode.DISPLAY, Cut.partial(0, 0))
        remaining -= leftpad

        v = self.variant
        if isinstance(v, Text):
            data = v.data
            mode = self.mode
            if mode is DisplayMode.DISPLAY:
                cut = truncated_str_len(data, remaining)
            else:
                cut = truncated_debug_str_len(data, remaining)
        elif isinstance(v, Int):
            data = v.scratch.digits
            mode = DisplayMode.DISPLAY
            cut = Cut.whole(len(data)) if len(data) <= remaining else Cut.partial(0, 0)
        else:
            raise ValueError("group fragments must be expanded before measuring")
        remaining -= cut.width

        rightpad = min(self.rightpad, remaining)
        return Measure(leftpad, rightpad, data, mode, cut)

    def __repr__(self) -> str:
        v = self.variant
        if isinstance(v, Text):
            body = repr(v.data.decode("utf-8"))
        elif isinstance(v, Int):
            body = v.scratch.digits.decode("ascii")
        else:
            body = "[" + ", ".join(repr(item) for item in v.items) + "]"
        pads = f", leftpad={self.leftpad}, rightpad={self.rightpad}" if self.leftpad or self.rightpad else ""
        return f"Fragment({body}, {self.mode.value}{pads})"


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_pad(value: Any, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, but got {fmt_type(value)}")
    if not 0 <= value <= MAX_PAD:
        raise ValueError(f"{name} must be in range 0..{MAX_PAD}, but got {value}")


Fragment.EMPTY = Fragment.write_str("")
