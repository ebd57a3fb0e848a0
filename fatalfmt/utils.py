"""
Utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(b"", fully_qualified=True)
        'bytes'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    if fully_qualified and cls.__module__ != "builtins":
        return cls.__module__ + "." + cls.__name__
    return cls.__name__


def fmt_type(obj: Any) -> str:
    """
    Format the type of obj for exception messages.

    Examples:
        >>> fmt_type(3.5)
        '<float>'
        >>> fmt_type(float)
        '<class: float>'
    """
    if isinstance(obj, type):
        return f"<class: {class_name(obj)}>"
    return f"<{class_name(obj)}>"
