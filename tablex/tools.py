#
# tablex Tools & Utilites
#

# Standard library -----------------------------------------------------------------------------------------------------

from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any, *, max_repr: int = 120) -> str:
    """Format type information for exception messages.

    Accepts a type object or an instance; instances are reported by their type.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(dict)
        '<type: dict>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)

    try:
        type_name = target_type.__name__
    except AttributeError:
        type_name = str(target_type)

    return f"<type: {_fmt_truncate(type_name, max_repr)}>"


def fmt_value(x: Any, *, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Robust against broken __repr__ and very long representations.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=8)
        "<str: 'hell'...>"
    """
    t = type(x).__name__

    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    # Escape inner ">" so the wrapper brackets stay unambiguous
    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """
    Truncate s to at most max_len visible characters before appending the ellipsis.

    Quoted reprs keep their quotes, with the ellipsis placed outside the closing quote.
    """
    if max_len <= 0:
        return ""
    if len(s) <= max_len:
        return s

    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner = s[1:1 + max(1, max_len - 4)]
        return f"{s[0]}{inner}{s[0]}{ellipsis}"

    return s[:max_len] + ellipsis
