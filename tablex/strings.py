"""
tablex String Tools

Splitting, trimming and padding helpers that complement the str methods. Separators are always
matched literally.
"""

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type


# Methods --------------------------------------------------------------------------------------------------------------

def split(text: str, separator: str | None = None, keep: bool = False) -> list[str]:
    """
    Split text on every occurrence of separator.

    Args:
        text: The string to split.
        separator: Literal separator. If None, split into single characters.
        keep: If True, each piece keeps the separator that ended it.

    Returns:
        The pieces in order. A trailing empty piece is dropped, so text without
        the separator comes back as [text] and an empty text as [].

    Raises:
        ValueError: If separator is an empty string.

    Examples:
        >>> split("a,b,,c", ",")
        ['a', 'b', '', 'c']
        >>> split("Hey there", " ", keep=True)
        ['Hey ', 'there']
        >>> split("abc")
        ['a', 'b', 'c']
    """
    _check_str(text, "text")
    if separator is None:
        return list(text)
    _check_str(separator, "separator")
    if not separator:
        raise ValueError("separator must be a non-empty string")

    result = []
    index = 0
    while True:
        start = text.find(separator, index)
        if start == -1:
            if index < len(text):
                result.append(text[index:])
            return result
        end = start + len(separator)
        result.append(text[index:end if keep else start])
        index = end


def after(text: str, separator: str) -> str:
    """Text after the first separator, or the whole text if separator is not found."""
    start = text.find(separator)
    if start == -1:
        return text
    return text[start + len(separator):]


def before(text: str, separator: str) -> str:
    """Text before the first separator, or the whole text if separator is not found."""
    start = text.find(separator)
    if start == -1:
        return text
    return text[:start]


def title(text: str) -> str:
    """
    Uppercase the first letter of every space-separated word, leaving the rest as is.

    Unlike str.title(), "mcDonald's iPhone" becomes "McDonald's IPhone".
    """
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def trim(text: str) -> str:
    """Text without leading and trailing whitespace."""
    _check_str(text, "text")
    return text.strip()


def startswith(text: str, prefix: str) -> bool:
    """True if text starts with prefix, matched literally."""
    _check_str(text, "text")
    _check_str(prefix, "prefix")
    return text.find(prefix, 0, len(prefix)) == 0


def endswith(text: str, suffix: str) -> bool:
    """True if text ends with suffix, matched literally."""
    _check_str(text, "text")
    _check_str(suffix, "suffix")
    start = len(text) - len(suffix)
    return start >= 0 and text.find(suffix, start) == start


def padleft(text: str, width: int, fill: str) -> str:
    """
    Prepend whole copies of fill until text is at least width characters long.

    A multi-character fill may overshoot width: padleft("def", 4, "abc") is "abcdef".
    """
    return _pad(text, width, fill, left=True)


def padright(text: str, width: int, fill: str) -> str:
    """
    Append whole copies of fill until text is at least width characters long.

    A multi-character fill may overshoot width: padright("def", 4, "abc") is "defabc".
    """
    return _pad(text, width, fill, left=False)


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_str(value, name: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {fmt_type(value)}")


def _pad(text: str, width: int, fill: str, left: bool) -> str:
    _check_str(text, "text")
    _check_str(fill, "fill")
    if not fill:
        raise ValueError("fill must be a non-empty string")

    missing = width - len(text)
    if missing <= 0:
        return text
    padding = fill * -(-missing // len(fill))
    return padding + text if left else text + padding
