"""
Sentinel objects for distinguishing absent entries and unprovided arguments from stored values.

Both sentinels are singletons and are compared by identity (using 'is'), never by equality
with ordinary values. Neither can be confused with None, False, 0 or an empty string.

Sentinels:
    ABSENT: No entry here. Returned by lookups that find nothing; writing it to a Container deletes the entry
    UNSET: Represents an unprovided optional argument (distinguishes from None)

Helper Functions:
    ifabsent: Return default if value is ABSENT, otherwise return value
    ifnotunset: Return default if value is UNSET, otherwise return value

Example:
    >>> value = deep_get(config, "server", "port")
    >>> port = ifabsent(value, default=8080)
"""

from typing import Any, Callable, Final

__all__ = [
    'ABSENT',
    'UNSET',
    'AbsentType',
    'UnsetType',
    'ifabsent',
    'ifnotunset',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for sentinel singletons.

    Subclasses keep a single instance per class; construction always returns it,
    and pickling restores it.
    """
    __slots__ = ()

    _instance = None
    _name = "SENTINEL"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self) -> tuple:
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class AbsentType(_SentinelBase):
    """
    Sentinel type for ABSENT.

    Marks "no entry here". A Container never stores it: assigning ABSENT to a key or
    position removes that entry instead.
    """
    __slots__ = ()
    _name = "ABSENT"


class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Used to distinguish between 'not provided' and 'explicitly set to None'.
    """
    __slots__ = ()
    _name = "UNSET"


# Sentinel Objects -----------------------------------------------------------------------------------------------------

ABSENT: Final[AbsentType] = AbsentType()
"""
Sentinel representing a missing entry.

Lookups return it when nothing is stored; remapping visitors return it to mean
"no new key" or "no new value". Use with identity check: `if value is ABSENT:`
"""

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def _if_sentinel(
        value: Any,
        sentinel: Any,
        *,
        default: Any = None,
        default_factory: Callable[[], Any] | None = None
) -> Any:
    """
    Internal helper: return value if it doesn't match sentinel, otherwise return default.

    Raises:
        ValueError: If both default and default_factory are provided.
    """
    if value is not sentinel:
        return value

    if default_factory is not None and default is not None:
        raise ValueError("Cannot specify both default and default_factory")

    if default_factory is not None:
        return default_factory()

    return default


def ifabsent(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not ABSENT, otherwise return default.

    Falsy values such as None, 0 or "" are real values and are returned unchanged.

    Args:
        value: The value to check. If not ABSENT, this value is returned.
        default: The fallback value when value is ABSENT.
        default_factory: Callable returning the fallback value. Takes precedence over default.

    Raises:
        ValueError: If both default and default_factory are provided.

    Example:
        >>> ifabsent(deep_get({"a": {"b": 0}}, "a", "b"), default=1)
        0
        >>> ifabsent(deep_get({}, "a", "b"), default=1)
        1
    """
    return _if_sentinel(value, ABSENT, default=default, default_factory=default_factory)


def ifnotunset(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Raises:
        ValueError: If both default and default_factory are provided.
    """
    return _if_sentinel(value, UNSET, default=default, default_factory=default_factory)
