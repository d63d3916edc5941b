"""
Path addressing and depth-bounded traversal over nested Containers.

Path addressing walks down by associative keys:

    >>> root = {}
    >>> deep_set(root, "server", "http", "port", 8080)
    {'server': {'http': {'port': 8080}}}
    >>> deep_get(root, "server", "http", "port")
    8080
    >>> deep_get(root, "server", "tls", "cert")
    <ABSENT>

Traversal walks down by sequence positions:

    >>> flatten(["a", "b", ["c", ["d"]]])
    ['a', 'b', 'c', 'd']
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import Container, as_sequence, is_nested
from .sentinels import ABSENT
from .tools import fmt_type, fmt_value

__all__ = [
    'TypePathConflict',
    'ReentrantTraversal',
    'deep_get',
    'deep_set',
    'flatten',
    'bounded_walk',
]


# Exceptions -----------------------------------------------------------------------------------------------------------

class TypePathConflict(TypeError):
    """
    Raised by deep_set when an intermediate path segment holds a value that cannot be descended into.

    Attributes:
        path: Keys from the root up to and including the conflicting segment.
        value: The value found at that segment.
    """

    def __init__(self, path: tuple, value: Any) -> None:
        self.path = path
        self.value = value
        super().__init__(f"cannot descend into {fmt_value(value)} at path {path!r}")


class ReentrantTraversal(RuntimeError):
    """
    Raised when bounded_walk is started on a root that already has a traversal in flight.

    Attributes:
        root: The root being traversed.
    """

    def __init__(self, root: Any) -> None:
        self.root = root
        super().__init__(f"bounded_walk() is already in progress for {fmt_type(root)} at {id(root):#x}")


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class _RecursionFrame:
    """Running state of one top-level bounded_walk call, shared by every recursion level."""
    index: int = 0


# Path Addressing ------------------------------------------------------------------------------------------------------

def deep_get(root: Container | abc.Mapping, *keys: Any) -> Any:
    """
    Retrieve the value at root[key1][key2]...[keyN].

    Absence is a normal outcome: ABSENT is returned as soon as a key is missing or an
    intermediate value is not a mapping. Stored falsy values (None, 0, "", False) are
    returned as they are. Never mutates root.

    Args:
        root: Container or Mapping to start from.
        *keys: One or more keys forming the path.

    Returns:
        The value found at the final key, or ABSENT.

    Raises:
        TypeError: If no keys are given.

    Examples:
        >>> deep_get({"a": {"b": 0}}, "a", "b")
        0
        >>> deep_get({"a": 1}, "a", "b")
        <ABSENT>
    """
    if not keys:
        raise TypeError("deep_get() requires at least one key")

    node = root
    for key in keys:
        if not isinstance(node, abc.Mapping):
            return ABSENT
        node = node.get(key, ABSENT)
        if node is ABSENT:
            return ABSENT
    return node


def deep_set(root: Container | abc.MutableMapping, *keys_then_value: Any) -> Container | abc.MutableMapping:
    """
    Set root[key1][key2]...[keyN] = value, creating missing intermediate levels.

    Missing intermediates are created as empty Containers under a Container and as
    dicts under any other mapping. Setting ABSENT deletes the final entry.

    Args:
        root: Container or MutableMapping to modify in place.
        *keys_then_value: One or more keys followed by the value to store.

    Returns:
        root, for chaining.

    Raises:
        TypeError: If root is not a MutableMapping, or fewer than a key and a value are given.
        TypePathConflict: If an intermediate segment holds a non-mapping value. Intermediates
            created before the conflict are kept.

    Examples:
        >>> deep_set({}, "b", "c", "d", "Hello!")
        {'b': {'c': {'d': 'Hello!'}}}
    """
    if not isinstance(root, abc.MutableMapping):
        raise TypeError(f"root must be Container or MutableMapping, got {fmt_type(root)}")
    if len(keys_then_value) < 2:
        raise TypeError("deep_set() requires at least one key and a value")

    *path, last_key, value = keys_then_value

    node = root
    for depth, key in enumerate(path):
        child = node.get(key, ABSENT)
        if child is ABSENT:
            child = Container() if isinstance(node, Container) else {}
            node[key] = child
        elif not isinstance(child, abc.MutableMapping):
            raise TypePathConflict(tuple(path[:depth + 1]), child)
        node = child

    if value is ABSENT:
        node.pop(last_key, None)
    else:
        node[last_key] = value
    return root


# Traversal ------------------------------------------------------------------------------------------------------------

def flatten(root: Container | abc.Sequence) -> Container | list:
    """
    Flatten arbitrarily nested sequences into a single new sequence, in encounter order.

    Nested entries (Container, list, tuple) are expanded recursively; strings and other
    values are leaves. Returns a new Container when root is a Container, a list otherwise.
    The input is never modified.

    Recursion depth equals nesting depth, so extremely deep or self-referencing input
    ends in RecursionError.

    Examples:
        >>> flatten(["a", "b", ["c", ["foo", "bar", ["fizz", "buzz"]], "d"]])
        ['a', 'b', 'c', 'foo', 'bar', 'fizz', 'buzz', 'd']
    """
    result = []
    _flatten_into(as_sequence(root), result)
    if isinstance(root, Container):
        return Container(result)
    return result


def bounded_walk(root: Container | abc.Sequence, visitor: Callable[..., Any], depth: int = 2) -> Container | abc.Sequence:
    """
    Visit the entries of a multi-dimensional sequence down to a fixed depth.

    With depth=1 the visitor is called as visitor(position, value) for every entry of root.

    With depth > 1 every entry above the last level must itself be a sequence, and the visitor
    is called once per entry at the last level as visitor(index, outer_position, value):

    - index: running 0-based count of visitor calls for this whole bounded_walk call,
      i.e. the position the value would have in the flattened grid;
    - outer_position: the position of the enclosing row within its parent;
    - value: the leaf entry.

    A bounded_walk must not be started again on the same root from inside its own visitor;
    doing so raises ReentrantTraversal. Other roots, including rows of this one, are fine.

    Args:
        root: The grid to traverse.
        visitor: Called for each leaf entry; its return value is ignored.
        depth: Number of levels to descend, 2 by default.

    Returns:
        root, for chaining. root is not modified, although the visitor may modify it.

    Raises:
        TypeError: If depth is not an int or an entry above the last level is not a sequence.
        ValueError: If depth is less than 1.
        ReentrantTraversal: If a bounded_walk of root is already in progress on this thread.

    Examples:
        >>> seen = []
        >>> bounded_walk([[1, 2], [3, 4, 5]], lambda i, row, v: seen.append((i, row, v)))
        [[1, 2], [3, 4, 5]]
        >>> seen
        [(0, 0, 1), (1, 0, 2), (2, 1, 3), (3, 1, 4), (4, 1, 5)]
    """
    if not isinstance(depth, int) or isinstance(depth, bool):
        raise TypeError(f"depth must be int, got {fmt_type(depth)}")
    if depth < 1:
        raise ValueError(f"depth must be 1 or greater, got {fmt_value(depth)}")

    items = as_sequence(root)

    with _in_flight(root):
        if depth == 1:
            for position, value in enumerate(items):
                visitor(position, value)
        else:
            _walk(items, visitor, depth, _RecursionFrame(), 0)

    return root


# Private Methods ------------------------------------------------------------------------------------------------------

_walks = threading.local()


@contextmanager
def _in_flight(root: Any) -> Iterator[None]:
    """Register root as being traversed on this thread for the duration of the block."""
    active = getattr(_walks, "roots", None)
    if active is None:
        active = _walks.roots = set()

    root_id = id(root)
    if root_id in active:
        raise ReentrantTraversal(root)

    active.add(root_id)
    try:
        yield
    finally:
        active.discard(root_id)


def _walk(items: abc.Sequence, visitor: Callable[..., Any], depth: int, frame: _RecursionFrame, outer: int) -> None:
    for position, value in enumerate(items):
        if depth > 1:
            if not is_nested(value):
                raise TypeError(f"expected a nested sequence at position {position}, got {fmt_value(value)}")
            _walk(as_sequence(value), visitor, depth - 1, frame, position)
        else:
            visitor(frame.index, outer, value)
            frame.index += 1


def _flatten_into(items: abc.Sequence, result: list) -> None:
    for value in items:
        if is_nested(value):
            _flatten_into(as_sequence(value), result)
        else:
            result.append(value)
