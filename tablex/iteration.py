"""
tablex In-place Iteration

Remapping visitors return a (new_key, new_value) pair where either side may be ABSENT:

    =====================  ====================================================
    (ABSENT, ABSENT)       delete the entry
    (new_key, ABSENT)      move the value to new_key, removing the original key
    (ABSENT, new_value)    overwrite the value at the original key
    (new_key, new_value)   write new_value at new_key, the original key stays
    =====================  ====================================================

Iteration runs over a snapshot taken before the first visit: entries the visitor
adds are not visited, and entries it removes are still visited with their
original values.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import Container, SeqFacet, as_sequence
from .sentinels import ABSENT, UNSET
from .tools import fmt_type, fmt_value

# Placeholder for cleared positions in the remap_seq working copy
_HOLE = object()


# Methods --------------------------------------------------------------------------------------------------------------

def remap(container: Container | abc.MutableMapping,
          visitor: Callable[[Any, Any], tuple[Any, Any]]) -> Container | abc.MutableMapping:
    """
    Apply visitor(key, value) to every associative entry and rewrite keys and values in place.

    Args:
        container: Container or MutableMapping to modify.
        visitor: Returns (new_key, new_value), either of which may be ABSENT.

    Returns:
        container, for chaining.

    Raises:
        TypeError: If container is not a MutableMapping or the visitor does not return a pair.

    Examples:
        >>> remap({"a": 1, "b": 2}, lambda k, v: (k.upper(), ABSENT))
        {'A': 1, 'B': 2}
        >>> remap({"a": 1, "b": 2}, lambda k, v: (ABSENT, ABSENT) if v > 1 else (ABSENT, v * 10))
        {'a': 10}
    """
    if not isinstance(container, abc.MutableMapping):
        raise TypeError(f"expected Container or MutableMapping, got {fmt_type(container)}")

    for key, value in list(container.items()):
        new_key, new_value = _unpack(visitor(key, value))

        if new_key is ABSENT and new_value is ABSENT:
            container.pop(key, None)
        elif new_value is ABSENT:
            if new_key != key:
                container.pop(key, None)
            container[new_key] = value
        elif new_key is ABSENT:
            container[key] = new_value
        else:
            container[new_key] = new_value

    return container


def remap_seq(container: Container | SeqFacet | list,
              visitor: Callable[[int, Any], tuple[Any, Any]]) -> Container | SeqFacet | list:
    """
    Apply visitor(position, value) to every sequential entry and rewrite positions and values in place.

    Results are collected in a working copy and written back to the live sequence once, when
    iteration finishes or the visitor raises, so the visitor always sees the sequence as it was
    before the call (plus anything it appended itself). Entries the visitor appends are kept after
    the remapped entries.

    Each original position is cleared before the visitor's result is applied, so a value moved
    onto a position that has not been visited yet is dropped when that position's turn comes.
    New positions may lie past the current end. Cleared positions are closed up on write-back
    so the sequence stays contiguous.

    Args:
        container: Container (its `seq` facet is used), SeqFacet or list.
        visitor: Returns (new_position, new_value), either of which may be ABSENT.

    Returns:
        container, for chaining.

    Raises:
        TypeError: If container is not a supported sequence, the visitor does not return a pair,
            or a new position is not an int.
        IndexError: If a new position is negative.

    Examples:
        >>> remap_seq([1, 2, 3, 4], lambda i, v: (ABSENT, ABSENT) if v % 2 else (ABSENT, v))
        [2, 4]
        >>> remap_seq(["a", "b", "c"], lambda i, v: (ABSENT, v.upper()))
        ['A', 'B', 'C']
        >>> remap_seq(["a", "b", "c"], lambda i, v: (i + 3, v) if i == 0 else (ABSENT, v))
        ['b', 'c', 'a']
    """
    if isinstance(container, Container):
        live = container.seq
    elif isinstance(container, (SeqFacet, list)):
        live = container
    else:
        raise TypeError(f"expected Container, SeqFacet or list, got {fmt_type(container)}")

    snapshot = list(live)
    work = list(snapshot)

    try:
        for position, value in enumerate(snapshot):
            new_position, new_value = _unpack(visitor(position, value))

            work[position] = _HOLE

            if new_position is ABSENT and new_value is ABSENT:
                continue
            if new_value is ABSENT:
                _put(work, new_position, value)
            elif new_position is ABSENT:
                _put(work, position, new_value)
            else:
                _put(work, new_position, new_value)
    finally:
        appended = list(live[len(snapshot):])
        live[:] = [v for v in work if v is not _HOLE and v is not ABSENT] + appended

    return container


def reduce(sequence: Container | abc.Sequence, visitor: Callable[[int, Any, Any], Any], initial: Any = UNSET) -> Any:
    """
    Fold the sequential entries into a single value with acc = visitor(position, value, acc).

    Without initial, the first entry seeds the accumulator and folding starts at the second.

    Args:
        sequence: Container (its `seq` facet) or any non-text Sequence.
        visitor: Called with the position, the entry and the accumulator; returns the new accumulator.
        initial: Optional seed.

    Returns:
        The final accumulator. For empty input, initial, or ABSENT when initial was not given.

    Examples:
        >>> reduce([1, 2, 3], lambda i, v, acc: acc + v)
        6
        >>> reduce([], lambda i, v, acc: acc + v, 0)
        0
        >>> reduce([5], lambda i, v, acc: acc + v)
        5
    """
    acc = initial
    seeded = initial is not UNSET

    for position, value in enumerate(as_sequence(sequence)):
        if not seeded:
            acc, seeded = value, True
            continue
        acc = visitor(position, value, acc)

    return acc if seeded else ABSENT


# Private Methods ------------------------------------------------------------------------------------------------------

def _unpack(result: Any) -> tuple[Any, Any]:
    """Validate a visitor result as a (key, value) pair."""
    if not isinstance(result, tuple) or len(result) != 2:
        raise TypeError(f"visitor must return a (key, value) pair, got {fmt_value(result)}")
    return result


def _put(work: list, position: Any, value: Any) -> None:
    """Write value at position in the working copy, padding with holes when position lies past the end."""
    if not isinstance(position, int) or isinstance(position, bool):
        raise TypeError(f"sequential position must be int, got {fmt_type(position)}")
    if position < 0:
        raise IndexError(f"sequential position must be non-negative, got {position}")

    if position >= len(work):
        work.extend([_HOLE] * (position - len(work) + 1))
    work[position] = value
