"""
tablex Collections
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar, overload

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import ABSENT, UNSET, UnsetType, ifnotunset
from .tools import fmt_type

# Classes --------------------------------------------------------------------------------------------------------------

K = TypeVar("K")
V = TypeVar("V")

_TEXTUAL = (str, bytes, bytearray)


class SeqFacet(abc.MutableSequence, Generic[V]):
    """
    Sequential facet of a Container: dense, 0-based, contiguous positions.

    - Assigning ABSENT to a position deletes it (later entries shift down).
    - Assigning to position len(facet) appends; anything further raises IndexError,
      so no gap can ever be opened.
    - Compares equal to any non-text Sequence holding the same elements.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[V] | None = None) -> None:
        self._items: list[V] = []
        if items is not None:
            self.extend(items)

    # ----- MutableSequence required methods -----

    @overload
    def __getitem__(self, index: int) -> V:
        ...

    @overload
    def __getitem__(self, index: slice) -> list[V]:
        ...

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            values = [v for v in value if v is not ABSENT]
            self._items[index] = values
            return
        if value is ABSENT:
            del self._items[index]
            return
        if index == len(self._items):
            self._items.append(value)
            return
        self._items[index] = value

    def __delitem__(self, index) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: V) -> None:
        if value is ABSENT:
            return
        self._items.insert(index, value)

    # ----- Helpers -----

    def append(self, value: V) -> None:
        if value is not ABSENT:
            self._items.append(value)

    def get(self, index: int, default: Any = ABSENT) -> V | Any:
        """Value at index or default when the position is not occupied. Negative indexes are not wrapped."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return default

    def __iter__(self) -> Iterator[V]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"SeqFacet({self._items!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SeqFacet):
            return self._items == other._items
        if isinstance(other, abc.Sequence) and not isinstance(other, _TEXTUAL):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None


class Container(abc.MutableMapping, Generic[K, V]):
    """
    A hybrid ordered/associative store with two explicit facets.

    - Associative facet (key -> value) is the Container itself and implements the
      stdlib MutableMapping protocol. len(), iteration and membership apply to KEYS only,
      like dict. Iteration order is not part of the contract.
    - Sequential facet is available as `container.seq` (a SeqFacet).
    - ABSENT is never stored: assigning it removes the entry from either facet.

    Examples:
        >>> c = Container(["a", "b"], {"name": "grid"})
        >>> c.seq[0], c["name"]
        ('a', 'grid')
        >>> c["name"] = ABSENT
        >>> "name" in c
        False
    """

    __slots__ = ("_map", "seq")

    def __init__(self,
                 items: Iterable[V] | None = None,
                 mapping: abc.Mapping[K, V] | Iterable[tuple[K, V]] | None = None,
                 **kwargs: V) -> None:
        self._map: dict[K, V] = {}
        self.seq: SeqFacet[V] = SeqFacet(items)
        if mapping:
            self.update(mapping)
        if kwargs:
            self.update(kwargs)

    # ----- MutableMapping required methods -----

    def __getitem__(self, key: K) -> V:
        return self._map[key]

    def __setitem__(self, key: K, value: V) -> None:
        if value is ABSENT:
            self._map.pop(key, None)
        else:
            self._map[key] = value

    def __delitem__(self, key: K) -> None:
        del self._map[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        return key in self._map

    # ----- Copy, equality and representation -----

    def copy(self) -> "Container[K, V]":
        """Shallow copy of both facets."""
        return Container(self.seq, self._map)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Container):
            return self._map == other._map and self.seq == other.seq
        if isinstance(other, abc.Mapping):
            return not self.seq and self._map == dict(other.items())
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Container({list(self.seq)!r}, {self._map!r})"


# Methods --------------------------------------------------------------------------------------------------------------

def is_nested(obj: Any) -> bool:
    """True if obj has a sequential facet that traversal descends into (Container, SeqFacet, list, tuple)."""
    return isinstance(obj, (Container, SeqFacet, list, tuple))


def as_sequence(obj: Any) -> abc.Sequence:
    """
    Return the sequential facet of obj.

    Container → its `seq` facet; any other non-text Sequence → obj itself.

    Raises:
        TypeError: If obj has no sequential facet.
    """
    if isinstance(obj, Container):
        return obj.seq
    if isinstance(obj, abc.Sequence) and not isinstance(obj, _TEXTUAL):
        return obj
    raise TypeError(f"expected Container or Sequence, got {fmt_type(obj)}")


def as_mapping(obj: Any) -> abc.Mapping:
    """
    Return obj if it can be addressed by key.

    Raises:
        TypeError: If obj is not a Container or Mapping.
    """
    if isinstance(obj, abc.Mapping):
        return obj
    raise TypeError(f"expected Container or Mapping, got {fmt_type(obj)}")


def reverse(seq: Container | abc.MutableSequence) -> Container | abc.MutableSequence:
    """Reverse the sequential entries in place and return seq for chaining."""
    as_sequence(seq).reverse()
    return seq


def count(mapping: Container | abc.Mapping) -> int:
    """Number of associative entries."""
    return len(as_mapping(mapping))


def entries(mapping: Container | abc.Mapping) -> list[list]:
    """
    Key/value pairs as a list of [key, value] lists.

    Order follows the mapping's iteration order, which callers must not rely on.
    """
    return [[k, v] for k, v in as_mapping(mapping).items()]


def keys(mapping: Container | abc.Mapping) -> list:
    """Keys of the associative facet as a list, in unspecified order."""
    return list(as_mapping(mapping).keys())


def values(mapping: Container | abc.Mapping) -> list:
    """Values of the associative facet as a list, in unspecified order."""
    return list(as_mapping(mapping).values())


def common(*seqs: Container | abc.Sequence) -> list:
    """
    Values present in every given sequence, in order of first appearance in the first one.

    Comparison uses ==, and values must be hashable.

    Examples:
        >>> common([1, 2, 3], [3, 2, 9], [2, 3])
        [2, 3]
    """
    if not seqs:
        return []
    first, *rest = [as_sequence(s) for s in seqs]
    others = [set(s) for s in rest]
    return [v for v in dict.fromkeys(first) if all(v in o for o in others)]


def join(items: Container | abc.Sequence | abc.Mapping,
         sep: str = " ",
         last: str | UnsetType | None = UNSET) -> str:
    """
    Join str() of each item with sep, using last between the final two items.

    When last is omitted or None, sep is used between the final two items as well.

    Sequences and Containers with sequential entries join their sequential facet;
    Mappings and Containers with an empty sequential facet join their values.

    Examples:
        >>> join(["apples", "grapes", "oranges"], ", ", " and ")
        'apples, grapes and oranges'
    """
    last = sep if last is None else ifnotunset(last, default=sep)

    if isinstance(items, Container) and items.seq:
        parts = [str(v) for v in items.seq]
    elif isinstance(items, abc.Mapping):
        parts = [str(v) for v in items.values()]
    else:
        parts = [str(v) for v in as_sequence(items)]

    if len(parts) < 2:
        return "".join(parts)
    return sep.join(parts[:-1]) + last + parts[-1]


def merge(target: Container | abc.MutableMapping, *sources: abc.Mapping) -> Container | abc.MutableMapping:
    """
    Shallow merge of sources into target, left to right; later sources win.

    Returns target, which is modified in place.
    """
    if not isinstance(target, abc.MutableMapping):
        raise TypeError(f"target must be Container or MutableMapping, got {fmt_type(target)}")
    for source in sources:
        target.update(as_mapping(source))
    return target


def imerge(*items: Any) -> list:
    """
    Concatenate items into a new list.

    Sequences contribute their entries (shallowly), other values are appended as
    themselves, and None is skipped.

    Examples:
        >>> imerge([1, 2], 3, None, Container([4]))
        [1, 2, 3, 4]
    """
    result = []
    for item in items:
        if item is None:
            continue
        if is_nested(item):
            result.extend(as_sequence(item))
        else:
            result.append(item)
    return result


def select(seq: Container | abc.Sequence, predicate: Callable[[int, Any], Any]) -> list:
    """New list of the values for which predicate(position, value) is truthy."""
    return [v for i, v in enumerate(as_sequence(seq)) if predicate(i, v)]


def deduplicate(seq: Container | abc.Sequence) -> list:
    """New list keeping the first occurrence of every (hashable) value."""
    return list(dict.fromkeys(as_sequence(seq)))


def find(seq: Container | abc.Sequence, value: Any) -> int | Any:
    """First position holding value, or ABSENT."""
    for i, v in enumerate(as_sequence(seq)):
        if v == value:
            return i
    return ABSENT


def equals(*seqs: Container | abc.Sequence) -> bool:
    """True if all sequences have the same length and pairwise equal entries."""
    if not seqs:
        return True
    first, *rest = [as_sequence(s) for s in seqs]
    return all(len(s) == len(first) and all(a == b for a, b in zip(first, s)) for s in rest)


def subset(seq: Container | abc.Sequence, start: int, stop: int = 0) -> list:
    """
    Entries from start to stop, both inclusive.

    A stop of zero or below counts back from the last entry: 0 keeps everything
    through the end, -1 drops the last entry.

    Examples:
        >>> letters = ["a", "b", "c", "d"]
        >>> subset(letters, 0, 2)
        ['a', 'b', 'c']
        >>> subset(letters, 1)
        ['b', 'c', 'd']
        >>> subset(letters, 0, -2)
        ['a', 'b']
    """
    items = as_sequence(seq)
    end = len(items) + stop if stop <= 0 else stop + 1
    return list(items[start:end])
