"""
tablex Random Pick & Shuffle Tools
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import random
import uuid
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import Container, as_sequence
from .sentinels import ABSENT
from .tools import fmt_type, fmt_value


# Methods --------------------------------------------------------------------------------------------------------------

def random_index(length: int, seed: int | None = None) -> int:
    """
    Return a random position in the range [0, length).

    Args:
        length: Number of positions to choose from. Must be positive.
        seed: If provided, use a dedicated deterministic RNG seeded with this value.
              If None, use random.SystemRandom.

    Raises:
        TypeError: If length is not an int.
        ValueError: If length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f"length must be int, got {fmt_type(length)}")
    if length <= 0:
        raise ValueError(f"length must be positive: {fmt_value(length)}")

    return _rng(seed).randrange(length)


def random_item(seq: Container | abc.Sequence, seed: int | None = None) -> Any:
    """Return a random sequential entry without modifying seq, or ABSENT if it is empty."""
    items = as_sequence(seq)
    if not items:
        return ABSENT
    return items[random_index(len(items), seed=seed)]


def randpop(seq: Container | abc.MutableSequence, seed: int | None = None) -> Any:
    """Remove and return a random sequential entry, or ABSENT if seq is empty."""
    items = _mutable_sequence(seq)
    if not items:
        return ABSENT
    return items.pop(random_index(len(items), seed=seed))


def shuffle(seq: Container | abc.MutableSequence, seed: int | None = None) -> Container | abc.MutableSequence:
    """
    Shuffle the sequential entries in place and return seq for chaining.

    Seeded shuffles are reproducible and do not touch the global random state.
    """
    items = _mutable_sequence(seq)
    values = list(items)
    _rng(seed).shuffle(values)
    items[:] = values
    return seq


def uuid4(seed: int | None = None) -> str:
    """
    Return a random version 4 UUID string, e.g. '1b4e28ba-2fa1-4d2e-883f-0016d3cca427'.

    Args:
        seed: If provided, use a dedicated deterministic RNG seeded with this value, which makes
              the result reproducible and unsuitable for anything security-related.
              If None, use random.SystemRandom.
    """
    return str(uuid.UUID(int=_rng(seed).getrandbits(128), version=4))


# Private Methods ------------------------------------------------------------------------------------------------------

def _rng(seed: int | None) -> random.Random:
    return random.Random(seed) if seed is not None else random.SystemRandom()


def _mutable_sequence(seq: Any) -> abc.MutableSequence:
    items = as_sequence(seq)
    if not isinstance(items, abc.MutableSequence):
        raise TypeError(f"expected Container or MutableSequence, got {fmt_type(seq)}")
    return items
