#
# tablex - Iteration Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from tablex.collections import Container, SeqFacet
from tablex.iteration import reduce, remap, remap_seq
from tablex.sentinels import ABSENT


# Tests ----------------------------------------------------------------------------------------------------------------

class TestRemap:

    @pytest.fixture
    def fruit(self):
        """Fixture providing a Container with falsy and truthy values."""
        return Container(mapping={"apple": 3, "banana": 0, "cherry": None})

    def test_delete_all(self, fruit):
        result = remap(fruit, lambda k, v: (ABSENT, ABSENT))
        assert result is fruit
        assert len(fruit) == 0

    def test_identity_leaves_container_unchanged(self, fruit):
        remap(fruit, lambda k, v: (k, v))
        assert fruit == {"apple": 3, "banana": 0, "cherry": None}

    def test_only_new_key_moves_value(self, fruit):
        remap(fruit, lambda k, v: (k.upper(), ABSENT))
        assert fruit == {"APPLE": 3, "BANANA": 0, "CHERRY": None}

    def test_only_new_key_same_key_keeps_entry(self, fruit):
        remap(fruit, lambda k, v: (k, ABSENT))
        assert fruit == {"apple": 3, "banana": 0, "cherry": None}

    def test_only_new_value_overwrites(self, fruit):
        remap(fruit, lambda k, v: (ABSENT, (v or 0) + 1))
        assert fruit == {"apple": 4, "banana": 1, "cherry": 1}

    def test_both_given_keeps_original_key(self, fruit):
        remap(fruit, lambda k, v: (f"{k}_copy", v) if k == "apple" else (k, v))
        assert fruit == {"apple": 3, "apple_copy": 3, "banana": 0, "cherry": None}

    def test_both_given_same_key_overwrites(self, fruit):
        remap(fruit, lambda k, v: (k, "x"))
        assert fruit == {"apple": "x", "banana": "x", "cherry": "x"}

    def test_falsy_results_are_values_not_absence(self, fruit):
        remap(fruit, lambda k, v: (ABSENT, None))
        assert fruit == {"apple": None, "banana": None, "cherry": None}

    def test_plain_dict(self):
        data = {1: "a", 2: "b"}
        remap(data, lambda k, v: (k * 10, ABSENT) if k == 1 else (ABSENT, ABSENT))
        assert data == {10: "a"}

    def test_inserted_keys_are_not_visited(self):
        data = {"a": 1}
        seen = []

        def visitor(k, v):
            seen.append(k)
            data["inserted"] = 99
            return k, v

        remap(data, visitor)
        assert seen == ["a"]
        assert data == {"a": 1, "inserted": 99}

    def test_renamed_onto_pending_key_sees_snapshot_value(self):
        # "a" is moved onto "b" first; "b" is then visited with its original value
        data = {"a": 1, "b": 2}
        seen = {}

        def visitor(k, v):
            seen[k] = v
            return ("b", ABSENT) if k == "a" else (ABSENT, v * 100)

        remap(data, visitor)
        assert seen == {"a": 1, "b": 2}
        assert data == {"b": 200}

    def test_visitor_deleting_live_entries_is_tolerated(self):
        data = {"a": 1, "b": 2}

        def visitor(k, v):
            data.pop("b", None)
            return ABSENT, ABSENT

        remap(data, visitor)
        assert data == {}

    @pytest.mark.parametrize(
        "result",
        [
            pytest.param(None, id="none"),
            pytest.param(("k",), id="one-tuple"),
            pytest.param(["k", "v"], id="list"),
            pytest.param(("k", "v", "x"), id="three-tuple"),
        ],
    )
    def test_bad_visitor_result(self, result):
        with pytest.raises(TypeError, match=r"\(key, value\) pair"):
            remap({"a": 1}, lambda k, v: result)

    def test_rejects_non_mapping(self):
        with pytest.raises(TypeError, match=r"MutableMapping"):
            remap([1, 2], lambda k, v: (k, v))


class TestRemapSeq:

    def test_delete_all(self):
        items = [1, 2, 3]
        assert remap_seq(items, lambda i, v: (ABSENT, ABSENT)) == []

    def test_identity(self):
        items = ["a", "b", "c"]
        assert remap_seq(items, lambda i, v: (i, v)) == ["a", "b", "c"]

    def test_filter_closes_gaps(self):
        items = [1, 2, 3, 4, 5]
        result = remap_seq(items, lambda i, v: (ABSENT, ABSENT) if v % 2 else (ABSENT, v))
        assert result is items
        assert items == [2, 4]

    def test_overwrite_values(self):
        assert remap_seq(["a", "b"], lambda i, v: (ABSENT, v.upper())) == ["A", "B"]

    def test_move_past_end(self):
        items = ["a", "b", "c"]
        remap_seq(items, lambda i, v: (i + 3, v) if i == 0 else (ABSENT, v))
        assert items == ["b", "c", "a"]

    def test_move_onto_unvisited_position_is_cleared(self):
        # position 1 is cleared when its own turn comes, dropping the moved value
        items = ["a", "b"]
        remap_seq(items, lambda i, v: (1, ABSENT) if i == 0 else (ABSENT, v))
        assert items == ["b"]

    def test_move_onto_visited_position_overwrites(self):
        items = ["a", "b", "c"]
        remap_seq(items, lambda i, v: (0, v) if i == 2 else (ABSENT, v))
        assert items == ["c", "b"]

    def test_container_uses_sequential_facet(self):
        box = Container([1, 2, 3], {"keep": "me"})
        result = remap_seq(box, lambda i, v: (ABSENT, ABSENT) if v == 2 else (ABSENT, v * 10))
        assert result is box
        assert box.seq == [10, 30]
        assert box["keep"] == "me"

    def test_seq_facet(self):
        facet = SeqFacet(["x", "y"])
        remap_seq(facet, lambda i, v: (ABSENT, v * 2))
        assert facet == ["xx", "yy"]

    def test_visitor_error_leaves_sequence_contiguous(self):
        items = [1, 2, 3, 4]

        def visitor(i, v):
            if i == 2:
                raise RuntimeError("stop")
            return ABSENT, ABSENT

        with pytest.raises(RuntimeError, match="stop"):
            remap_seq(items, visitor)
        assert items == [3, 4]

    def test_appended_entries_are_not_visited(self):
        items = [1, 2]
        seen = []

        def visitor(i, v):
            seen.append(v)
            if i == 0:
                items.append(99)
            return ABSENT, v

        remap_seq(items, visitor)
        assert seen == [1, 2]
        assert items == [1, 2, 99]

    def test_visitor_reads_live_list(self):
        items = [1, 2, 3]
        observed = []

        def visitor(i, v):
            observed.append((len(items), list(items)))
            return (ABSENT, ABSENT) if i == 0 else (ABSENT, v)

        remap_seq(items, visitor)
        assert observed == [(3, [1, 2, 3])] * 3
        assert items == [2, 3]

    def test_visitor_reads_live_container(self):
        box = Container([1, 2, 3], {"name": "grid"})
        observed = []

        def visitor(i, v):
            observed.append((len(box.seq), list(box.seq), box.seq.get(i)))
            return (ABSENT, ABSENT) if i == 0 else (i - 1, v * 10)

        remap_seq(box, visitor)
        assert observed == [
            (3, [1, 2, 3], 1),
            (3, [1, 2, 3], 2),
            (3, [1, 2, 3], 3),
        ]
        assert box.seq == [20, 30]
        assert box["name"] == "grid"

    def test_visitor_error_writes_back_partial_result(self):
        box = Container(["a", "b", "c"])

        def visitor(i, v):
            if i == 1:
                assert list(box.seq) == ["a", "b", "c"]
                raise RuntimeError("stop")
            return ABSENT, v.upper()

        with pytest.raises(RuntimeError, match="stop"):
            remap_seq(box, visitor)
        assert box.seq == ["A", "b", "c"]

    @pytest.mark.parametrize(
        "position,exc_type,match",
        [
            pytest.param("0", TypeError, r"must be int", id="str"),
            pytest.param(1.0, TypeError, r"must be int", id="float"),
            pytest.param(-1, IndexError, r"non-negative", id="negative"),
        ],
    )
    def test_invalid_positions(self, position, exc_type, match):
        items = ["a", "b"]
        with pytest.raises(exc_type, match=match):
            remap_seq(items, lambda i, v: (position, v))
        assert items == ["b"]

    @pytest.mark.parametrize(
        "container",
        [
            pytest.param((1, 2), id="tuple"),
            pytest.param({"a": 1}, id="dict"),
            pytest.param("ab", id="str"),
        ],
    )
    def test_rejects_unsupported_containers(self, container):
        with pytest.raises(TypeError, match=r"Container, SeqFacet or list"):
            remap_seq(container, lambda i, v: (i, v))


class TestReduce:

    def test_sum_without_seed(self):
        assert reduce([1, 2, 3, 4], lambda i, v, acc: acc + v) == 10

    def test_sum_with_seed(self):
        assert reduce([1, 2, 3], lambda i, v, acc: acc + v, 100) == 106

    def test_single_entry_without_seed_skips_visitor(self):
        def visitor(i, v, acc):
            raise AssertionError("must not be called")

        assert reduce([5], visitor) == 5

    def test_empty_with_seed(self):
        assert reduce([], lambda i, v, acc: acc + v, 0) == 0

    def test_empty_without_seed_is_absent(self):
        assert reduce([], lambda i, v, acc: acc + v) is ABSENT

    @pytest.mark.parametrize(
        "seed",
        [
            pytest.param(None, id="none"),
            pytest.param(0, id="zero"),
            pytest.param("", id="empty-str"),
        ],
    )
    def test_falsy_seed_is_used(self, seed):
        calls = []
        reduce(["a"], lambda i, v, acc: calls.append((i, v, acc)), seed)
        assert calls == [(0, "a", seed)]

    def test_positions_passed_to_visitor(self):
        positions = reduce(["a", "b", "c"], lambda i, v, acc: acc + [i] if isinstance(acc, list) else [i])
        # "a" seeds the accumulator, so the visitor starts at position 1
        assert positions == [1, 2]
        assert reduce(["x", "y", "z"], lambda i, v, acc: acc + [(i, v)], []) == [(0, "x"), (1, "y"), (2, "z")]

    def test_container_sequential_facet(self):
        box = Container([2, 3, 4], {"ignored": 100})
        assert reduce(box, lambda i, v, acc: acc * v) == 24

    def test_rejects_non_sequence(self):
        with pytest.raises(TypeError, match=r"Container or Sequence"):
            reduce(42, lambda i, v, acc: acc)
