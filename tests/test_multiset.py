from fractions import Fraction

import numpy as np
import pytest

from counters.multiset import Multiset, aggregate_multisets
from counters.numeric import FRACTION, numpy_policy


def test_creation(letters):
    counter = letters("abbccc")
    assert counter.to_dict() == {"a": 1, "b": 2, "c": 3}
    assert len(counter) == 3


def test_empty_creation():
    counter = Multiset()
    assert len(counter) == 0
    assert counter.total() == 0
    assert counter.to_dict() == {}


def test_update(letters):
    counter = letters("abbccc")
    counter.update("aeeeee")
    assert counter.to_dict() == {"a": 2, "b": 2, "c": 3, "e": 5}


def test_add_update_iterable(letters):
    counter = letters("abbccc")
    counter += "aeeeee"
    assert counter.to_dict() == {"a": 2, "b": 2, "c": 3, "e": 5}


def test_add_update_counter(letters):
    counter = letters("abbccc")
    counter += letters("aeeeee")
    assert counter.to_dict() == {"a": 2, "b": 2, "c": 3, "e": 5}


def test_subtract(letters):
    counter = letters("abbccc")
    counter.subtract("bbccddd")
    assert counter.to_dict() == {"a": 1, "c": 1}


def test_subtract_never_leaves_zero_for_touched_keys(letters):
    counter = letters("abbccc")
    counter.subtract("abba")
    assert counter.to_dict() == {"c": 3}
    assert "a" not in counter
    assert "b" not in counter


def test_subtract_leaves_negative_counts_alone():
    counter = Multiset.from_pairs([("a", -2), ("b", 1)])
    counter.subtract("ab")
    assert counter.to_dict() == {"a": -2}


def test_sub_update_iterable(letters):
    counter = letters("abbccc")
    counter -= "bbccddd"
    assert counter.to_dict() == {"a": 1, "c": 1}


def test_sub_update_counter(letters):
    counter = letters("abbccc")
    counter -= letters("bbccddd")
    assert counter.to_dict() == {"a": 1, "c": 1}


def test_sub_counter_drops_keys_that_would_go_negative():
    signed = numpy_policy(np.int16)
    counter = Multiset.from_pairs([("a", 2), ("b", 5)], policy=signed)
    counter -= Multiset.from_pairs([("a", 3), ("b", 1)], policy=signed)
    assert counter.to_dict() == {"b": 4}


def test_composite_add_sub(letters):
    counts = letters("able babble table babble rabble table able fable scrabble".split())
    counts += "cain and abel fable table cable".split()
    other = letters("scrabble cabbie fable babble".split())
    difference = counts - other
    expected = {
        "able": 2, "rabble": 1, "table": 3, "babble": 1,
        "fable": 1, "cain": 1, "and": 1, "abel": 1, "cable": 1,
    }
    assert difference.to_dict() == expected


def test_merge_identity(letters):
    a = letters("aaab")
    assert (a + letters("abb")) - letters("abb") == a


def test_update_subtract_round_trip(letters):
    text = "mississippi river"
    counter = letters(text)
    counter.subtract(text)
    assert len(counter) == 0


def test_add_and_sub_return_new_values(letters):
    a = letters("aab")
    b = letters("bc")
    total = a + b
    assert total.to_dict() == {"a": 2, "b": 2, "c": 1}
    assert a.to_dict() == {"a": 2, "b": 1}
    remainder = total - "ab"
    assert remainder.to_dict() == {"a": 1, "b": 1, "c": 1}
    assert total.to_dict() == {"a": 2, "b": 2, "c": 1}


def test_total():
    counter = Multiset.init("abracadabra")
    assert counter.total() == 11
    assert counter.total_count() == 11
    assert len(counter) == 5


def test_from_pairs_with_duplicates():
    counter = Multiset.from_pairs([("a", 1), ("b", 2), ("a", 3)])
    assert counter.to_dict() == {"a": 4, "b": 2}


def test_extend_counts_from_mapping_and_counter(letters):
    counter = letters("abbccc")
    counter.extend_counts({"b": 1, "d": 3})
    counter.extend_counts(letters("bccddd"))
    assert counter.to_dict() == {"a": 1, "b": 4, "c": 5, "d": 6}


def test_extend_counts_rejects_non_integer_counts():
    counter = Multiset()
    with pytest.raises(TypeError):
        counter.extend_counts([("a", 1.5)])


def test_extend_simple(letters):
    counter = letters("abbccc")
    counter.extend("bccddd")
    assert counter.to_dict() == {"a": 1, "b": 3, "c": 5, "d": 3}


def test_min_count(letters):
    counter = letters("abbcccddddeeeee")
    assert sorted(counter.min_count(3)) == [("c", 3), ("d", 4), ("e", 5)]
    assert sorted(counter.min_count(0)) == sorted(counter.items())


def test_read_absent_key_does_not_materialize(letters):
    counter = letters("aaa")
    assert counter["a"] == 3
    assert counter["b"] == 0
    assert len(counter) == 1
    assert "b" not in counter


def test_entry_materializes_zero(letters):
    counter = letters("aaa")
    assert counter.entry("b") == 0
    assert len(counter) == 2
    assert counter.mapping["b"] == 0
    assert counter.entry("a") == 3
    assert len(counter) == 2


def test_index_write(letters):
    counter = letters("aaa")
    counter["a"] += 1
    counter["b"] += 1
    assert counter.to_dict() == {"a": 4, "b": 1}


def test_delete_key_from_backing_map(letters):
    counter = letters("aa-bb-cc")
    del counter["-"]
    assert counter == letters("aabbcc")
    with pytest.raises(KeyError):
        del counter["-"]


def test_mapping_is_by_reference(letters):
    counter = letters("ab")
    counter.mapping["z"] = 0
    assert "z" in counter
    assert counter.to_dict() == {"a": 1, "b": 1, "z": 0}


def test_to_dict_is_a_copy(letters):
    counter = letters("ab")
    plain = counter.to_dict()
    plain["a"] = 10
    assert counter["a"] == 1


def test_count_minimal_type():
    class Inty:
        def __init__(self, i):
            self.i = i

        def __eq__(self, other):
            return isinstance(other, Inty) and self.i == other.i

        def __hash__(self):
            return hash(self.i)

    counts = Multiset.init(Inty(i) for i in [8, 0, 0, 8, 6, 7, 5, 3, 0, 9])
    assert counts[Inty(8)] == 2
    assert counts[Inty(0)] == 3
    assert counts[Inty(6)] == 1
    assert counts[Inty(4)] == 0


def test_non_int_count():
    counter = Multiset.init("abbccc", policy=numpy_policy(np.int8))
    assert counter.to_dict() == {"a": 1, "b": 2, "c": 3}
    assert all(isinstance(v, np.int8) for v in counter.values())
    assert isinstance(counter["z"], np.int8)


def test_numpy_policy_rejects_out_of_range_write():
    counter = Multiset(policy=numpy_policy(np.uint8))
    with pytest.raises(ValueError):
        counter["a"] = -1


def test_fraction_counts():
    counter = Multiset.from_pairs([("a", Fraction(1, 3)), ("a", Fraction(1, 6))], policy=FRACTION)
    assert counter["a"] == Fraction(1, 2)
    assert counter.total() == Fraction(1, 2)


def test_counts_of_counts(letters):
    char_counts = letters("barefoot")
    counts_counts = Multiset.init(char_counts.values())
    assert counts_counts.to_dict() == {1: 6, 2: 1}


def test_insert_and_topk(letters):
    counter = letters("eaddbbccc")
    counter.insert("a")
    assert counter.topk() == [("c", 3), ("a", 2), ("b", 2), ("d", 2), ("e", 1)]
    assert counter.topk(2) == [("c", 3), ("a", 2)]


def test_equality_and_repr(letters):
    assert letters("ab") == letters("ba")
    assert letters("ab") != letters("abb")
    assert repr(Multiset.init("a")) == "Multiset({'a': 1})"
    assert letters("ab").__eq__({"a": 1, "b": 1}) is NotImplemented


def test_aggregate_multisets(letters):
    merged = aggregate_multisets([letters("aba"), letters("bcac")])
    assert merged.to_dict() == {"a": 3, "b": 2, "c": 2}


def test_aggregate_multisets_with_capacity(letters):
    inputs = [letters("aba"), letters("bcac")]
    merged = aggregate_multisets(inputs, capacity=2)
    assert merged.to_dict() == {"a": 3, "b": 2}
    assert inputs[0].to_dict() == {"a": 2, "b": 1}


def test_aggregate_empty():
    assert len(aggregate_multisets([])) == 0
    with pytest.raises(ValueError):
        aggregate_multisets([Multiset.init("a")], capacity=-1)


def test_sub_counter_from_itself(letters):
    counter = letters("aaabbc")
    counter -= counter
    assert counter.to_dict() == {}


def test_subtract_itself_removes_one_per_key(letters):
    counter = letters("aaabbc")
    counter.subtract(counter)
    assert counter.to_dict() == {"a": 2, "b": 1}


def test_add_counter_to_itself(letters):
    counter = letters("aab")
    counter += counter
    assert counter.to_dict() == {"a": 4, "b": 2}


def test_merge_coerces_counts_of_another_policy():
    counter = Multiset(policy=FRACTION)
    counter += Multiset.init("aab")
    assert counter.to_dict() == {"a": 2, "b": 1}
    assert all(isinstance(v, Fraction) for v in counter.values())

    plain = Multiset.init("a")
    with pytest.raises(TypeError):
        plain += Multiset.from_pairs([("a", Fraction(1, 2))], policy=FRACTION)
    assert plain.to_dict() == {"a": 1}
