from itertools import combinations

import numpy as np
import pytest

from pairstore import KeyIndex, ListStore, Lookup, MissingKey, NumpyStore, PairwiseStorage, SimilarKeys, TensorStore


def test_from_keys():
    storage = Lookup.from_keys([1, 2, 3], 42)

    assert storage.get(1, 2) == 42

    with pytest.raises(MissingKey) as excinfo:
        storage.get(5, 1)
    assert excinfo.value.key == 5

    with pytest.raises(SimilarKeys):
        storage.get(1, 1)


def test_from_keys_and_strategy():
    storage = Lookup.from_keys_and_strategy([1, 2, 3, 4, 5], lambda a, b: a + b)

    assert storage.get(1, 5) == 6
    assert storage.get(4, 5) == 9
    assert storage.get(5, 4) == 9


def test_strategy_called_once_per_pair_in_offset_order():
    calls = []

    def compute(left, right):
        calls.append((left, right))
        return f"{left}-{right}"

    storage = PairwiseStorage.from_keys_and_strategy(["c", "a", "b"], compute)

    assert calls == [("a", "b"), ("a", "c"), ("b", "c")]
    assert storage.get("c", "a") == "a-c"


def test_get_mut():
    storage = Lookup.from_keys([1, 2, 3], 0)
    assert storage.get(1, 2) == 0

    storage.get_mut(2, 1).value = 1

    assert storage.get(1, 2) == 1
    assert storage.get(2, 1) == 1
    assert storage.get(1, 3) == 0
    assert storage.get(2, 3) == 0


def test_get_mut_propagates_index_errors():
    storage = Lookup.from_keys([1, 2, 3], 0)

    with pytest.raises(SimilarKeys):
        storage.get_mut(2, 2)
    with pytest.raises(MissingKey):
        storage.get_mut(2, 8)


def test_mutation_leaves_other_pairs_at_default():
    keys = list(range(6))
    storage = PairwiseStorage.from_keys(keys, -1)

    storage[4, 2] = 99

    for a, b in combinations(keys, 2):
        expected = 99 if {a, b} == {2, 4} else -1
        assert storage[a, b] == expected
        assert storage[b, a] == expected


def test_mapping_conveniences():
    storage = PairwiseStorage.from_keys_and_strategy([3, 1, 2, 2], lambda a, b: a * b)

    assert len(storage) == 3
    assert storage.keys() == (1, 2, 3)
    assert list(storage.pairs()) == [(1, 2), (1, 3), (2, 3)]
    assert list(storage.values()) == [2, 3, 6]
    assert dict(storage.items()) == {(1, 2): 2, (1, 3): 3, (2, 3): 6}
    assert (3, 2) in storage
    assert (2, 2) not in storage
    assert (2, 7) not in storage

    storage.set(3, 1, 0)
    assert storage[1, 3] == 0

    with pytest.raises(TypeError):
        storage[1]


def test_raw_parts_round_trip():
    storage = Lookup.from_keys([1, 2, 3], "x")

    index, store = storage.into_raw_parts()
    assert isinstance(index, KeyIndex)
    assert isinstance(store, ListStore)
    assert len(store) == index.total_values()

    rebuilt = PairwiseStorage.from_raw_parts(index, store)
    rebuilt.set(1, 3, "y")
    assert rebuilt.get(3, 1) == "y"
    assert storage.get(1, 3) == "y"


@pytest.mark.parametrize("store_cls", [NumpyStore, TensorStore])
def test_alternative_backends(store_cls):
    storage = PairwiseStorage.from_keys_and_strategy(
        [1, 2, 3, 4, 5], lambda a, b: a + b, store_cls=store_cls
    )

    assert float(storage.get(1, 5)) == pytest.approx(6)
    assert float(storage.get(5, 4)) == pytest.approx(9)

    storage.set(2, 3, 0)
    assert float(storage.get(3, 2)) == pytest.approx(0)

    defaulted = PairwiseStorage.from_keys([1, 2, 3], 0.5, store_cls=store_cls)
    assert float(defaulted.get(1, 2)) == pytest.approx(0.5)


@pytest.mark.parametrize("keys", [[], ["solo"]])
def test_degenerate_storages(keys):
    storage = PairwiseStorage.from_keys(keys, 0)

    assert len(storage) == 0
    assert len(storage.store) == 0
    assert list(storage.items()) == []


def test_to_matrix_is_symmetric():
    storage = PairwiseStorage.from_keys_and_strategy([1, 2, 3, 4], lambda a, b: a * 10 + b)

    matrix = storage.to_matrix(fill=-1)

    expected = np.array(
        [
            [-1, 12, 13, 14],
            [12, -1, 23, 24],
            [13, 23, -1, 34],
            [14, 24, 34, -1],
        ]
    )
    np.testing.assert_array_equal(matrix, expected)


def test_to_matrix_rejects_vector_values():
    storage = PairwiseStorage.from_keys([1, 2, 3], [0.0, 1.0])

    with pytest.raises(ValueError):
        storage.to_matrix()


def test_to_frame():
    storage = PairwiseStorage.from_keys_and_strategy(["b", "a", "c"], lambda a, b: a + b)

    frame = storage.to_frame()

    assert list(frame.columns) == ["left", "right", "value"]
    assert frame["left"].tolist() == ["a", "a", "b"]
    assert frame["right"].tolist() == ["b", "c", "c"]
    assert frame["value"].tolist() == ["ab", "ac", "bc"]


@pytest.mark.parametrize("store_cls", [NumpyStore, TensorStore])
def test_array_backends_round_trip_wider_values(store_cls):
    storage = PairwiseStorage.from_keys([1, 2, 3], 0, store_cls=store_cls)

    storage.get_mut(1, 2).value = 2.5

    assert float(storage.get(2, 1)) == 2.5
    assert float(storage.get(1, 3)) == 0.0


def test_numpy_strategy_with_mixed_int_and_float_results():
    storage = PairwiseStorage.from_keys_and_strategy(
        [1, 2, 3], lambda a, b: 1 if (a, b) == (1, 2) else b / a, store_cls=NumpyStore
    )

    assert float(storage.get(1, 2)) == 1.0
    assert float(storage.get(1, 3)) == pytest.approx(3.0)
    assert float(storage.get(2, 3)) == pytest.approx(1.5)


def test_numpy_string_values_round_trip():
    storage = PairwiseStorage.from_keys(["a", "b", "c"], "x", store_cls=NumpyStore)

    storage.set("a", "b", "hello")

    assert storage.get("b", "a") == "hello"
    assert storage.get("a", "c") == "x"


def test_contains_treats_incomparable_and_malformed_pairs_as_absent():
    storage = PairwiseStorage.from_keys(["a", "b"], 0)

    assert ("a", "b") in storage
    assert ("a", 1) not in storage
    assert ("a",) not in storage
    assert "ab" not in storage
    assert 1 not in storage.index
