from decimal import Decimal

import pytest

from foxlib.lists import (
    check_entries,
    equal,
    equal_lists,
    find_in_list,
    in_list,
    insert,
    list_files,
    list_to_set,
    map_int_keys,
    map_keys,
    max_value,
    min_value,
    ordered_set,
    sum_values,
    unique_form_values,
    update_ordered_dict,
)


def test_in_list():
    vals = ["1", "2", "3"]
    assert in_list("1", vals) is True
    assert in_list("5", vals) is False


def test_find_in_list():
    assert find_in_list("b", ["a", "b"]) is True
    assert find_in_list("c", ["a", "b"]) is False


def test_list_to_set():
    vals = ["a", "b", "c", "a"]
    res = list_to_set(vals)
    assert len(res) == 3
    assert res == ["a", "b", "c"]


def test_unique_form_values():
    vals = ["a", "b", "a", "b", "a b", "b a"]
    res = unique_form_values(vals)
    assert len(res) == 2
    assert res == ["a", "b"]


def test_map_keys_sorted():
    assert map_keys({"b": 1, "a": 2, "c": 3}) == ["a", "b", "c"]


def test_map_int_keys():
    assert sorted(map_int_keys({3: "x", 1: "y"})) == [1, 3]


def test_equal_lists():
    assert equal_lists(["a", "b"], ["b", "a"]) is True
    assert equal_lists(["a", "b"], ["a", "b", "c"]) is False
    assert equal_lists(["a", "d"], ["a", "b"]) is False


def test_check_entries():
    assert check_entries(["a"], ["a", "b"]) is True
    assert check_entries(["a", "z"], ["a", "b"]) is False
    assert check_entries([], ["a"]) is True


def test_sum_values_ignores_non_numbers():
    assert sum_values([1.5, 2, None, "x", True, Decimal("0.5")]) == 4.0


def test_max_value():
    assert max_value([1.0, 7, None, 3.5]) == 7.0
    assert max_value([-5.0]) == 0.0


def test_min_value():
    assert min_value([4.0, 2, None, 3.5]) == 2.0
    assert min_value([]) == float(2**63 - 1)


def test_ordered_set():
    assert ordered_set([3, 1, 3, 2]) == [1, 2, 3]


def test_equal():
    assert equal([1, 2], [1, 2]) is True
    assert equal([1, 2], [2, 1]) is False
    assert equal(None, []) is True


def test_insert():
    arr = [2, 3]
    assert insert(arr, 1) == [1, 2, 3]
    assert arr == [2, 3]


def test_update_ordered_dict():
    omap = {1: ["a"]}
    res = update_ordered_dict(omap, {1: ["b"], 2: ["c"]})
    assert res is omap
    assert res == {1: ["a", "b"], 2: ["c"]}


def test_list_files(tmp_path):
    (tmp_path / "b.txt").write_text("x")
    (tmp_path / "a.txt").write_text("y")
    (tmp_path / "sub").mkdir()
    assert list_files(tmp_path) == ["a.txt", "b.txt"]


def test_list_files_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        list_files(tmp_path / "missing")