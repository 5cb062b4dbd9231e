"""Helpers for working with lists, sets and simple mappings."""

from __future__ import annotations

import os
from decimal import Decimal
from typing import Any, Hashable, Iterable, Sequence

_LARGEST_INT = float(2**63 - 1)


def find_in_list(a: str, arr: Iterable[str]) -> bool:
    """Return True if the item is in the list."""
    return a in arr


def in_list(a: Any, items: Iterable[Any]) -> bool:
    """Return True if the item is in the list."""
    return a in items


def map_keys(rec: dict) -> list:
    """Return the sorted keys of a mapping."""
    return sorted(rec)


def map_int_keys(rec: dict) -> list:
    """Return the keys of a mapping as a list."""
    return list(rec)


def equal_lists(list1: Sequence[str], list2: Sequence[str]) -> bool:
    """Return True if every item of list1 is in list2 and both have the same length."""
    if not all(item in list2 for item in list1):
        return False
    return len(list2) == len(list1)


def check_entries(list1: Iterable[str], list2: Sequence[str]) -> bool:
    """Return True if all entries of list1 appear in list2."""
    return all(item in list2 for item in list1)


def list_to_set(arr: Iterable[Hashable]) -> list:
    """Remove duplicates, keeping the first occurrence order."""
    return list(dict.fromkeys(arr))


def _numeric(val: Any) -> float | None:
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, float, Decimal)):
        return float(val)
    return None


def sum_values(data: Iterable[Any]) -> float:
    """Sum the numeric values, ignoring anything else."""
    total = 0.0
    for val in data:
        num = _numeric(val)
        if num is not None:
            total += num
    return total


def max_value(data: Iterable[Any]) -> float:
    """Return the largest numeric value, never below zero."""
    out = 0.0
    for val in data:
        num = _numeric(val)
        if num is not None and num > out:
            out = num
    return out


def min_value(data: Iterable[Any]) -> float:
    """Return the smallest numeric value, starting from the largest 64-bit int."""
    out = _LARGEST_INT
    for val in data:
        num = _numeric(val)
        if num is not None and num < out:
            out = num
    return out


def ordered_set(items: Iterable[Any]) -> list:
    """Return the unique items in sorted order."""
    return sorted(list_to_set(items))


def equal(a: Sequence[Any] | None, b: Sequence[Any] | None) -> bool:
    """Return True if both sequences hold the same elements in the same order."""
    return list(a or []) == list(b or [])


def list_files(directory: str | os.PathLike) -> list[str]:
    """Return the sorted names of regular entries (not directories) in a directory."""
    with os.scandir(directory) as entries:
        return sorted(entry.name for entry in entries if not entry.is_dir())


def insert(arr: Sequence[Any], val: Any) -> list:
    """Return a new list with the value placed at position zero."""
    return [val, *arr]


def update_ordered_dict(omap: dict, nmap: dict) -> dict:
    """Extend the lists in omap with those from nmap and return omap."""
    for idx, items in nmap.items():
        if idx in omap:
            omap[idx] = [*omap[idx], *items]
        else:
            omap[idx] = list(items)
    return omap


def unique_form_values(vals: Iterable[str]) -> list[str]:
    """Split space-separated form values and return them unique and sorted."""
    items: list[str] = []
    for value in list_to_set(vals):
        items.extend(list_to_set(value.split(" ")))
    return ordered_set(items)