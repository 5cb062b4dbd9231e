"""Dataset identifier (did) construction and key normalisation."""

from __future__ import annotations

from typing import Any

DEFAULT_DID_ATTRS = "btr,beamline,cycle,sample_name"


def _go_str(val: Any) -> str:
    if val is None:
        return "<nil>"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, float):
        if val.is_integer() and abs(val) < 1e21:
            return str(int(val))
        return repr(val)
    if isinstance(val, (list, tuple)):
        return "[" + " ".join(_go_str(v) for v in val) + "]"
    if isinstance(val, dict):
        items = " ".join(f"{_go_str(k)}:{_go_str(val[k])}" for k in sorted(val, key=str))
        return f"map[{items}]"
    return str(val)


def did_keys(attrs: str) -> list[str]:
    """Return the sorted, lower-case did keys from a comma separated list."""
    if attrs == "":
        attrs = DEFAULT_DID_ATTRS
    attrs = attrs.replace(" ", "")
    return sorted(key.lower() for key in attrs.split(",") if key)


def create_did(rec: dict[str, Any], attrs: str, sep: str, div: str) -> str:
    """Build a did from the record values of the given attributes."""
    keys = did_keys(attrs)
    values: dict[str, str] = {}
    for key, val in rec.items():
        lkey = key.lower()
        if isinstance(val, (list, tuple)):
            text = ",".join(_go_str(v) for v in val)
        else:
            text = _go_str(val)
        if lkey in keys:
            values[lkey] = text.lower()
    return "".join(f"{sep}{key}{div}{values[key]}" for key in keys if key in values)


def camel_case_to_snake_case(s: str) -> str:
    """Convert CamelCase to snake_case; e.g. CESRConditions becomes cesr_conditions."""
    out: list[str] = []
    last_was_lower = False
    for i, char in enumerate(s):
        if char.isupper():
            if i > 0 and last_was_lower:
                out.append("_")
            out.append(char.lower())
            last_was_lower = False
            # a run of capitals followed by a CamelCase word starts a new word
            if i + 2 < len(s) and s[i + 1].isupper() and s[i + 2].islower():
                last_was_lower = True
        elif char.islower():
            out.append(char)
            last_was_lower = True
        else:
            last_was_lower = False
    return "".join(out)


def convert_camel_case_keys(rec: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of the mapping with snake_case keys."""
    return {camel_case_to_snake_case(key): val for key, val in rec.items()}


def _record_value(key: str, rec: dict[str, Any]) -> str:
    val = rec.get(key)
    if val is None:
        return ""
    if isinstance(val, (list, tuple)):
        return ",".join(_go_str(v) for v in val)
    return _go_str(val)


def get_did(rec: dict[str, Any]) -> str:
    """Build a did from the Beamline, BTR, Cycle and SampleName fields."""
    return (
        f"/beamline={_record_value('Beamline', rec)}"
        f"/btr={_record_value('BTR', rec)}"
        f"/cycle={_record_value('Cycle', rec)}"
        f"/sample={_record_value('SampleName', rec)}"
    )