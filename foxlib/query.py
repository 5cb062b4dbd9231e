"""Parsing of user queries into database query specifications."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from bson import ObjectId

from foxlib.patterns import PATTERN_FLOAT, PATTERN_INT

log = logging.getLogger(__name__)

SEPARATOR = ":"


def _text(val: Any) -> str:
    if val is None:
        return "<nil>"
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, float) and val.is_integer() and abs(val) < 1e21:
        return str(int(val))
    return str(val)


def _object_id(val: Any) -> ObjectId | None:
    if isinstance(val, ObjectId):
        return val
    if isinstance(val, str) and len(val) == 24 and ObjectId.is_valid(val):
        return ObjectId(val)
    return None


def _split_key_values(query: str) -> dict[str, Any]:
    spec: dict[str, Any] = {}
    parts = query.split(SEPARATOR)
    key = parts[0]
    last = parts[-1]
    for i in range(len(parts)):
        if len(parts) > i + 1:
            following = parts[i + 1]
            if following == last:
                spec[key] = last
                break
            words = following.split(" ")
            spec[key] = " ".join(words[:-1])
            key = words[-1]
        else:
            spec[key] = " ".join(parts[i:])
            break
    return spec


def _adjust_query(spec: Mapping[str, Any], schema_keys: Mapping[str, str]) -> dict[str, Any]:
    nspec: dict[str, Any] = {}
    for key, val in spec.items():
        if key.startswith("$"):
            continue
        if key == "_id":
            oid = _object_id(val)
            if oid is not None:
                nspec["_id"] = oid
            continue
        schema_key = schema_keys.get(key.lower())
        sval = _text(val)
        if schema_key is not None:
            if PATTERN_INT.search(sval) or PATTERN_FLOAT.search(sval):
                nspec[schema_key] = val
            else:
                nspec[schema_key] = {"$regex": f"^{sval}$", "$options": "i"}
        else:
            if key != "did":
                log.warning("unable to find matching schema key for %s", key)
            nspec[key] = val
        if "*" in sval:
            nspec[key] = {"$regex": sval.replace("*", ".*")}
    log.debug("adjusted query from %s to %s", spec, nspec)
    return nspec


def parse_query(query: str, schema_keys: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Parse a JSON, 'key:value' or free-text query into a query specification."""
    keys = schema_keys or {}
    if query.strip() == "":
        raise ValueError("empty query")

    if "{" in query:
        try:
            spec = json.loads(query)
        except json.JSONDecodeError as exc:
            raise ValueError(f"unable to parse input query '{query}': {exc}") from exc
        if not isinstance(spec, dict):
            raise ValueError(f"unable to parse input query '{query}': not an object")
        if "_id" in spec:
            oid = _object_id(spec["_id"])
            if oid is not None:
                spec["_id"] = oid
        if "$or" in spec:
            return spec
        return _adjust_query(spec, keys)

    if SEPARATOR in query:
        spec = _split_key_values(query)
    else:
        spec = {"$text": {"$search": query}}
    log.debug("input query %s spec=%s", query, spec)
    return _adjust_query(spec, keys)