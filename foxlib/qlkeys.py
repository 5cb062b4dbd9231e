"""Query-language key records and their loading from a service map file."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

NOT_AVAILABLE = "N/A"


@dataclass
class QLRecord:
    """A query-language key with the service that serves it and its metadata."""

    key: str = ""
    description: str = ""
    service: str = ""
    units: str = ""
    schema: str = ""
    data_type: str = ""
    db_type: str = ""

    def fill_empty(self) -> None:
        """Set every empty descriptive attribute to 'N/A'."""
        for name in ("description", "schema", "units", "data_type", "db_type"):
            if getattr(self, name) == "":
                setattr(self, name, NOT_AVAILABLE)

    def __str__(self) -> str:
        self.fill_empty()
        return (
            f"Key:{self.key} Description:{self.description} Service:{self.service} "
            f"Schema:{self.schema} Units:{self.units} DataType:{self.data_type} "
            f"DBType: {self.db_type}"
        )

    def details(self, show: str) -> str:
        """Return one attribute selected by name, or a summary of all of them."""
        self.fill_empty()
        selected = {
            "key": self.key,
            "description": self.description,
            "service": self.service,
            "schema": self.schema,
            "units": self.units,
            "data-type": self.data_type,
            "db-type": self.data_type,
        }
        if show in selected:
            return selected[show]
        return (
            f"{self.description}, service: {self.service}, schema: {self.schema}, "
            f"units: {self.units}, data-type: {self.data_type}, db-type: {self.db_type}"
        )

    def to_dict(self) -> dict[str, str]:
        """Return the JSON-ready mapping, leaving out empty optional fields."""
        out: dict[str, str] = {"key": self.key}
        if self.description:
            out["description"] = self.description
        out["service"] = self.service
        if self.units:
            out["units"] = self.units
        if self.schema:
            out["schema"] = self.schema
        out["type"] = self.data_type
        if self.db_type:
            out["db"] = self.db_type
        return out


def _text_field(item: dict[str, Any], name: str) -> str:
    value = item.get(name, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string, got {value!r}")
    return value


def _record_from_mapping(item: Any) -> QLRecord:
    if not isinstance(item, dict):
        raise ValueError(f"QL record must be an object, got {item!r}")
    return QLRecord(
        key=_text_field(item, "key"),
        description=_text_field(item, "description"),
        service=_text_field(item, "service"),
        units=_text_field(item, "units"),
        schema=_text_field(item, "schema"),
        data_type=_text_field(item, "type"),
        db_type=_text_field(item, "db"),
    )


def load_ql_records(fname: str | Path) -> list[QLRecord]:
    """Read a JSON list of QL records from a file."""
    data = json.loads(Path(fname).read_text(encoding="utf-8"))
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("QL records file must hold a JSON list")
    return [_record_from_mapping(item) for item in data]