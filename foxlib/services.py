"""Records exchanged between services: queries, requests and responses."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def _sorted_maps(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k): _sorted_maps(obj[k]) for k in sorted(obj, key=str)}
    if isinstance(obj, (list, tuple)):
        return [_sorted_maps(v) for v in obj]
    return obj


def _indented_json(obj: Any) -> str:
    text = json.dumps(obj, indent=2, ensure_ascii=False)
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


@dataclass
class MetaRecord:
    """A meta-data record together with the name of its schema."""

    schema: str = ""
    record: dict[str, Any] | None = None

    def json_string(self) -> str:
        """Return the indented JSON form of the record."""
        return _indented_json(
            {"Schema": self.schema, "Record": _sorted_maps(self.record)}
        )


@dataclass
class ServiceQuery:
    """A service query along with its paging and sorting options."""

    query: str = ""
    spec: dict[str, Any] | None = None
    sql: str = ""
    idx: int = 0
    limit: int = 0
    sort_keys: list[str] | None = None
    sort_order: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping of the query."""
        return {
            "query": self.query,
            "spec": _sorted_maps(self.spec),
            "sql": self.sql,
            "idx": self.idx,
            "limit": self.limit,
            "sort_keys": None if self.sort_keys is None else list(self.sort_keys),
            "sort_order": self.sort_order,
        }


@dataclass
class ServiceResults:
    """The records a service returned and their count."""

    nrecords: int = 0
    records: list[dict[str, Any]] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping of the results."""
        return {"nrecords": self.nrecords, "records": _sorted_maps(self.records)}


@dataclass
class ServiceRequest:
    """A client's request to a service."""

    client: str = ""
    service_query: ServiceQuery = field(default_factory=ServiceQuery)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping of the request."""
        return {"client": self.client, "service_query": self.service_query.to_dict()}

    def __str__(self) -> str:
        return _indented_json(self.to_dict())


@dataclass
class ServiceResponse:
    """A service's response with status, codes and results."""

    http_code: int = 0
    srv_code: int = 0
    service: str = ""
    status: str = ""
    error: str = ""
    service_query: ServiceQuery = field(default_factory=ServiceQuery)
    results: ServiceResults = field(default_factory=ServiceResults)
    timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping of the response."""
        return {
            "http_code": self.http_code,
            "service_code": self.srv_code,
            "service": self.service,
            "status": self.status,
            "error": self.error,
            "service_query": self.service_query.to_dict(),
            "results": self.results.to_dict(),
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        return (
            f"Service     : {self.service}\n"
            f"Code        : {self.srv_code}\n"
            f"Status      : {self.status}\n"
            f"Error       : {self.error}\n"
            f"Timestamp   : {self.timestamp}\n"
        )

    def json_string(self) -> str:
        """Return the indented JSON form of the response."""
        return _indented_json(self.to_dict())

    def json_bytes(self) -> bytes:
        """Return the indented JSON form of the response as UTF-8 bytes."""
        return self.json_string().encode("utf-8")