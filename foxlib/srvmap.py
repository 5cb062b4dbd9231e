"""Mapping of query-language keys to the services that serve them."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from foxlib.qlkeys import QLRecord, load_ql_records
from foxlib.query import parse_query


@dataclass
class QLManager:
    """Knows which query keys each service accepts."""

    service_map: dict[str, list[str]] = field(default_factory=dict)
    records: list[QLRecord] = field(default_factory=list)
    schema_keys: dict[str, str] = field(default_factory=dict)

    def load(self, fname: str | Path) -> None:
        """Load the service map from a JSON file of QL records."""
        records = load_ql_records(fname)
        service_map: dict[str, list[str]] = {}
        for rec in records:
            service_map.setdefault(rec.service, []).append(rec.key)
        self.service_map = service_map
        self.records = records

    def keys(self, srv: str) -> list[str]:
        """Return the sorted query keys of a service."""
        return sorted(self.service_map.get(srv, []))

    def services(self) -> list[str]:
        """Return the sorted names of known services."""
        return sorted(self.service_map)

    def service_queries(self, query: str) -> dict[str, dict[str, Any]]:
        """Split a query into the part each service is allowed to answer."""
        spec = parse_query(query, self.schema_keys)
        out: dict[str, dict[str, Any]] = {}
        for key, value in spec.items():
            for srv in self.service_map:
                if self.query_key_allowed(key, srv):
                    out.setdefault(srv, {})[key] = value
        return out

    def query_key_allowed(self, key: str, service: str) -> bool:
        """Return True if the key, or its dotted parent, is a key of the service."""
        service_keys = self.service_map.get(service)
        if service_keys is None:
            return False
        if key in service_keys:
            return True
        return any(key.startswith(f"{skey}.") for skey in service_keys)