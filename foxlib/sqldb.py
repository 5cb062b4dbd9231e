"""Helpers for SQL database configuration files."""

from __future__ import annotations

from pathlib import Path


def parse_db_file(dbfile: str | Path) -> tuple[str, str, str]:
    """Read 'dbtype dburi dbowner' from a file and return the three parts."""
    text = Path(dbfile).read_text()
    parts = text.split(" ")
    if len(parts) < 3:
        raise ValueError(f"{dbfile}: expected 'dbtype dburi dbowner'")
    return parts[0], parts[1], parts[2].replace("\n", "")