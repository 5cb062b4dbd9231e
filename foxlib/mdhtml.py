"""Rendering of markdown files to HTML."""

from __future__ import annotations

import logging
from pathlib import Path

import markdown

log = logging.getLogger(__name__)

_EXTENSIONS = ["tables", "fenced_code", "toc", "def_list"]


def md_to_html(directory: str | Path, fname: str) -> str:
    """Read a markdown file from the directory and return its HTML form."""
    path = Path(directory) / fname
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        log.error("unable to open %s: %s", path, exc)
        raise
    return markdown.markdown(text, extensions=_EXTENSIONS)