"""Regular expressions for recognising common value shapes."""

import re

# ``\Z`` anchors at the very end of the text, so a trailing newline never matches.
PATTERN_INT = re.compile(r"(^[0-9-]\Z|^[0-9-][0-9]*\Z)")
PATTERN_FLOAT = re.compile(r"[+-]?([0-9]*[.])?[0-9]+")
PATTERN_URL = re.compile(
    r"(https|http)://[-A-Za-z0-9_+&@#/%?=~_|!:,.;]*[-A-Za-z0-9+&@#/%=~_|]"
)
PATTERN_DATASET = re.compile(r"/[-a-zA-Z_0-9*]+/[-a-zA-Z_0-9*]+/[-a-zA-Z_0-9*]+")
PATTERN_FILE = re.compile(r"/[a-zA-Z_0-9].*\.root\Z")
PATTERN_RUN = re.compile(r"[0-9]+")


def is_int(val: str) -> bool:
    """Return True if the value looks like an integer."""
    return PATTERN_INT.search(val) is not None


def is_float(val: str) -> bool:
    """Return True if the value contains a float-like number."""
    return PATTERN_FLOAT.search(val) is not None