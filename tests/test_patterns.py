import pytest

from foxlib.patterns import (
    PATTERN_DATASET,
    PATTERN_FILE,
    PATTERN_FLOAT,
    PATTERN_INT,
    PATTERN_RUN,
    PATTERN_URL,
    is_float,
    is_int,
)

OTHER = "bla"


@pytest.mark.parametrize(
    "pattern, value",
    [
        (PATTERN_INT, "1"),
        (PATTERN_FLOAT, "1.1"),
        (PATTERN_URL, "http://abc.com"),
        (PATTERN_DATASET, "/a/b/c"),
        (PATTERN_FILE, "/tmp/file.root"),
        (PATTERN_RUN, "123"),
    ],
)
def test_pattern_matches(pattern, value):
    assert pattern.search(value) is not None
    assert pattern.search(OTHER) is None


def test_is_int():
    assert is_int("1") is True
    assert is_int("123") is True
    assert is_int("bla") is False


def test_is_int_rejects_trailing_newline():
    assert is_int("12\n") is False


def test_is_float():
    assert is_float("1.1") is True
    assert is_float("bla") is False


def test_file_pattern_requires_suffix():
    assert PATTERN_FILE.search("/tmp/file.txt") is None