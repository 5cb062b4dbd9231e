import pytest

from foxlib.sqldb import parse_db_file


def test_parse_db_file(tmp_path):
    path = tmp_path / "testdbfile.txt"
    path.write_text("dbtype dburi dbowner\n")
    dbtype, dburi, dbowner = parse_db_file(path)
    assert dbtype == "dbtype"
    assert dburi == "dburi"
    assert dbowner == "dbowner"


def test_parse_db_file_too_short(tmp_path):
    path = tmp_path / "short.txt"
    path.write_text("dbtype dburi\n")
    with pytest.raises(ValueError):
        parse_db_file(path)


def test_parse_db_file_missing(tmp_path):
    with pytest.raises(OSError):
        parse_db_file(tmp_path / "missing.txt")