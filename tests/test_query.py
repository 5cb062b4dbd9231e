import pytest
from bson import ObjectId

from foxlib.query import parse_query


def test_key_value_query():
    spec = parse_query("bla:1 foo:2")
    assert spec == {"bla": "1", "foo": "2"}


def test_json_query():
    spec = parse_query('{"bla":1, "foo": 2}')
    assert spec == {"bla": 1, "foo": 2}


def test_regex_query():
    spec = parse_query('{"did":" /beamline*"}')
    assert spec["did"] == {"$regex": " /beamline.*"}


def test_or_query_kept():
    query = '{"$or":[{"beamline":".*val.*"},{"btr":".*val.*"}]}'
    spec = parse_query(query)
    assert len(spec) > 0
    assert spec["$or"] == [{"beamline": ".*val.*"}, {"btr": ".*val.*"}]


def test_empty_query_raises():
    with pytest.raises(ValueError):
        parse_query("   ")


def test_bad_json_raises():
    with pytest.raises(ValueError):
        parse_query("{bad json")


def test_free_text_drops_operator_keys():
    assert parse_query("beamline") == {}


def test_schema_key_numeric_value():
    spec = parse_query("Beamline:3a", {"beamline": "beamline"})
    assert spec == {"beamline": "3a"}


def test_schema_key_string_value_becomes_regex():
    spec = parse_query("sample:foo", {"sample": "sample_name"})
    assert spec == {"sample_name": {"$regex": "^foo$", "$options": "i"}}


def test_asterisk_with_schema_key():
    spec = parse_query("sample:fo*", {"sample": "sample_name"})
    assert spec["sample"] == {"$regex": "fo.*"}
    assert spec["sample_name"] == {"$regex": "^fo*$", "$options": "i"}


def test_object_id_conversion():
    hexid = "0123456789abcdef01234567"
    spec = parse_query('{"_id": "%s"}' % hexid)
    assert spec == {"_id": ObjectId(hexid)}


def test_invalid_object_id_dropped():
    assert parse_query('{"_id": "xyz", "a": 1}') == {"a": 1}