import json

import pytest

from foxlib.qlkeys import QLRecord
from foxlib.srvmap import QLManager


@pytest.fixture
def manager(tmp_path):
    records = [
        QLRecord(service="service1", key="foo", data_type="string"),
        QLRecord(service="service2", key="abc", data_type="string"),
    ]
    path = tmp_path / "srvmap.json"
    path.write_text(json.dumps([r.to_dict() for r in records]))
    mgr = QLManager()
    mgr.load(path)
    return mgr


def test_keys(manager):
    assert manager.keys("service1") == ["foo"]
    assert manager.keys("service2") == ["abc"]
    assert manager.keys("unknown") == []


def test_services(manager):
    assert manager.services() == ["service1", "service2"]


def test_records_loaded(manager):
    assert [r.key for r in manager.records] == ["foo", "abc"]


def test_service_queries(manager):
    sq = manager.service_queries("foo:1 abc:[1,2,3]")
    assert sq == {"service1": {"foo": "1"}, "service2": {"abc": "[1,2,3]"}}


def test_service_queries_empty_raises(manager):
    with pytest.raises(ValueError):
        manager.service_queries("")


def test_query_key_allowed(manager):
    assert manager.query_key_allowed("foo", "service1") is True
    assert manager.query_key_allowed("foo.bar", "service1") is True
    assert manager.query_key_allowed("foobar", "service1") is False
    assert manager.query_key_allowed("foo", "service2") is False
    assert manager.query_key_allowed("foo", "missing") is False


def test_keys_sorted(tmp_path):
    path = tmp_path / "m.json"
    path.write_text(json.dumps([
        {"key": "zeta", "service": "s", "type": "string"},
        {"key": "alpha", "service": "s", "type": "string"},
    ]))
    mgr = QLManager()
    mgr.load(path)
    assert mgr.keys("s") == ["alpha", "zeta"]