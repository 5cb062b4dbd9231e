import json

from foxlib.services import (
    MetaRecord,
    ServiceQuery,
    ServiceRequest,
    ServiceResponse,
    ServiceResults,
)


def _response():
    query = ServiceQuery(
        query="beamline:3a",
        spec={"b": 2, "a": 1},
        idx=1,
        limit=10,
        sort_keys=["date"],
        sort_order=-1,
    )
    results = ServiceResults(nrecords=1, records=[{"did": "/a/b"}])
    return ServiceResponse(
        http_code=200,
        srv_code=0,
        service="meta",
        status="ok",
        error="",
        service_query=query,
        results=results,
        timestamp="2024-01-02",
    )


def test_meta_record_json_keys():
    rec = MetaRecord(schema="test", record={"z": 1, "a": "x"})
    parsed = json.loads(rec.json_string())
    assert parsed == {"Schema": "test", "Record": {"a": "x", "z": 1}}
    assert list(parsed["Record"]) == ["a", "z"]


def test_meta_record_escapes_html():
    rec = MetaRecord(schema="<b>", record={})
    text = rec.json_string()
    assert "\\u003cb\\u003e" in text
    assert json.loads(text)["Schema"] == "<b>"


def test_service_query_defaults_are_null():
    data = ServiceQuery().to_dict()
    assert data["spec"] is None
    assert data["sort_keys"] is None
    assert data["limit"] == 0


def test_service_results_to_dict():
    results = ServiceResults(nrecords=2, records=[{"a": 1}, {"b": 2}])
    assert results.to_dict() == {"nrecords": 2, "records": [{"a": 1}, {"b": 2}]}


def test_service_request_str_round_trip():
    request = ServiceRequest(client="cli", service_query=ServiceQuery(query="q"))
    parsed = json.loads(str(request))
    assert parsed == request.to_dict()
    assert parsed["service_query"]["query"] == "q"


def test_service_response_json_round_trip():
    resp = _response()
    parsed = json.loads(resp.json_string())
    assert parsed == resp.to_dict()
    assert parsed["service_code"] == 0
    assert parsed["service_query"]["sort_keys"] == ["date"]


def test_service_response_json_bytes():
    resp = _response()
    assert resp.json_bytes() == resp.json_string().encode("utf-8")


def test_service_response_str():
    text = str(_response())
    lines = text.splitlines()
    assert lines[0] == "Service     : meta"
    assert lines[1] == "Code        : 0"
    assert lines[2] == "Status      : ok"
    assert lines[4] == "Timestamp   : 2024-01-02"
    assert text.endswith("\n")