# foxlib

Shared building blocks for FOXDEN data services:

- **Query language**: turn user queries such as `beamline:3a cycle:2024`,
  free text, or MongoDB-style JSON specs into query dictionaries, and route
  query keys to the services that understand them.
- **Records and identifiers**: build dataset identifiers (DIDs) from
  metadata records, convert CamelCase keys to snake_case, cast and format
  values.
- **Service payloads**: request and response structures exchanged between
  services, with JSON output.
- **Publication records**: Zenodo-style metadata records with validation
  and parsers for the service's JSON answers.
- **Web server plumbing**: a Flask router with request counters, rate
  limiting and ETag handling, Jinja2 page templates, Markdown rendering and
  `/proc` based process metrics.

Python 3.10 or newer is required.

## Modules

| Module | Purpose |
| --- | --- |
| `foxlib.patterns` | Integer/float/URL/dataset/file/run patterns, `is_int`, `is_float` |
| `foxlib.lists` | List and set helpers: `in_list`, `list_to_set`, `ordered_set`, `unique_form_values`, … |
| `foxlib.cast` | Strict value casts (`cast_string`, `cast_int`, `cast_float`, raising `TypeError`) and `convert_float` |
| `foxlib.did` | `did_keys`, `create_did`, `camel_case_to_snake_case`, `convert_camel_case_keys`, `get_did` |
| `foxlib.helpers` | Hashing, paths, time and size formatting, SQL bind rewriting, ANSI colours |
| `foxlib.services` | `ServiceQuery`, `ServiceRequest`, `ServiceResponse`, `ServiceResults`, `MetaRecord` |
| `foxlib.qlkeys` | `QLRecord` and `load_ql_records` |
| `foxlib.query` | `parse_query` |
| `foxlib.srvmap` | `QLManager`: which query keys belong to which service |
| `foxlib.sqldb` | `parse_db_file` |
| `foxlib.webclient` | `fetch_response`, `http_get`, `http_post`, `http_post_form`, `read_token`, `http_client` |
| `foxlib.zenodo` | `MetaDataRecord`, `Creator`, `DoiRecord` and the `parse_*` functions |
| `foxlib.procfs` | `ProcFS` and `procfs_metrics` |
| `foxlib.templates` | `TmplRecord`, `Templates`, page helpers such as `tmpl_page`, `metrics_page` |
| `foxlib.mdhtml` | `md_to_html` |
| `foxlib.middleware` | `RequestCounters`, `RateLimiter`, `parse_rate`, `etag`, `install_middleware` |
| `foxlib.server` | `WebServer`, `Route`, `router`, `init_server`, `start_server`, `log_name` |

## Examples

### Dataset identifiers

```python
from foxlib.did import create_did, get_did, camel_case_to_snake_case

rec = {"foo": 1, "bla": "value", "arr": [1, 2, 3]}
create_did(rec, "bla,foo,arr", "/", "=")
# '/arr=1,2,3/bla=value/foo=1'

get_did({"Beamline": "ID3A", "BTR": 1, "Cycle": 2001, "SampleName": "test"})
# '/beamline=ID3A/btr=1/cycle=2001/sample=test'

camel_case_to_snake_case("CESRConditions")
# 'cesr_conditions'
```

### Parsing queries

```python
from foxlib.query import parse_query

parse_query("bla:1 foo:2")
# {'bla': '1', 'foo': '2'}

parse_query('{"did": "/beamline*"}')
# {'did': {'$regex': '/beamline.*'}}
```

Keys found (case-insensitively) in the optional `schema_keys` mapping are
renamed to their schema key; non-numeric values of such keys become
case-insensitive `^value$` regular expressions. A 24-digit hex `_id` becomes
a `bson.ObjectId`. An empty or malformed query raises `ValueError`.

### Routing query keys to services

```python
from foxlib.srvmap import QLManager

manager = QLManager()
manager.load("ql_keys.json")   # a JSON list of QL records
manager.services()             # sorted service names
manager.keys("service1")       # sorted keys of one service
manager.service_queries("foo:1 abc:2")
# {'service1': {'foo': '1'}, 'service2': {'abc': '2'}}
```

A key such as `foo.bar` is accepted by any service that knows `foo`.

### Query language keys

```python
from foxlib.qlkeys import QLRecord

record = QLRecord(key="beamline", service="service1", data_type="string")
record.details("key")     # 'beamline'
record.details("units")   # 'N/A' (empty fields are filled in)
```

### Service responses

```python
from foxlib.services import ServiceResponse

resp = ServiceResponse(service="meta", status="error", srv_code=103, error="bad query")
print(resp)               # human readable summary
resp.json_string()        # indented JSON
```

### Publication records

```python
from foxlib.zenodo import Creator, MetaDataRecord

meta = MetaDataRecord(publication_type="article", upload_type="publication",
                      description="data", title="Run 1",
                      creators=[Creator(name="First Last", affiliation="Lab")])
meta.validate()           # raises ValueError naming the first missing field
meta.to_dict()
```

### Web server

```python
from foxlib.server import WebServer, Route, router, start_server

def hello():
    return {"hello": "world"}

config = WebServer(port=8300)
routes = [Route(method="GET", path="/hello", handler=hello)]
app = router(routes, "static", config)
start_server(app, config)
```

The router adds `/apis`, `/qlkeys` (serving `<static>/ql_keys.json`) and
`/metrics` (GET/POST/PUT request totals and uptime in Prometheus text form),
serves each sub-directory of the static directory under `<base>/<name>/`,
counts requests per HTTP method, applies rate limiting (`"100-S"`, 100
requests per second, unless `limiter_period` says otherwise) and sets `ETag`
and `Cache-Control` headers when both `etag` and `cache_control` are set.
Routes marked `authorized=True` need an `authorizer(scope)` callable that
returns `None` to allow the request or a response to deny it.

### Templates and Markdown

```python
from foxlib.templates import make_tmpl, tmpl_page
from foxlib.mdhtml import md_to_html

page = tmpl_page(".", "faq.tmpl", make_tmpl("FAQ"))   # renders ./static/templates/faq.tmpl
html = md_to_html("static/markdown", "intro.md")
```

## What the package does not do

- It builds MongoDB-style query specifications but has no database client:
  nothing here inserts, fetches or removes records.
- It defines no numeric enumeration of service error codes; `srv_code` is a
  plain integer.
- It has no command-line program; the web server is started from your own
  code with `start_server`.

## Tests

The test suite uses pytest and is installed with the `test` extra.