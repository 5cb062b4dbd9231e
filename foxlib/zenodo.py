"""Records exchanged with the publication (DOI) service."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping


@dataclass
class FoxdenRecord:
    """A record uploaded to the publication service."""

    did: str = ""
    meta_data: Any = None


@dataclass
class Creator:
    """An author or contributor with an affiliation."""

    name: str = ""
    affiliation: str = ""


@dataclass
class MetaDataRecord:
    """Descriptive meta-data of a publication."""

    publication_type: str = ""
    upload_type: str = ""
    description: str = ""
    keywords: list[str] = field(default_factory=list)
    title: str = ""
    licences: list[str] = field(default_factory=list)
    version: str = ""
    publisher: str = ""
    contributors: list[Creator] = field(default_factory=list)
    creators: list[Creator] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError naming the first missing mandatory field."""
        if not self.publication_type:
            raise ValueError("missing publication type, e.g. article")
        if not self.upload_type:
            raise ValueError("missing upload type, e.g. publication")
        if not self.description:
            raise ValueError("missing description")
        if not self.title:
            raise ValueError("missing title")
        if not self.creators:
            raise ValueError(
                'missing creators, e.g. [{"name":"First Last", "affiliation": "Zenodo"}]'
            )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping, leaving out empty optional fields."""
        out: dict[str, Any] = {
            "publication_type": self.publication_type,
            "upload_type": self.upload_type,
            "description": self.description,
            "keywords": list(self.keywords),
            "title": self.title,
        }
        if self.licences:
            out["licenses"] = list(self.licences)
        if self.version:
            out["version"] = self.version
        if self.publisher:
            out["publisher"] = self.publisher
        if self.contributors:
            out["contributors"] = [asdict(c) for c in self.contributors]
        out["creators"] = [asdict(c) for c in self.creators]
        return out


@dataclass
class MetaRecord:
    """The envelope used to publish a meta-data record."""

    metadata: MetaDataRecord = field(default_factory=MetaDataRecord)
    files: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping; files are left out when unset."""
        out: dict[str, Any] = {"metadata": self.metadata.to_dict()}
        if self.files is not None:
            out["files"] = self.files
        return out


@dataclass
class FieldError:
    """An error reported for one field."""

    field: str = ""
    messages: list[str] = field(default_factory=list)


@dataclass
class Response:
    """A status response with its field errors."""

    status: int = 0
    message: str = ""
    errors: list[FieldError] = field(default_factory=list)


@dataclass
class PrereserveDoi:
    """A DOI reserved before publication."""

    doi: str = ""
    recid: int = 0


@dataclass
class MetaData:
    """Access and reserved-DOI details of a deposition."""

    access_right: str = ""
    prereserve_doi: PrereserveDoi = field(default_factory=PrereserveDoi)


@dataclass
class Links:
    """Links of a deposition."""

    bucket: str = ""
    discard: str = ""
    edit: str = ""
    files: str = ""
    html: str = ""
    latest_draft: str = ""
    latest_draft_html: str = ""
    new_version: str = ""
    publish: str = ""
    register_concept_doi: str = ""
    self_link: str = ""


@dataclass
class CreateResponse:
    """The answer to a create request."""

    id: int = 0
    metadata: MetaData = field(default_factory=MetaData)
    created: str = ""
    modified: str = ""
    owner: int = 0
    record_id: int = 0
    state: str = ""
    submitted: bool = False
    title: str = ""
    links: Links = field(default_factory=Links)


@dataclass
class AddResponse:
    """The answer to an add (file upload) request."""

    created: str = ""
    modified: str = ""
    size: int = 0
    key: str = ""
    mime_type: str = ""
    checksum: str = ""
    owner: int = 0
    record_id: int = 0
    links: Links = field(default_factory=Links)


@dataclass
class File:
    """A file attached to a record."""

    name: str = ""
    file: str = ""


@dataclass
class DoiRecord:
    """A published record with its DOI."""

    id: int = 0
    doi: str = ""
    doi_url: str = ""
    files: list[File] = field(default_factory=list)
    links: Links = field(default_factory=Links)


def _load(data: Any) -> Mapping[str, Any]:
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {data!r}")
    return data


def _string(m: Mapping[str, Any], name: str) -> str:
    value = m.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string, got {value!r}")
    return value


def _integer(m: Mapping[str, Any], name: str) -> int:
    value = m.get(name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {name!r} must be an integer, got {value!r}")
    return value


def _boolean(m: Mapping[str, Any], name: str) -> bool:
    value = m.get(name)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {name!r} must be a boolean, got {value!r}")
    return value


def parse_links(data: Any) -> Links:
    """Build Links from a mapping or JSON text."""
    m = _load(data)
    return Links(
        bucket=_string(m, "bucket"),
        discard=_string(m, "discard"),
        edit=_string(m, "edit"),
        files=_string(m, "files"),
        html=_string(m, "html"),
        latest_draft=_string(m, "latest_draft"),
        latest_draft_html=_string(m, "latest_draft_html"),
        new_version=_string(m, "newversion"),
        publish=_string(m, "publish"),
        register_concept_doi=_string(m, "registerconceptdoi"),
        self_link=_string(m, "self"),
    )


def parse_create_response(data: Any) -> CreateResponse:
    """Build a CreateResponse from a mapping or JSON text."""
    m = _load(data)
    meta = _load(m.get("metadata"))
    reserved = _load(meta.get("prereserve_doi"))
    return CreateResponse(
        id=_integer(m, "id"),
        metadata=MetaData(
            access_right=_string(meta, "access_right"),
            prereserve_doi=PrereserveDoi(
                doi=_string(reserved, "doi"), recid=_integer(reserved, "recid")
            ),
        ),
        created=_string(m, "created"),
        modified=_string(m, "modified"),
        owner=_integer(m, "owner"),
        record_id=_integer(m, "record_id"),
        state=_string(m, "state"),
        submitted=_boolean(m, "submitted"),
        title=_string(m, "title"),
        links=parse_links(m.get("links")),
    )


def parse_add_response(data: Any) -> AddResponse:
    """Build an AddResponse from a mapping or JSON text."""
    m = _load(data)
    return AddResponse(
        created=_string(m, "created"),
        modified=_string(m, "modified"),
        size=_integer(m, "size"),
        key=_string(m, "key"),
        mime_type=_string(m, "mimetype"),
        checksum=_string(m, "checksum"),
        owner=_integer(m, "owner"),
        record_id=_integer(m, "record_id"),
        links=parse_links(m.get("links")),
    )


def parse_doi_record(data: Any) -> DoiRecord:
    """Build a DoiRecord from a mapping or JSON text."""
    m = _load(data)
    files = m.get("files") or []
    if not isinstance(files, list):
        raise ValueError(f"field 'files' must be a list, got {files!r}")
    return DoiRecord(
        id=_integer(m, "id"),
        doi=_string(m, "doi"),
        doi_url=_string(m, "doi_url"),
        files=[
            File(name=_string(_load(f), "name"), file=_string(_load(f), "file"))
            for f in files
        ],
        links=parse_links(m.get("links")),
    )