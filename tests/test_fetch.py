import pytest
import requests

from ontoespanso import fetch as fetch_mod
from ontoespanso.errors import FetchError
from ontoespanso.fetch import fetch_ontology


class _Resp:
    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code}")


def test_fetch_writes_file(tmp_path, monkeypatch, record):
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen["url"] = url
        seen["accept"] = headers["Accept"]
        return _Resp(b"<rdf/>")

    monkeypatch.setattr(fetch_mod.requests, "get", fake_get)
    out = fetch_ontology(record, str(tmp_path))
    assert out == tmp_path / "iof-core-202401.owl"
    assert out.read_bytes() == b"<rdf/>"
    assert seen == {"url": record.source, "accept": "application/rdf+xml"}


def test_fetch_http_error(tmp_path, monkeypatch, record):
    monkeypatch.setattr(fetch_mod.requests, "get", lambda *a, **kw: _Resp(status_code=404))
    with pytest.raises(FetchError):
        fetch_ontology(record, str(tmp_path))


def test_fetch_without_source(tmp_path, record):
    with pytest.raises(FetchError):
        fetch_ontology(record.model_copy(update={"source": None}), str(tmp_path))
