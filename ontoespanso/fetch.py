from __future__ import annotations
import os
import requests
from pathlib import Path

from ontoespanso.dto import PackageRecord
from ontoespanso.errors import FetchError
from ontoespanso.verbosity import get_logger

_log = get_logger("ontoespanso.fetch")

HTTP_TIMEOUT = float(os.getenv("ONTOESPANSO_HTTP_TIMEOUT", "60"))

# rdflib parser name -> (Accept header, file extension)
_FORMATS = {
    "xml": ("application/rdf+xml", "owl"),
    "turtle": ("text/turtle", "ttl"),
    "nt": ("application/n-triples", "nt"),
    "json-ld": ("application/ld+json", "jsonld"),
}


def fetch_ontology(record: PackageRecord, dest_dir: str, timeout: float = HTTP_TIMEOUT) -> Path:
    if not record.source:
        raise FetchError(f"package {record.name} has no source URL")

    accept, ext = _FORMATS.get(record.format, ("*/*", "rdf"))
    _log.info("Downloading %s from %s", record.name, record.source)
    try:
        r = requests.get(record.source, headers={"Accept": accept}, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"download of {record.source} failed: {e}") from e

    out = Path(dest_dir) / f"{record.name}-{record.version}.{ext}"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(r.content)
    _log.debug("Saved %d bytes to %s", len(r.content), out)
    return out
