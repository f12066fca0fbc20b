# ontology_extractor.py
"""
Turn OWL terms of an ontology into espanso matches.

Each named term typed with one of the requested OWL kinds becomes a match
whose trigger is ``:<prefix>:<local>`` and whose replacement is the compact
name ``<prefix>:<local>``.  Optionally, ``rdfs:label`` values produce a second,
human-friendly trigger expanding to the same compact name.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence

from rdflib import Graph, URIRef
from rdflib.namespace import OWL, RDF, RDFS

from ontoespanso.dto import MatchItem
from ontoespanso.errors import OntologyLoadError
from ontoespanso.verbosity import get_logger

_log = get_logger("ontoespanso.ontology_extractor")

KINDS: Dict[str, URIRef] = {
    "object_property": OWL.ObjectProperty,
    "datatype_property": OWL.DatatypeProperty,
    "annotation_property": OWL.AnnotationProperty,
    "class": OWL.Class,
}
DEFAULT_KINDS = ("object_property",)


def load_ontology(source: str, format: str = "xml") -> Graph:
    """Parse a local path or URL into a graph (RDF/XML unless told otherwise)."""
    g = Graph()
    try:
        g.parse(source, format=format)
    except Exception as e:
        raise OntologyLoadError(f"could not parse {source} as {format}: {e}") from e
    _log.info("Loaded %s: %d triples", source, len(g))
    return g


def list_imports(g: Graph) -> List[str]:
    return sorted({str(o) for o in g.objects(None, OWL.imports)})


def qualify(iri: str, prefixes: Dict[str, str]) -> Optional[str]:
    """Compact ``iri`` with the longest matching namespace, or None."""
    best = None
    for prefix, ns in prefixes.items():
        if iri.startswith(ns) and len(iri) > len(ns):
            if best is None or len(ns) > len(best[1]):
                best = (prefix, ns)
    if best is None:
        return None
    prefix, ns = best
    return f"{prefix}:{iri[len(ns):]}"


def extract_terms(g: Graph, kinds: Sequence[str] = DEFAULT_KINDS) -> List[URIRef]:
    terms = set()
    for kind in kinds:
        if kind not in KINDS:
            raise ValueError(f"unknown term kind: {kind} (expected one of {', '.join(KINDS)})")
        for s in g.subjects(RDF.type, KINDS[kind]):
            # blank nodes are restrictions / anonymous classes
            if isinstance(s, URIRef):
                terms.add(s)
    _log.debug("extract_terms kinds=%s -> %d terms", list(kinds), len(terms))
    return sorted(terms)


def slugify(label: str) -> str:
    s = re.sub(r"[^0-9a-zA-Z]+", "-", label.strip().lower())
    return s.strip("-")


def terms_to_matches(
    terms: Iterable[URIRef],
    prefixes: Dict[str, str],
    g: Optional[Graph] = None,
    labels: bool = False,
) -> List[MatchItem]:
    if labels and g is None:
        raise ValueError("label triggers need the graph the terms came from")
    by_trigger: Dict[str, MatchItem] = {}
    skipped = 0

    for t in terms:
        qname = qualify(str(t), prefixes)
        if qname is None:
            skipped += 1
            _log.debug("No prefix for %s", t)
            continue

        trigger = f":{qname}"
        by_trigger.setdefault(trigger, MatchItem(trigger=trigger, replace=qname))

        if labels:
            for lbl in g.objects(t, RDFS.label):
                slug = slugify(str(lbl))
                if not slug:
                    continue
                ltrig = f":{slug}"
                if ltrig in by_trigger and by_trigger[ltrig].replace != qname:
                    _log.warning("Label trigger %s already used by %s; skipping %s",
                                 ltrig, by_trigger[ltrig].replace, qname)
                    continue
                by_trigger[ltrig] = MatchItem(trigger=ltrig, replace=qname)

    if skipped:
        _log.warning("Skipped %d term(s) outside the configured prefixes", skipped)

    return [by_trigger[k] for k in sorted(by_trigger)]


def ontology_to_matches(
    g: Graph,
    prefixes: Dict[str, str],
    kinds: Sequence[str] = DEFAULT_KINDS,
    labels: bool = False,
) -> List[MatchItem]:
    terms = extract_terms(g, kinds)
    return terms_to_matches(terms, prefixes, g=g, labels=labels)
