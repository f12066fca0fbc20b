import pytest

from ontoespanso.errors import OntologyLoadError
from ontoespanso.ontology_extractor import (
    extract_terms,
    list_imports,
    load_ontology,
    ontology_to_matches,
    qualify,
    slugify,
    terms_to_matches,
)

from conftest import CORE


def test_load_and_imports(sample_ontology):
    g = load_ontology(str(sample_ontology))
    assert len(g) > 0
    assert list_imports(g) == ["http://purl.obolibrary.org/obo/bfo/2020/bfo.owl"]


def test_load_rejects_garbage(tmp_path):
    p = tmp_path / "bad.rdf"
    p.write_text("this is not rdf", encoding="utf-8")
    with pytest.raises(OntologyLoadError):
        load_ontology(str(p))


def test_qualify_prefers_longest_namespace():
    prefixes = {"ex": "http://example.org/", "sub": "http://example.org/sub/"}
    assert qualify("http://example.org/sub/thing", prefixes) == "sub:thing"
    assert qualify("http://example.org/thing", prefixes) == "ex:thing"
    assert qualify("http://other.org/thing", prefixes) is None
    assert qualify("http://example.org/", prefixes) is None


def test_extract_terms_object_properties_only_by_default(sample_ontology):
    g = load_ontology(str(sample_ontology))
    terms = {str(t) for t in extract_terms(g)}
    assert f"{CORE}hasParticipant" in terms
    assert f"{CORE}isPrescribedBy" in terms
    assert f"{CORE}Agent" not in terms


def test_extract_terms_unknown_kind(sample_ontology):
    g = load_ontology(str(sample_ontology))
    with pytest.raises(ValueError):
        extract_terms(g, ["individual"])


def test_matches_skip_unprefixed_terms(sample_ontology, record):
    g = load_ontology(str(sample_ontology))
    matches = ontology_to_matches(g, record.prefixes)
    assert [(m.trigger, m.replace) for m in matches] == [
        (":Core:hasParticipant", "Core:hasParticipant"),
        (":Core:isPrescribedBy", "Core:isPrescribedBy"),
    ]


def test_matches_with_classes_and_labels(sample_ontology, record):
    g = load_ontology(str(sample_ontology))
    matches = ontology_to_matches(g, record.prefixes, kinds=["object_property", "class"], labels=True)
    by_trigger = {m.trigger: m.replace for m in matches}
    assert by_trigger[":Core:Agent"] == "Core:Agent"
    assert by_trigger[":has-participant"] == "Core:hasParticipant"
    assert by_trigger[":agent"] == "Core:Agent"
    assert list(by_trigger) == sorted(by_trigger)


def test_slugify():
    assert slugify("  Has Participant At ") == "has-participant-at"
    assert slugify("***") == ""


def test_label_triggers_need_graph(sample_ontology, record):
    g = load_ontology(str(sample_ontology))
    with pytest.raises(ValueError):
        terms_to_matches(extract_terms(g), record.prefixes, labels=True)
