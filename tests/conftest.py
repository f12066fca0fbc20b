import pytest

from ontoespanso.dto import PackageRecord

CORE = "https://spec.industrialontologies.org/ontology/core/Core/"

SAMPLE_RDFXML = f"""<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"
         xmlns:owl="http://www.w3.org/2002/07/owl#">
  <owl:Ontology rdf:about="{CORE}">
    <owl:imports rdf:resource="http://purl.obolibrary.org/obo/bfo/2020/bfo.owl"/>
  </owl:Ontology>
  <owl:ObjectProperty rdf:about="{CORE}hasParticipant">
    <rdfs:label>has participant</rdfs:label>
  </owl:ObjectProperty>
  <owl:ObjectProperty rdf:about="{CORE}isPrescribedBy"/>
  <owl:ObjectProperty rdf:about="http://example.org/other#unrelated"/>
  <owl:Class rdf:about="{CORE}Agent">
    <rdfs:label>agent</rdfs:label>
  </owl:Class>
  <owl:DatatypeProperty rdf:about="{CORE}hasValue"/>
</rdf:RDF>
"""


@pytest.fixture
def sample_ontology(tmp_path):
    p = tmp_path / "core.rdf"
    p.write_text(SAMPLE_RDFXML, encoding="utf-8")
    return p


@pytest.fixture
def record():
    return PackageRecord(
        name="iof-core",
        label="IOF Core",
        version="202401",
        url=CORE,
        source=CORE,
        prefixes={"Core": CORE, "owl": "http://www.w3.org/2002/07/owl#"},
    )
