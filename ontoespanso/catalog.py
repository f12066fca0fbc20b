# catalog.py
"""
The ontology snippet packages this repository publishes.

Each record is what the README lists for a package: its name (the
identifier passed to ``espanso install``), the ontology it was built from,
the ontology release, and the reference URL of the specification.
"""
from __future__ import annotations

import os
from typing import Iterable, List, Optional

from ontoespanso.dto import PackageRecord
from ontoespanso.errors import DuplicatePackageError, UnknownPackageError

# git URL the repository is published at; unset renders the placeholder
REPO_URL = os.getenv("ONTOESPANSO_REPO_URL", "")
REPO_PLACEHOLDER = "<repository-url>"

OWL_NS = "http://www.w3.org/2002/07/owl#"
OBO_NS = "http://purl.obolibrary.org/obo/"
IOF_CORE_NS = "https://spec.industrialontologies.org/ontology/core/Core/"

CATALOG: List[PackageRecord] = [
    PackageRecord(
        name="iof-core",
        label="Industrial Ontologies Foundry Core Ontology",
        version="202401",
        url="https://spec.industrialontologies.org/ontology/core/Core/",
        source="https://spec.industrialontologies.org/ontology/core/Core/",
        format="xml",
        prefixes={"Core": IOF_CORE_NS, "owl": OWL_NS},
        description="Snippets for the object properties of the IOF Core ontology.",
    ),
    PackageRecord(
        name="bfo",
        label="Basic Formal Ontology",
        version="2020",
        url="https://basic-formal-ontology.org/",
        source="http://purl.obolibrary.org/obo/bfo/2020/bfo.owl",
        format="xml",
        prefixes={"obo": OBO_NS, "owl": OWL_NS},
        description="Snippets for the object properties of BFO 2020.",
    ),
]


def validate_catalog(records: Iterable[PackageRecord]) -> List[PackageRecord]:
    """Return the records as a list, rejecting duplicate package names."""
    seen = set()
    out = []
    for r in records:
        if r.name in seen:
            raise DuplicatePackageError(f"duplicate package name: {r.name}")
        seen.add(r.name)
        out.append(r)
    return out


def package_names(records: Optional[Iterable[PackageRecord]] = None) -> List[str]:
    return [r.name for r in (CATALOG if records is None else records)]


def get_package(name: str, records: Optional[Iterable[PackageRecord]] = None) -> PackageRecord:
    records = list(CATALOG if records is None else records)
    for r in records:
        if r.name == name:
            return r
    raise UnknownPackageError(name, known=[r.name for r in records])


def install_command(name: str, repo_url: str = REPO_URL, records: Optional[Iterable[PackageRecord]] = None) -> str:
    """The espanso invocation that installs ``name`` from this git repository."""
    pkg = get_package(name, records)
    return f"espanso install {pkg.name} --git {repo_url or REPO_PLACEHOLDER} --external"


validate_catalog(CATALOG)
