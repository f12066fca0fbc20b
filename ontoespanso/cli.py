from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

import os
import tempfile
from pathlib import Path
from typing import List, Optional

import typer

from ontoespanso.catalog import CATALOG, REPO_URL, get_package, install_command
from ontoespanso.errors import OntoEspansoError
from ontoespanso.fetch import fetch_ontology
from ontoespanso.ontology_extractor import DEFAULT_KINDS, KINDS, list_imports, load_ontology, ontology_to_matches
from ontoespanso.package_writer import write_package
from ontoespanso.readme import lint_readme, render_readme
from ontoespanso.verbosity import setup_logging, get_logger

VERBOSITY = int(os.getenv("ONTOESPANSO_VERBOSITY", "0"))

app = typer.Typer(add_completion=False, help="ontoespanso CLI: build and check espanso packages of ontology snippets.")
_log = get_logger("ontoespanso.cli")


@app.callback()
def _main(
    verbose: int = typer.Option(VERBOSITY, "--verbose", "-v", count=True, help="Repeat for more log output"),
):
    setup_logging(verbose)


def _package_or_fail(name: str):
    try:
        return get_package(name)
    except OntoEspansoError as e:
        raise typer.BadParameter(str(e), param_hint="package")


def _check_kinds(kinds: List[str]) -> List[str]:
    bad = [k for k in kinds if k not in KINDS]
    if bad:
        raise typer.BadParameter(f"unknown kind(s): {', '.join(bad)}; expected {', '.join(KINDS)}", param_hint="--kinds")
    return kinds


# -------------------------
# Commands
# -------------------------

@app.command("list")
def cmd_list():
    """
    List the packages this repository publishes.
    """
    for r in CATALOG:
        typer.echo(f"{r.name}\t{r.version}\t{r.label}\t{r.url}")


@app.command("install-command")
def cmd_install_command(
    name: str = typer.Argument(..., help="Package name (e.g. iof-core, bfo)"),
    repo: str = typer.Option(REPO_URL, help="Git URL of this repository"),
):
    """
    Print the espanso command that installs a package from this repository.
    """
    _package_or_fail(name)
    typer.echo(install_command(name, repo))


@app.command("imports")
def cmd_imports(
    file: str = typer.Argument(..., help="Ontology file or URL"),
    format: str = typer.Option("xml", help="rdflib parser name (xml, turtle, nt, json-ld)"),
):
    """
    Show the owl:imports of an ontology.
    """
    try:
        g = load_ontology(file, format=format)
    except OntoEspansoError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)
    for iri in list_imports(g):
        typer.echo(iri)


@app.command("generate")
def cmd_generate(
    file: str = typer.Argument(..., help="Ontology file or URL"),
    package: str = typer.Option(..., help="Catalog package the snippets belong to"),
    out: str = typer.Option("./packages", help="Root folder of the espanso package tree"),
    kinds: List[str] = typer.Option(list(DEFAULT_KINDS), help="OWL term kinds to include (repeatable)"),
    labels: bool = typer.Option(False, help="Also add triggers built from rdfs:label"),
    format: Optional[str] = typer.Option(None, help="rdflib parser name (defaults to the package's format)"),
):
    """
    Build an espanso package from a local ontology file.
    """
    record = _package_or_fail(package)
    kinds = _check_kinds(kinds)
    try:
        g = load_ontology(file, format=format or record.format)
    except OntoEspansoError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)

    matches = ontology_to_matches(g, record.prefixes, kinds=kinds, labels=labels)
    pkg_dir = write_package(record, matches, out)
    typer.echo(f"OK generate: package={record.name} matches={len(matches)} out={pkg_dir}")


@app.command("build")
def cmd_build(
    name: str = typer.Argument(..., help="Package name"),
    out: str = typer.Option("./packages", help="Root folder of the espanso package tree"),
    kinds: List[str] = typer.Option(list(DEFAULT_KINDS), help="OWL term kinds to include (repeatable)"),
    labels: bool = typer.Option(False, help="Also add triggers built from rdfs:label"),
    keep_download: Optional[str] = typer.Option(None, help="Keep the downloaded ontology in this folder"),
):
    """
    Download a catalog ontology and build its espanso package.
    """
    record = _package_or_fail(name)
    kinds = _check_kinds(kinds)

    with tempfile.TemporaryDirectory() as tmp:
        try:
            path = fetch_ontology(record, keep_download or tmp)
            _log.info("Parsing downloaded ontology %s", path)
            g = load_ontology(str(path), format=record.format)
        except OntoEspansoError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(code=1)

    matches = ontology_to_matches(g, record.prefixes, kinds=kinds, labels=labels)
    pkg_dir = write_package(record, matches, out)
    typer.echo(f"OK build: package={record.name} matches={len(matches)} out={pkg_dir}")


@app.command("readme")
def cmd_readme(
    out: str = typer.Option("README.md", help="Output path"),
    repo: str = typer.Option(REPO_URL, help="Git URL used in install commands"),
):
    """
    Regenerate the README from the package catalog.
    """
    Path(out).parent.mkdir(parents=True, exist_ok=True)
    Path(out).write_text(render_readme(CATALOG, repo), encoding="utf-8")
    typer.echo(f"OK readme: out={out}")


@app.command("lint")
def cmd_lint(
    readme: str = typer.Option("README.md", help="README to check"),
    packages: Optional[str] = typer.Option(None, help="Package tree that must contain every listed package"),
    check_urls: bool = typer.Option(False, help="Also check that every URL answers"),
):
    """
    Check the README against the catalog (names, URLs, install syntax).
    """
    text = Path(readme).read_text(encoding="utf-8")
    issues = lint_readme(text, CATALOG, packages_root=packages, check_urls=check_urls)
    for issue in issues:
        typer.echo(str(issue))
    if issues:
        raise typer.Exit(code=1)
    typer.echo(f"OK lint: readme={readme}")


def main():
    app()


if __name__ == "__main__":
    main()
