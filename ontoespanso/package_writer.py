# package_writer.py
from __future__ import annotations
import os
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from ontoespanso.dto import MatchFile, MatchItem, PackageManifest, PackageRecord
from ontoespanso.verbosity import get_logger

_log = get_logger("ontoespanso.package_writer")

AUTHOR = os.getenv("ONTOESPANSO_AUTHOR", "ontoespanso")

MANIFEST_FILE = "_manifest.yml"
PACKAGE_FILE = "package.yml"
README_FILE = "README.md"


def build_manifest(record: PackageRecord, author: str = AUTHOR) -> PackageManifest:
    return PackageManifest(
        name=record.name,
        title=record.label,
        description=record.description or f"Snippets for {record.label}",
        version=record.version,
        author=author,
        homepage=record.url,
        tags=["ontology", record.name],
    )


def _package_readme(record: PackageRecord, matches: List[MatchItem]) -> str:
    lines = [
        f"# {record.label} ({record.version})",
        "",
        record.description or f"Snippets for {record.label}.",
        "",
        f"Specification: {record.url}",
        "",
        f"{len(matches)} trigger(s), e.g.:",
        "",
    ]
    for m in matches[:5]:
        lines.append(f"- `{m.trigger}` → `{m.replace}`")
    return "\n".join(lines) + "\n"


def write_package(
    record: PackageRecord,
    matches: List[MatchItem],
    out_dir: str,
    author: str = AUTHOR,
) -> Path:
    """
    Write an espanso external package:
      <out_dir>/<name>/<version>/_manifest.yml
      <out_dir>/<name>/<version>/package.yml
      <out_dir>/<name>/<version>/README.md
    """
    pkg_dir = Path(out_dir) / record.name / record.version
    pkg_dir.mkdir(parents=True, exist_ok=True)

    (pkg_dir / MANIFEST_FILE).write_text(build_manifest(record, author).to_yaml(), encoding="utf-8")
    (pkg_dir / PACKAGE_FILE).write_text(MatchFile(matches=matches).to_yaml(), encoding="utf-8")
    (pkg_dir / README_FILE).write_text(_package_readme(record, matches), encoding="utf-8")

    _log.info("Wrote package %s %s (%d matches) -> %s", record.name, record.version, len(matches), pkg_dir)
    return pkg_dir


def read_manifest(path: Path) -> Optional[PackageManifest]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return PackageManifest.model_validate(data)
    except (yaml.YAMLError, ValueError) as e:
        _log.warning("Ignoring unreadable manifest %s: %s", path, e)
        return None


def discover_packages(root: str) -> List[Tuple[str, str]]:
    """(name, version) of every package under ``root`` with a valid manifest."""
    base = Path(root)
    if not base.is_dir():
        return []
    found = []
    for manifest_path in sorted(base.glob(f"*/*/{MANIFEST_FILE}")):
        m = read_manifest(manifest_path)
        if m is None:
            continue
        if not (manifest_path.parent / PACKAGE_FILE).is_file():
            _log.warning("Manifest without %s: %s", PACKAGE_FILE, manifest_path)
            continue
        found.append((m.name, m.version))
    return found
