# readme.py
"""
README generation and consistency checks.

The README is the only user-facing artifact of this repository: it lists the
packages and the command that installs each of them.  ``lint_readme`` checks
that what it says matches the catalog and (optionally) what is on disk and
on the network.
"""
from __future__ import annotations

import re
import shlex
from typing import Iterable, List, Optional

import requests
from pydantic import BaseModel, Field

from ontoespanso.catalog import REPO_PLACEHOLDER, REPO_URL, install_command
from ontoespanso.dto import PackageRecord, is_http_url
from ontoespanso.package_writer import discover_packages
from ontoespanso.verbosity import get_logger

_log = get_logger("ontoespanso.readme")

_BULLET_RE = re.compile(r"^\s*[-*]\s+`(?P<name>[^`]+)`(?P<rest>.*)$")
# ": <label> (<version>) <url>"
_ENTRY_RE = re.compile(r"^:?\s*(?P<label>.*?)\s*\((?P<version>[^()]+)\)\s*<(?P<url>[^>\s]+)>\s*$")
_LINK_RE = re.compile(r"<(?P<url>[^>\s]+)>")
_COMMAND_RE = re.compile(r"^(?:\$\s*)?(?P<cmd>espanso\s+install\b.*)$")


class ReadmeEntry(BaseModel):
    name: str
    label: Optional[str] = None
    version: Optional[str] = None
    url: Optional[str] = None


class InstallCommand(BaseModel):
    text: str
    package: Optional[str] = None
    repo: Optional[str] = None
    external: bool = False
    errors: List[str] = Field(default_factory=list)


class ParsedReadme(BaseModel):
    entries: List[ReadmeEntry] = Field(default_factory=list)
    urls: List[str] = Field(default_factory=list)
    commands: List[str] = Field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [e.name for e in self.entries]


class LintIssue(BaseModel):
    code: str
    message: str

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


def render_readme(records: Iterable[PackageRecord], repo_url: str = REPO_URL) -> str:
    records = list(records)
    lines = [
        "# ontoespanso",
        "",
        "[espanso](https://espanso.org) packages with snippets for ontology terms.",
        "Typing a trigger such as `:Core:hasParticipant` expands to the compact term name.",
        "",
        "## Packages",
        "",
    ]
    for r in records:
        lines.append(f"- `{r.name}`: {r.label} ({r.version}) <{r.url}>")
    lines += [
        "",
        "## Install",
        "",
    ]
    if not repo_url:
        lines += [f"Replace `{REPO_PLACEHOLDER}` with the git URL this repository is published at.", ""]
    lines.append("```sh")
    for r in records:
        lines.append(install_command(r.name, repo_url, records))
    lines += ["```", ""]
    return "\n".join(lines)


def parse_readme(text: str) -> ParsedReadme:
    parsed = ParsedReadme()
    for line in text.splitlines():
        b = _BULLET_RE.match(line)
        if b:
            entry = ReadmeEntry(name=b.group("name").strip())
            e = _ENTRY_RE.match(b.group("rest").strip())
            if e:
                entry.label = e.group("label")
                entry.version = e.group("version").strip()
                entry.url = e.group("url")
            parsed.entries.append(entry)
            parsed.urls.extend(m.group("url") for m in _LINK_RE.finditer(b.group("rest")))
            continue
        c = _COMMAND_RE.match(line.strip())
        if c:
            parsed.commands.append(" ".join(c.group("cmd").split()))
    return parsed


def parse_install_command(cmd: str) -> InstallCommand:
    """
    Split ``espanso install ...`` into its package argument and options.
    Options and the positional argument may come in any order.
    """
    out = InstallCommand(text=cmd)
    try:
        tokens = shlex.split(cmd)
    except ValueError as e:
        out.errors.append(str(e))
        return out

    args = tokens[2:]
    positionals = []
    i = 0
    while i < len(args):
        tok = args[i]
        if tok == "--git":
            if i + 1 >= len(args) or args[i + 1].startswith("--"):
                out.errors.append("--git needs a repository URL")
            else:
                out.repo = args[i + 1]
                i += 1
        elif tok.startswith("--git="):
            out.repo = tok.split("=", 1)[1]
        elif tok == "--external":
            out.external = True
        elif tok.startswith("-"):
            out.errors.append(f"unknown option {tok}")
        else:
            positionals.append(tok)
        i += 1

    if len(positionals) != 1:
        out.errors.append(f"expected one package name, got {len(positionals)}")
    else:
        out.package = positionals[0]
    if out.repo is None and "--git needs a repository URL" not in out.errors:
        out.errors.append("missing --git")
    if not out.external:
        out.errors.append("missing --external")
    return out


def url_reachable(url: str, timeout: float = 10.0) -> bool:
    try:
        r = requests.head(url, allow_redirects=True, timeout=timeout)
        if r.status_code == 405:
            with requests.get(url, stream=True, timeout=timeout) as g:
                return g.status_code < 400
        return r.status_code < 400
    except requests.RequestException as e:
        _log.info("HEAD %s failed: %s", url, e)
        return False


def lint_readme(
    text: str,
    records: Iterable[PackageRecord],
    packages_root: Optional[str] = None,
    check_urls: bool = False,
) -> List[LintIssue]:
    records = list(records)
    by_name = {r.name: r for r in records}
    parsed = parse_readme(text)
    issues: List[LintIssue] = []

    catalog_names = set(by_name)
    listed = set(parsed.names)
    if len(parsed.names) != len(listed):
        dupes = sorted({n for n in parsed.names if parsed.names.count(n) > 1})
        issues.append(LintIssue(code="names-mismatch", message=f"listed more than once: {', '.join(dupes)}"))
    if listed != catalog_names:
        missing = sorted(catalog_names - listed)
        extra = sorted(listed - catalog_names)
        parts = []
        if missing:
            parts.append(f"not listed: {', '.join(missing)}")
        if extra:
            parts.append(f"not in catalog: {', '.join(extra)}")
        issues.append(LintIssue(code="names-mismatch", message="; ".join(parts)))

    for entry in parsed.entries:
        record = by_name.get(entry.name)
        if record is None:
            continue
        if entry.version != record.version:
            issues.append(LintIssue(
                code="version-mismatch",
                message=f"{entry.name}: README says {entry.version or 'nothing'}, catalog has {record.version}",
            ))
        if entry.url != record.url:
            issues.append(LintIssue(
                code="url-mismatch",
                message=f"{entry.name}: README links {entry.url or 'nothing'}, catalog has {record.url}",
            ))

    if packages_root is not None:
        present = set(discover_packages(packages_root))
        for r in records:
            if (r.name, r.version) not in present:
                issues.append(LintIssue(
                    code="not-present",
                    message=f"{r.name} {r.version} has no package under {packages_root}",
                ))

    to_check = []
    for url in parsed.urls:
        if not is_http_url(url):
            issues.append(LintIssue(code="bad-url", message=f"malformed URL: {url}"))
        else:
            to_check.append(url)

    for cmd in parsed.commands:
        ic = parse_install_command(cmd)
        if ic.errors:
            issues.append(LintIssue(code="bad-command", message=f"{'; '.join(ic.errors)}: {cmd}"))
        if ic.package is not None and ic.package not in catalog_names:
            issues.append(LintIssue(code="bad-command", message=f"installs unknown package: {ic.package}"))
        if ic.repo is None or ic.repo == REPO_PLACEHOLDER:
            continue
        if not is_http_url(ic.repo):
            issues.append(LintIssue(code="bad-url", message=f"malformed repository URL: {ic.repo}"))
        else:
            to_check.append(ic.repo)

    if check_urls:
        for url in dict.fromkeys(to_check):
            if not url_reachable(url):
                issues.append(LintIssue(code="unreachable-url", message=f"not reachable: {url}"))

    _log.info("lint: %d issue(s)", len(issues))
    return issues
