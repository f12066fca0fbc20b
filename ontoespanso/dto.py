# dto.py
from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
import re
from urllib.parse import urlparse

import yaml

PACKAGE_NAME_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class PackageRecord(BaseModel):
    """One ontology snippet package as listed in the README."""
    name: str
    label: str
    version: str
    url: str

    source: Optional[str] = None
    format: str = "xml"
    prefixes: Dict[str, str] = Field(default_factory=dict)
    description: str = ""

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not PACKAGE_NAME_RE.match(v):
            raise ValueError(f"invalid package name: {v!r}")
        return v

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str) -> str:
        if not is_http_url(v):
            raise ValueError(f"not an http(s) URL: {v!r}")
        return v


class MatchItem(BaseModel):
    trigger: str
    replace: str


class MatchFile(BaseModel):
    matches: List[MatchItem] = Field(default_factory=list)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(), sort_keys=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, text: str) -> "MatchFile":
        return cls.model_validate(yaml.safe_load(text) or {})


class PackageManifest(BaseModel):
    """Contents of an espanso ``_manifest.yml``."""
    name: str
    title: str
    description: str
    version: str
    author: str
    homepage: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(exclude_none=True), sort_keys=False, allow_unicode=True)


def is_http_url(value: str) -> bool:
    """Absolute http(s) URL with a host and no whitespace."""
    if not value or any(c.isspace() for c in value):
        return False
    p = urlparse(value)
    return p.scheme in ("http", "https") and bool(p.netloc)
