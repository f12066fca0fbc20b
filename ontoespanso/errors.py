# errors.py
from __future__ import annotations


class OntoEspansoError(Exception):
    """Base class for every error raised by ontoespanso."""


class UnknownPackageError(OntoEspansoError, KeyError):
    def __init__(self, name: str, known=()):
        self.name = name
        self.known = list(known)
        super().__init__(name)

    def __str__(self) -> str:
        known = ", ".join(self.known) or "none"
        return f"unknown package '{self.name}' (known: {known})"


class DuplicatePackageError(OntoEspansoError, ValueError):
    pass


class OntologyLoadError(OntoEspansoError):
    pass


class FetchError(OntoEspansoError):
    pass
