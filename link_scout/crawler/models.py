# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler: fetched pages, forms and the
discovery events a page produces.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union


@dataclass(slots=True)
class PageData:
    """Final URL and decoded HTML of a fetched page."""

    url: str
    content: str


@dataclass(frozen=True, slots=True)
class FormInput:
    type: str
    name: str
    value: str = ""


@dataclass(frozen=True, slots=True)
class FormRecord:
    """A ``<form>`` with its action resolved and its inputs in document order."""

    url: str
    method: str
    inputs: Tuple[FormInput, ...] = field(default_factory=tuple)

    @property
    def signature(self) -> str:
        return f"{self.method}{self.url}"

    def format(self) -> str:
        """Render as ``<method> <url> Inputs: <type> <name> ...``."""
        line = f"{self.method} {self.url} Inputs:"
        for item in self.inputs:
            line = f"{line} {item.type} {item.name}"
        return line


@dataclass(frozen=True, slots=True)
class LinkFound:
    url: str
    source: str = "href"


@dataclass(frozen=True, slots=True)
class ScriptFound:
    url: str
    source: str = "script"


@dataclass(frozen=True, slots=True)
class FormActionFound:
    url: str
    source: str = "form"


@dataclass(frozen=True, slots=True)
class FormParsed:
    form: FormRecord


DiscoveryEvent = Union[LinkFound, ScriptFound, FormActionFound, FormParsed]

__all__ = (
    "DiscoveryEvent",
    "FormActionFound",
    "FormInput",
    "FormParsed",
    "FormRecord",
    "LinkFound",
    "PageData",
    "ScriptFound",
)
