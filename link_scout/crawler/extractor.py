# link_scout/crawler/extractor.py
"""
Discovery of links, scripts and forms in a fetched page.

Every reference is resolved against the page (or its ``<base href>``).
An empty string as resolved URL means "nothing usable here" and is left
for the consumer to drop.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from link_scout.crawler.models import (
    DiscoveryEvent,
    FormActionFound,
    FormInput,
    FormParsed,
    FormRecord,
    LinkFound,
    PageData,
    ScriptFound,
)

__all__ = ("absolute_url", "extract_events", "parse_form")


def absolute_url(base: str, ref: Optional[str]) -> str:
    """
    Resolve *ref* against *base* and drop the fragment.

    Fragment-only references and unparsable ones resolve to ``""``.
    """
    if ref is None:
        return ""
    ref = ref.strip()
    if ref.startswith("#"):
        return ""
    try:
        joined = urljoin(base, ref)
    except ValueError:
        return ""
    return urldefrag(joined).url


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _base_url(soup: BeautifulSoup, page_url: str) -> str:
    base = soup.find("base", href=True)
    if isinstance(base, Tag):
        resolved = absolute_url(page_url, _attr(base, "href"))
        if resolved:
            return resolved
    return page_url


def parse_form(form: Tag, base: str) -> FormRecord:
    """Build a FormRecord from a ``<form>`` element: inputs first, then textareas."""
    inputs: List[FormInput] = [
        FormInput(type=_attr(tag, "type"), name=_attr(tag, "name"), value=_attr(tag, "value"))
        for tag in form.find_all("input")
    ]
    inputs.extend(
        FormInput(type="text", name=_attr(tag, "name"), value=_attr(tag, "value"))
        for tag in form.find_all("textarea")
    )
    return FormRecord(
        url=absolute_url(base, _attr(form, "action")),
        method=_attr(form, "method"),
        inputs=tuple(inputs),
    )


def extract_events(page: PageData) -> List[DiscoveryEvent]:
    """
    Return discovery events for *page* in a stable order:
    links, scripts, form actions, then complete forms.
    """
    soup = BeautifulSoup(page.content, "html.parser")
    base = _base_url(soup, page.url)
    events: List[DiscoveryEvent] = []

    for tag in soup.find_all("a", href=True):
        events.append(LinkFound(absolute_url(base, _attr(tag, "href"))))
    for tag in soup.find_all("script", src=True):
        events.append(ScriptFound(absolute_url(base, _attr(tag, "src"))))
    forms = soup.find_all("form")
    for tag in forms:
        if tag.has_attr("action"):
            events.append(FormActionFound(absolute_url(base, _attr(tag, "action"))))
    for tag in forms:
        events.append(FormParsed(parse_form(tag, base)))
    return events
