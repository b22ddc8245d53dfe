"""link_scout.crawler: fetching, parsing and discovery events."""

from .collector import Collector, Request
from .extractor import extract_events
from .models import (
    DiscoveryEvent,
    FormActionFound,
    FormInput,
    FormParsed,
    FormRecord,
    LinkFound,
    PageData,
    ScriptFound,
)

__all__ = [
    "Collector",
    "DiscoveryEvent",
    "FormActionFound",
    "FormInput",
    "FormParsed",
    "FormRecord",
    "LinkFound",
    "PageData",
    "Request",
    "ScriptFound",
    "extract_events",
]
