"""link_scout.scope: crawl boundary of a single seed URL."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional
from urllib.parse import urlsplit

__all__ = (
    "MalformedURLError",
    "NoHostnameError",
    "Scope",
    "extract_hostname",
    "resolve_scope",
    "subdomain_pattern",
)


class MalformedURLError(ValueError):
    """The seed line could not be parsed as a URL."""


class NoHostnameError(ValueError):
    """The seed parsed as a URL but names no host, e.g. a bare ``example.com``."""


@dataclass(frozen=True, slots=True)
class Scope:
    """Either an exact hostname allow-list or one subdomain pattern, never both."""

    allowed_domains: FrozenSet[str] = frozenset()
    pattern: Optional[re.Pattern[str]] = None

    def allows(self, url: str) -> bool:
        if self.pattern is not None:
            return self.pattern.search(url) is not None
        try:
            hostname = urlsplit(url).hostname
        except ValueError:
            return False
        return hostname is not None and hostname in self.allowed_domains


def extract_hostname(url: str) -> str:
    try:
        hostname = urlsplit(url).hostname
    except ValueError as exc:
        raise MalformedURLError(f"{url!r}: {exc}") from exc
    if not hostname:
        raise NoHostnameError(f"{url!r}: no hostname")
    return hostname


def subdomain_pattern(hostname: str) -> re.Pattern[str]:
    """Match *hostname* and its subdomains at the start of a string or after
    ``.`` or ``//``, followed by the end or one of ``# / ? :``, ignoring case."""
    escaped = hostname.replace(".", r"\.")
    return re.compile(rf"(?:^|\.|//){escaped}(?:[#/?:]|$)", re.IGNORECASE)


def resolve_scope(
    seed_url: str,
    include_subdomains: bool = False,
    host_override: Optional[str] = None,
) -> Scope:
    hostname = extract_hostname(seed_url)
    if include_subdomains:
        return Scope(pattern=subdomain_pattern(hostname))
    allowed = {hostname}
    if host_override:
        allowed.add(host_override.lower())
    return Scope(allowed_domains=frozenset(allowed))
