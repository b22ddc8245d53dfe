# === FILE: link_scout/config.py ===
"""
Loading and validation of the LinkScout crawler configuration.
Pydantic describes the schema; YAML or JSON files may supply defaults
that command-line flags then override.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:78.0) Gecko/20100101 Firefox/78.0"


class CrawlerConfig(BaseModel):
    """Settings shared by every crawl session of one run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    threads: int = Field(8, ge=1, description="Parallel requests per crawl session.")
    depth: int = Field(2, ge=0, description="Maximum crawl depth, the seed counts as 1; 0 disables the limit.")
    insecure: bool = Field(False, description="Skip TLS certificate verification.")
    subs: bool = Field(False, description="Include subdomains of the seed host in scope.")
    show_source: bool = Field(False, description="Prefix URLs with the element kind they came from.")
    headers: str = Field("", description='Custom headers, e.g. "Cookie: a=b;;Referer: x".')
    unique: bool = Field(False, description="Print each result only once.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Default User-Agent header.")


_DEFAULT_CFG = Path("linkscout.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read a YAML or JSON file and return a validated CrawlerConfig.
    Without an explicit path, ``linkscout.yaml`` in the working directory is
    used when present, otherwise the built-in defaults.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)


def apply_overrides(config: CrawlerConfig, overrides: Dict[str, Any]) -> CrawlerConfig:
    """Return a re-validated copy of *config* with *overrides* applied."""
    if not overrides:
        return config
    return CrawlerConfig(**{**config.model_dump(), **overrides})


__all__ = ["CrawlerConfig", "DEFAULT_USER_AGENT", "ValidationError", "apply_overrides", "load_config"]
