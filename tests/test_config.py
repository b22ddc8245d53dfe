# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from link_scout.config import DEFAULT_USER_AGENT, CrawlerConfig, apply_overrides, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults():
    cfg = CrawlerConfig()
    assert cfg.threads == 8
    assert cfg.depth == 2
    assert not cfg.insecure
    assert not cfg.subs
    assert not cfg.show_source
    assert cfg.headers == ""
    assert not cfg.unique
    assert cfg.user_agent == DEFAULT_USER_AGENT


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("depth: 3\nthreads: 4", ".yaml", None),
        (json.dumps({"depth": 3, "threads": 4}), ".json", None),
        ("depth: -1", ".yaml", ValidationError),
        ("threads: 0", ".yml", ValidationError),
        ("unknown: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- a\n- b", ".yaml", TypeError),
        ("{not json", ".json", ValueError),
        ("depth = 3", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.depth == 3
        assert cfg.threads == 4


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "linkscout.yaml").write_text("unique: true\n", encoding="utf-8")
    assert load_config(None).unique


def test_load_config_explicit_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_apply_overrides_revalidates():
    cfg = CrawlerConfig(depth=5)
    assert apply_overrides(cfg, {}) is cfg
    updated = apply_overrides(cfg, {"threads": 2})
    assert (updated.depth, updated.threads) == (5, 2)
    with pytest.raises(ValidationError):
        apply_overrides(cfg, {"threads": 0})


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.depth = 4
