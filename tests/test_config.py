"""Tests for configuration loading."""

from pathlib import Path

import pytest

from pagecloner.config import Config, load_config
from pagecloner.exceptions import ConfigError

ENV_VARS = [
    "CONFLUENCE_BASE_URL",
    "CONFLUENCE_EMAIL",
    "CONFLUENCE_API_TOKEN",
    "PAGECLONER_TEMPLATE_DIR",
    "PAGECLONER_MAX_DOCUMENTS",
    "PAGECLONER_BATCH_SIZE",
    "PAGECLONER_PAGE_SIZE",
    "PAGECLONER_CREATE_DELAY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("CONFLUENCE_BASE_URL", "https://example.atlassian.net/")
    monkeypatch.setenv("CONFLUENCE_EMAIL", "user@example.com")
    monkeypatch.setenv("CONFLUENCE_API_TOKEN", "secret")


def test_load_from_environment(credentials, monkeypatch, tmp_path):
    monkeypatch.setenv("PAGECLONER_TEMPLATE_DIR", str(tmp_path / "tpl"))
    monkeypatch.setenv("PAGECLONER_BATCH_SIZE", "5")
    monkeypatch.setenv("PAGECLONER_CREATE_DELAY", "0")
    config = load_config()
    assert config.site_url == "https://example.atlassian.net"
    assert config.template_dir == tmp_path / "tpl"
    assert config.batch_size == 5
    assert config.create_delay == 0
    assert config.max_documents == 5000


def test_overrides_win_over_environment(credentials, monkeypatch):
    monkeypatch.setenv("PAGECLONER_MAX_DOCUMENTS", "10")
    config = load_config(template_dir="custom", max_documents=3)
    assert config.template_dir == Path("custom")
    assert config.max_documents == 3


def test_missing_base_url():
    with pytest.raises(ConfigError, match="CONFLUENCE_BASE_URL"):
        load_config()


def test_missing_credentials(monkeypatch):
    monkeypatch.setenv("CONFLUENCE_BASE_URL", "https://example.atlassian.net")
    with pytest.raises(ConfigError, match="CONFLUENCE_API_TOKEN"):
        load_config()


def test_non_numeric_setting(credentials, monkeypatch):
    monkeypatch.setenv("PAGECLONER_PAGE_SIZE", "lots")
    with pytest.raises(ConfigError, match="PAGECLONER_PAGE_SIZE"):
        load_config()


@pytest.mark.parametrize(
    "field, value",
    [("batch_size", 0), ("page_size", 251), ("max_documents", -1), ("create_delay", -0.5)],
)
def test_validate_rejects_out_of_range_values(field, value):
    config = Config(base_url="https://x", email="e", api_token="t", **{field: value})
    with pytest.raises(ConfigError):
        config.validate()
