"""
Tests for utils/config.py — AppConfig environment loading
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.config import AppConfig, DOCUMENT_NAME, is_url

_ENV_VARS = (
    "APP_DATA_SOURCE", "APP_FETCH_TIMEOUT", "APP_FETCH_RETRIES",
    "APP_PORT", "APP_HOST", "APP_LOG_FORMAT",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAppConfigDefaults:
    def test_defaults(self, clean_env):
        cfg = AppConfig.from_env()
        assert cfg.data_source == str(Path("data") / DOCUMENT_NAME)
        assert cfg.fetch_timeout is None
        assert cfg.fetch_retries == 0
        assert cfg.api_port == 8000
        assert cfg.api_host == "127.0.0.1"
        assert cfg.log_format == "text"
        assert not cfg.source_is_url


class TestAppConfigEnv:
    def test_overrides(self, clean_env):
        clean_env.setenv("APP_DATA_SOURCE", "https://example.test/data_semantic_map.json")
        clean_env.setenv("APP_FETCH_TIMEOUT", "2.5")
        clean_env.setenv("APP_FETCH_RETRIES", "3")
        clean_env.setenv("APP_PORT", "9001")
        clean_env.setenv("APP_LOG_FORMAT", "json")
        cfg = AppConfig.from_env()
        assert cfg.source_is_url
        assert cfg.fetch_timeout == 2.5
        assert cfg.fetch_retries == 3
        assert cfg.api_port == 9001
        assert cfg.log_format == "json"

    def test_blank_timeout_means_none(self, clean_env):
        clean_env.setenv("APP_FETCH_TIMEOUT", "  ")
        assert AppConfig.from_env().fetch_timeout is None

    def test_bad_port_raises(self, clean_env):
        clean_env.setenv("APP_PORT", "eighty")
        with pytest.raises(ValueError):
            AppConfig.from_env()


class TestConfigSerialization:
    def test_to_dict_excludes_private(self, clean_env):
        cfg = AppConfig.from_env()
        cfg._secret = "x"
        d = cfg.to_dict()
        assert "_secret" not in d
        assert d["api_port"] == 8000
        assert d["fetch_timeout"] is None

    def test_to_dict_reflects_overrides(self, clean_env):
        cfg = AppConfig.from_env()
        cfg.data_source = "other.json"
        assert cfg.to_dict()["data_source"] == "other.json"


class TestIsUrl:
    @pytest.mark.parametrize("source,expected", [
        ("http://host/x.json", True),
        ("HTTPS://host/x.json", True),
        ("data/data_semantic_map.json", False),
        ("/abs/path.json", False),
        ("ftp://host/x.json", False),
    ])
    def test_is_url(self, source, expected):
        assert is_url(source) is expected
