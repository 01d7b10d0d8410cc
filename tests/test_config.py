"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from coa_engine.config import CoaConfig
from coa_engine.store import FileStore, HttpStore


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point XDG directories at tmp_path and clear COA_* variables."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("COA_STORE_DIR", raising=False)
    monkeypatch.delenv("COA_STORE_URL", raising=False)


class TestFromEnv:
    def test_reads_store_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("COA_STORE_DIR", str(tmp_path / "store"))

        config = CoaConfig.from_env()

        assert config.store_dir == tmp_path / "store"
        assert config.store_url is None

    def test_missing_variables(self) -> None:
        with pytest.raises(ValueError, match="COA_STORE_URL"):
            CoaConfig.from_env()


class TestFromFile:
    def test_reads_default_path(self, tmp_path: Path) -> None:
        """Should read config.json under XDG_CONFIG_HOME/coa-engine."""
        path = tmp_path / "config" / "coa-engine" / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"store_url": "http://kv.test"}))

        config = CoaConfig.from_file()

        assert config.store_url == "http://kv.test"
        assert config.store_dir is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            CoaConfig.from_file(tmp_path / "nope.json")


class TestLoad:
    def test_env_takes_precedence(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = tmp_path / "config" / "coa-engine" / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"store_url": "http://kv.test"}))
        monkeypatch.setenv("COA_STORE_DIR", str(tmp_path / "env-store"))

        assert CoaConfig.load().store_dir == tmp_path / "env-store"

    def test_defaults_to_data_dir(self, tmp_path: Path) -> None:
        """Should fall back to a file store under XDG_DATA_HOME."""
        config = CoaConfig.load()

        assert config == CoaConfig()
        assert config.resolved_store_dir == tmp_path / "data" / "coa-engine" / "store"


class TestCreateStore:
    def test_file_store(self, tmp_path: Path) -> None:
        store = CoaConfig(store_dir=tmp_path).create_store()

        assert isinstance(store, FileStore)
        assert store.root == tmp_path

    def test_url_selects_http_store(self) -> None:
        store = CoaConfig(store_url="http://kv.test").create_store()

        assert isinstance(store, HttpStore)
        assert store.base_url == "http://kv.test"
