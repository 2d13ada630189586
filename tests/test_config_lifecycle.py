"""
Tests for configuration and server lifecycle.
"""

import json
import os
import pytest

import vestibule.Config as Config
from vestibule.NamespaceGate import Files
from portico import lifecycle


class TestConfig:
    """Tests for the configuration manager."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FILES_ROUTE_PREFIX", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        Config.reload()

        assert Config.get("FILES_ROUTE_PREFIX") == "/files"
        assert Config.get("LOG_LEVEL") == "INFO"

    def test_env_overrides_default(self, monkeypatch):
        monkeypatch.setenv("FILES_ROUTE_PREFIX", "/sandbox")
        Config.reload()

        assert Config.get("FILES_ROUTE_PREFIX") == "/sandbox"

    def test_list_values_split_on_commas(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
        Config.reload()

        assert Config.get("CORS_ORIGINS") == ["http://a.example", "http://b.example"]

    def test_default_mounts_config_is_anchored_at_project_root(self, monkeypatch, tmp_path):
        monkeypatch.delenv("MOUNTS_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)
        Config.reload()

        assert Config.get("MOUNTS_CONFIG") == str(Config.PROJECT_ROOT / "data" / "config" / "mounts.json")

    def test_relative_path_from_env_is_anchored_at_project_root(self, monkeypatch):
        monkeypatch.setenv("MOUNTS_CONFIG", "local/mounts.json")
        Config.reload()

        assert Config.get("MOUNTS_CONFIG") == str(Config.PROJECT_ROOT / "local" / "mounts.json")

    def test_absolute_path_from_env_is_kept(self, monkeypatch, tmp_path):
        mounts = str(tmp_path / "mounts.json")
        monkeypatch.setenv("MOUNTS_CONFIG", mounts)
        Config.reload()

        assert Config.get("MOUNTS_CONFIG") == mounts

    def test_unknown_key_default(self):
        assert Config.get("NOT_A_KEY", "fallback") == "fallback"

    def test_validate_rejects_bad_option(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        Config.reload()

        valid, errors = Config.validate()

        assert valid is False
        assert any("LOG_LEVEL" in e for e in errors)


class TestLifecycle:
    """Tests for startup mount attachment and shutdown."""

    @pytest.mark.asyncio
    async def test_attach_configured_mounts(self, temp_dir, sandbox):
        mounts = temp_dir / "mounts.json"
        mounts.write_text(json.dumps({"mounts": [
            {"path": str(sandbox), "name": "sandbox"},
            {"path": str(temp_dir / "missing"), "name": "missing"},
        ]}))
        files = Files()

        attached = await lifecycle.attach_configured_mounts(files, str(mounts))

        assert attached == 1
        assert await files.debug_snapshot() == {"sandbox": os.path.realpath(sandbox)}

    @pytest.mark.asyncio
    async def test_attach_without_mounts_file(self, temp_dir):
        files = Files()

        attached = await lifecycle.attach_configured_mounts(files, str(temp_dir / "none.json"))

        assert attached == 0

    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self, temp_dir, sandbox, monkeypatch):
        mounts = temp_dir / "mounts.json"
        mounts.write_text(json.dumps({"mounts": [{"path": str(sandbox), "name": "sandbox"}]}))
        monkeypatch.setenv("MOUNTS_CONFIG", str(mounts))
        Config.reload()
        files = Files()

        await lifecycle.startup(files)
        assert list(await files.debug_snapshot()) == ["sandbox"]

        await lifecycle.shutdown(files)
        assert await files.debug_snapshot() == {}
