"""Tests for configuration."""

from pathlib import Path

import pytest

from stridelog.config import StrideLogConfig, config_from_env

ENV_VARS = (
    "STRIDELOG_HOME",
    "STRIDELOG_DB",
    "STRIDELOG_LOG_DIR",
    "STRIDELOG_STORAGE_KEY",
    "STRIDELOG_LOG_MAX_MB",
    "TELEGRAM_TOKEN",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestStrideLogConfig:
    def test_defaults(self):
        config = StrideLogConfig()
        assert config.data_dir == Path.home() / ".stridelog"
        assert config.db_path == Path.home() / ".stridelog" / "stridelog.db"
        assert config.log_dir == Path.home() / ".stridelog" / "logs"
        assert config.storage_key == "workouts"
        assert config.telegram_token is None

    def test_paths_follow_data_dir(self, tmp_path: Path):
        config = StrideLogConfig(data_dir=tmp_path)
        assert config.db_path == tmp_path / "stridelog.db"
        assert config.log_dir == tmp_path / "logs"

    def test_explicit_db_path_kept(self, tmp_path: Path):
        config = StrideLogConfig(data_dir=tmp_path, db_path=tmp_path / "other.db")
        assert config.db_path == tmp_path / "other.db"

    def test_empty_storage_key_rejected(self):
        with pytest.raises(ValueError, match="storage_key"):
            StrideLogConfig(storage_key="")

    def test_non_positive_log_size_rejected(self):
        with pytest.raises(ValueError, match="log_max_size_mb"):
            StrideLogConfig(log_max_size_mb=0)


class TestConfigFromEnv:
    def test_defaults_without_env(self, clean_env):
        config = config_from_env()
        assert config.data_dir == Path.home() / ".stridelog"
        assert config.storage_key == "workouts"
        assert config.log_max_size_mb == 10.0

    def test_reads_env(self, clean_env, tmp_path: Path):
        clean_env.setenv("STRIDELOG_HOME", str(tmp_path))
        clean_env.setenv("STRIDELOG_STORAGE_KEY", "activities")
        clean_env.setenv("STRIDELOG_LOG_MAX_MB", "2.5")
        clean_env.setenv("TELEGRAM_TOKEN", "abc")

        config = config_from_env()

        assert config.data_dir == tmp_path
        assert config.db_path == tmp_path / "stridelog.db"
        assert config.storage_key == "activities"
        assert config.log_max_size_mb == 2.5
        assert config.telegram_token == "abc"

    def test_db_override(self, clean_env, tmp_path: Path):
        clean_env.setenv("STRIDELOG_DB", str(tmp_path / "custom.db"))
        assert config_from_env().db_path == tmp_path / "custom.db"

    def test_invalid_log_size_falls_back(self, clean_env):
        clean_env.setenv("STRIDELOG_LOG_MAX_MB", "lots")
        assert config_from_env().log_max_size_mb == 10.0
