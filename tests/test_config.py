"""Unit tests for text_to_svg_path.config."""

from pathlib import Path
from textwrap import dedent
from unittest.mock import patch

import pytest

from text_to_svg_path.config import Config, FetchSettings
from text_to_svg_path.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the developer's config file and T2SP_* variables."""
    for name in ("T2SP_CONFIG", "T2SP_TIMEOUT", "T2SP_MAX_SIZE", "T2SP_JOBS", "T2SP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        "text_to_svg_path.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml"
    )


class TestDefaults:
    def test_load_without_file(self) -> None:
        config = Config.load()
        assert config.jobs == 4
        assert config.log_level == "WARNING"
        assert config.fetch == FetchSettings()
        assert config.fetch.timeout is None


class TestYamlFile:
    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            dedent("""
            fetch:
              timeout: 12.5
              max_size: 1000
              user_agent: custom/2.0
            jobs: 2
            log_level: debug
            """)
        )
        config = Config.load(path)
        assert config.fetch.timeout == 12.5
        assert config.fetch.max_size == 1000
        assert config.fetch.user_agent == "custom/2.0"
        assert config.jobs == 2
        assert config.log_level == "DEBUG"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Config.load(path) == Config()

    def test_env_points_to_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "env.yaml"
        path.write_text("jobs: 7\n")
        monkeypatch.setenv("T2SP_CONFIG", str(path))
        assert Config.load().jobs == 7

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            Config.load(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("jobs: 0\n", "jobs: must be at least 1"),
            ("jobs: many\n", "jobs: expected integer"),
            ("log_level: LOUD\n", "log_level: must be one of"),
            ("fetch:\n  timeout: -1\n", "fetch.timeout: must not be negative"),
            ("fetch:\n  retries: 3\n", "unknown fetch keys: retries"),
            ("colour: red\n", "unknown config keys: colour"),
            ("- a\n- b\n", "expected a mapping at top level"),
            ("jobs: [\n", "Invalid YAML"),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str, message: str) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError, match=message):
            Config.load(path)


class TestEnvironmentOverrides:
    def test_overrides_apply_over_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("jobs: 2\nfetch:\n  timeout: 5\n")
        env = {"T2SP_JOBS": "8", "T2SP_TIMEOUT": "none", "T2SP_LOG_LEVEL": "info"}
        with patch.dict("os.environ", env):
            config = Config.load(path)
        assert config.jobs == 8
        assert config.fetch.timeout is None
        assert config.log_level == "INFO"

    def test_zero_timeout_disables_it(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("T2SP_TIMEOUT", "0")
        assert Config.load().fetch.timeout is None

    def test_invalid_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("T2SP_MAX_SIZE", "lots")
        with pytest.raises(ConfigError, match="T2SP_MAX_SIZE: expected integer"):
            Config.load()
