"""Tests for config.py - configuration discovery and validation."""

from pathlib import Path

import pytest

from sensorbuffer.config import BufferConfig, load_config
from sensorbuffer.exceptions import ConfigurationError


class TestBufferConfig:
    def test_defaults(self):
        config = BufferConfig()
        assert config.root_dir is None
        assert config.root_path is None
        assert config.timezone is None
        assert config.tzinfo is None
        assert config.suffix_range == 10000
        assert config.pretty_print is False
        assert config.verbosity == "normal"

    def test_suffix_range_minimum(self):
        with pytest.raises(ConfigurationError) as exc_info:
            BufferConfig(suffix_range=100)
        assert exc_info.value.key == "suffix_range"

    def test_invalid_verbosity(self):
        with pytest.raises(ConfigurationError):
            BufferConfig(verbosity="loud")

    def test_unknown_timezone(self):
        with pytest.raises(ConfigurationError):
            BufferConfig(timezone="Not/AZone")

    def test_timezone_resolved(self):
        assert BufferConfig(timezone="UTC").tzinfo is not None

    def test_root_path_expands_user(self):
        path = BufferConfig(root_dir="~/sensors").root_path
        assert path == Path.home() / "sensors"

    def test_frozen(self):
        config = BufferConfig()
        with pytest.raises(Exception):
            config.suffix_range = 20000


class TestLoadConfig:
    """Test merge order of config sources."""

    def test_defaults_without_sources(self):
        assert load_config() == BufferConfig()

    def test_global_config(self):
        (Path.home() / ".sensorbuffer.toml").write_text('root_dir = "/global"\n')
        assert load_config().root_dir == "/global"

    def test_project_overrides_global(self):
        (Path.home() / ".sensorbuffer.toml").write_text(
            'root_dir = "/global"\npretty_print = true\n'
        )
        Path("sensorbuffer.toml").write_text('root_dir = "/project"\n')

        config = load_config()

        assert config.root_dir == "/project"
        assert config.pretty_print is True

    def test_explicit_file_overrides_project(self, tmp_path):
        Path("sensorbuffer.toml").write_text('root_dir = "/project"\n')
        explicit = tmp_path / "custom.toml"
        explicit.write_text('root_dir = "/explicit"\nsuffix_range = 50000\n')

        config = load_config(config_file=explicit)

        assert config.root_dir == "/explicit"
        assert config.suffix_range == 50000

    def test_env_overrides_files(self, monkeypatch):
        Path("sensorbuffer.toml").write_text('root_dir = "/project"\n')
        monkeypatch.setenv("SENSORBUFFER_ROOT_DIR", "/env")
        monkeypatch.setenv("SENSORBUFFER_SUFFIX_RANGE", "20000")
        monkeypatch.setenv("SENSORBUFFER_PRETTY_PRINT", "yes")

        config = load_config()

        assert config.root_dir == "/env"
        assert config.suffix_range == 20000
        assert config.pretty_print is True

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("SENSORBUFFER_ROOT_DIR", "/env")
        assert load_config(root_dir="/cli").root_dir == "/cli"

    def test_none_override_ignored(self, monkeypatch):
        monkeypatch.setenv("SENSORBUFFER_ROOT_DIR", "/env")
        assert load_config(root_dir=None).root_dir == "/env"

    def test_path_override_stored_as_string(self, tmp_path):
        assert load_config(root_dir=tmp_path).root_dir == str(tmp_path)

    def test_verbose_flag(self):
        assert load_config(verbose=True).verbosity == "verbose"

    def test_quiet_flag(self):
        assert load_config(verbose=False, quiet=True).verbosity == "quiet"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("root_dir = \n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file=bad)
        assert exc_info.value.source == bad

    def test_unknown_field(self, tmp_path):
        extra = tmp_path / "extra.toml"
        extra.write_text("compression = true\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=extra)

    def test_bad_env_bool(self, monkeypatch):
        monkeypatch.setenv("SENSORBUFFER_PRETTY_PRINT", "maybe")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config()
        assert exc_info.value.key == "SENSORBUFFER_PRETTY_PRINT"

    def test_bad_env_int(self, monkeypatch):
        monkeypatch.setenv("SENSORBUFFER_SUFFIX_RANGE", "lots")
        with pytest.raises(ConfigurationError):
            load_config()
