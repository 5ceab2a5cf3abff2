"""Tests for the config module."""

from pathlib import Path

from promptsmith.config import Settings, _parse_cors_origins, _parse_list, _parse_root_dir
from promptsmith.factory import create_formatter


class TestParseCorsOrigins:
    """Test CORS origins parsing."""

    def test_parse_cors_origins_with_value(self, monkeypatch):
        """Test parsing CORS origins from environment variable."""
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://localhost:8080")
        result = _parse_cors_origins()
        assert result == ["http://localhost:3000", "http://localhost:8080"]

    def test_parse_cors_origins_without_value(self, monkeypatch):
        """Test default CORS origins when not set."""
        monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
        assert _parse_cors_origins() == ["*"]

    def test_parse_cors_origins_empty_string(self, monkeypatch):
        """Test parsing empty CORS origins defaults to wildcard."""
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "")
        assert _parse_cors_origins() == ["*"]


class TestParseList:
    """Test comma-separated list parsing."""

    def test_items_are_trimmed(self, monkeypatch):
        monkeypatch.setenv("PROMPTSMITH_EXTRA_IGNORE_PATTERNS", " *.csv , ,*.tsv ")
        assert _parse_list("PROMPTSMITH_EXTRA_IGNORE_PATTERNS") == ["*.csv", "*.tsv"]

    def test_unset_returns_default_copy(self, monkeypatch):
        monkeypatch.delenv("PROMPTSMITH_EXTRA_IGNORE_PATTERNS", raising=False)
        default = ["x"]

        result = _parse_list("PROMPTSMITH_EXTRA_IGNORE_PATTERNS", default)

        assert result == ["x"]
        assert result is not default

    def test_only_separators_returns_default(self, monkeypatch):
        monkeypatch.setenv("PROMPTSMITH_EXTRA_IGNORE_PATTERNS", " , ")
        assert _parse_list("PROMPTSMITH_EXTRA_IGNORE_PATTERNS") == []


class TestParseRootDir:
    """Test root directory parsing."""

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("PROMPTSMITH_ROOT_DIR", raising=False)
        assert _parse_root_dir() is None

    def test_user_is_expanded(self, monkeypatch):
        monkeypatch.setenv("PROMPTSMITH_ROOT_DIR", "~/prompts")
        assert _parse_root_dir() == Path("~/prompts").expanduser()


class TestSettings:
    """Test Settings configuration."""

    def test_settings_explicit_values(self, tmp_path):
        """Test Settings built with explicit parameters."""
        settings = Settings(
            root_dir=tmp_path,
            resolve_files=True,
            extra_ignore_patterns=["*.csv"],
            extra_ignore_directories=["vendor"],
            log_level="DEBUG",
            host="0.0.0.0",
            port=9000,
            debug=True,
            cors_allow_origins=["http://localhost:3000"],
        )

        assert settings.root_dir == tmp_path
        assert settings.resolve_files is True
        assert settings.extra_ignore_patterns == ["*.csv"]
        assert settings.extra_ignore_directories == ["vendor"]
        assert settings.log_level == "DEBUG"
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
        assert settings.debug is True
        assert settings.cors_allow_origins == ["http://localhost:3000"]

    def test_settings_path_handling(self, tmp_path):
        """Test that root_dir strings are converted to Path objects."""
        settings = Settings(root_dir=str(tmp_path))
        assert isinstance(settings.root_dir, Path)

    def test_root_dir_optional(self):
        assert Settings(root_dir=None).root_dir is None


class TestCreateFormatter:
    """Test building a formatter from settings."""

    def test_extra_ignore_patterns_apply(self, tmp_path):
        (tmp_path / "data.csv").write_text("a,b", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("keep", encoding="utf-8")
        formatter = create_formatter(Settings(extra_ignore_patterns=["*.csv"]))

        result = formatter.format("{{content:.}}", {}, tmp_path, resolve_files=True)

        assert result == "File: data.csv (content ignored)\n\nFile: notes.txt\nkeep\n\n"
