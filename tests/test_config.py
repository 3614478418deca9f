"""Tests for configuration and log directory resolution."""

from pathlib import Path

import pytest

from oalogtail.config import TailerConfig
from oalogtail.config import resolve_log_dir
from oalogtail.exceptions import ConfigurationError
from oalogtail.exceptions import WatchDirectoryNotFoundError


class TestTailerConfig:
    """Tests for TailerConfig.validate."""

    def test_defaults_are_valid(self, tmp_path: Path) -> None:
        """Test the default configuration validates."""
        config = TailerConfig(log_dir=tmp_path)
        config.validate()
        assert config.primary_log_name == "PVSS_II.log"
        assert config.file_suffix == ".log"

    def test_empty_primary_name(self, tmp_path: Path) -> None:
        """Test an empty primary log name is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            TailerConfig(log_dir=tmp_path, primary_log_name=" ").validate()
        assert exc_info.value.parameter == "primary_log_name"

    @pytest.mark.parametrize("suffix", ["log", ".", ""])
    def test_bad_suffix(self, tmp_path: Path, suffix: str) -> None:
        """Test malformed suffixes are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            TailerConfig(log_dir=tmp_path, file_suffix=suffix).validate()
        assert exc_info.value.parameter == "file_suffix"

    def test_primary_must_match_suffix(self, tmp_path: Path) -> None:
        """Test the primary log must be one of the tailed files."""
        with pytest.raises(ConfigurationError) as exc_info:
            TailerConfig(log_dir=tmp_path, primary_log_name="PVSS_II.txt").validate()
        assert exc_info.value.parameter == "primary_log_name"

    def test_unknown_log_level(self, tmp_path: Path) -> None:
        """Test unknown log levels are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            TailerConfig(log_dir=tmp_path, log_level="chatty").validate()
        assert exc_info.value.parameter == "log_level"

    def test_log_level_case_insensitive(self, tmp_path: Path) -> None:
        """Test log levels are accepted in any case."""
        TailerConfig(log_dir=tmp_path, log_level="debug").validate()


class TestResolveLogDir:
    """Tests for resolve_log_dir function."""

    def test_explicit_path(self, log_dir: Path) -> None:
        """Test an explicit directory wins."""
        assert resolve_log_dir(log_dir) == log_dir

    def test_explicit_missing_path(self, tmp_path: Path) -> None:
        """Test a missing explicit directory is an error."""
        with pytest.raises(WatchDirectoryNotFoundError) as exc_info:
            resolve_log_dir(tmp_path / "missing")
        assert exc_info.value.path == tmp_path / "missing"

    def test_workspace(self, tmp_path: Path, log_dir: Path) -> None:
        """Test the workspace's log directory is used."""
        assert resolve_log_dir(workspace=tmp_path) == log_dir

    def test_workspace_without_log_dir(self, tmp_path: Path) -> None:
        """Test a workspace without a log directory is an error."""
        with pytest.raises(WatchDirectoryNotFoundError):
            resolve_log_dir(workspace=tmp_path)

    def test_current_directory(
        self, tmp_path: Path, log_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the current directory is the default workspace."""
        monkeypatch.chdir(tmp_path)
        assert resolve_log_dir().resolve() == log_dir.resolve()
