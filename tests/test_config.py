"""Tests for the configuration module."""

from pathlib import Path

import pytest

from dagsteps._cli.config import (
    ConfigError,
    DagstepsConfig,
    find_pyproject_toml,
    get_config,
    load_config,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        result = find_pyproject_toml(tmp_path)

        assert result == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        result = find_pyproject_toml(subdir)

        assert result == pyproject


class TestLoadConfig:
    """Tests for loading the [tool.dagsteps] table."""

    def test_no_section_gives_defaults(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config == DagstepsConfig(project_root=tmp_path)
        assert config.step_width == 4
        assert config.check_cycles is True

    def test_values(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.dagsteps]
step_width = 6
check_cycles = false
""",
        )

        config = load_config(pyproject)

        assert config.step_width == 6
        assert config.check_cycles is False
        assert config.project_root == tmp_path

    @pytest.mark.parametrize("value", ["0", "-1", "'wide'", "true", "2.5"])
    def test_invalid_step_width(self, tmp_path: Path, value: str) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.dagsteps]\nstep_width = {value}\n")

        with pytest.raises(ConfigError, match="step_width"):
            load_config(pyproject)

    def test_invalid_check_cycles(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.dagsteps]\ncheck_cycles = 'no'\n")

        with pytest.raises(ConfigError, match="check_cycles"):
            load_config(pyproject)

    def test_unknown_key(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.dagsteps]\nwidth = 3\n")

        with pytest.raises(ConfigError, match="Unknown"):
            load_config(pyproject)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.dagsteps\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)


class TestGetConfig:
    """Tests for get_config using the working directory."""

    def test_reads_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.dagsteps]\nstep_width = 2\n")
        monkeypatch.chdir(tmp_path)

        assert get_config().step_width == 2
