"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from dagsteps._graph import DEFAULT_STEP_WIDTH


class ConfigError(Exception):
    """Error in dagsteps configuration."""


@dataclass(slots=True, frozen=True)
class DagstepsConfig:
    """Configuration loaded from the ``[tool.dagsteps]`` table of pyproject.toml."""

    step_width: int = DEFAULT_STEP_WIDTH
    check_cycles: bool = True
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def load_config(pyproject_path: Path) -> DagstepsConfig:
    """Load and validate [tool.dagsteps] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DagstepsConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("dagsteps", {})
    if not section:
        return DagstepsConfig(project_root=project_root)

    unknown = set(section) - {"step_width", "check_cycles"}
    if unknown:
        msg = f"Unknown [tool.dagsteps] keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    step_width = section.get("step_width", DEFAULT_STEP_WIDTH)
    # bool is an int subclass, reject it explicitly
    if not isinstance(step_width, int) or isinstance(step_width, bool) or step_width < 1:
        msg = "Invalid [tool.dagsteps].step_width: expected a positive integer"
        raise ConfigError(msg)

    check_cycles = section.get("check_cycles", True)
    if not isinstance(check_cycles, bool):
        msg = "Invalid [tool.dagsteps].check_cycles: expected true or false"
        raise ConfigError(msg)

    return DagstepsConfig(
        step_width=step_width,
        check_cycles=check_cycles,
        project_root=project_root,
    )


def get_config() -> DagstepsConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DagstepsConfig (defaults if no pyproject.toml or no [tool.dagsteps] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DagstepsConfig()
    return load_config(pyproject_path)
