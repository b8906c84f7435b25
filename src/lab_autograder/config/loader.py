"""Configuration loader for lab settings."""

from pathlib import Path
from typing import Any

import yaml

from ..utils.logging import get_logger
from .models import ConfigError, GradingConfig

logger = get_logger(__name__)

DEFAULT_LAB = "3-1-css-basics"


class ConfigLoader:
    """Loads and validates lab configuration files."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize the config loader.

        Args:
            config_dir: Directory containing lab YAML files. Defaults to the
                packaged ``labs`` directory.
        """
        self.config_dir = config_dir or (Path(__file__).parent / "labs")

    def load_lab(self, lab_file: str | Path | None = None) -> GradingConfig:
        """Load a lab configuration from YAML.

        Args:
            lab_file: Path to the lab YAML file, or a bare lab name found in
                the config directory. Defaults to the packaged lab.

        Returns:
            Parsed GradingConfig object
        """
        path = self._resolve_path(lab_file or DEFAULT_LAB)
        logger.debug(f"Loading lab config: {path}")
        data = self._load_yaml(path)
        return GradingConfig.from_dict(data)

    def _resolve_path(self, file_path: str | Path) -> Path:
        """Resolve a config file path.

        Bare names are looked up in the config directory only. Paths with a
        directory part are used as given.
        """
        path = Path(file_path)
        if not path.suffix:
            path = path.with_suffix(".yml")
        if not path.is_absolute() and path.parent == Path("."):
            path = self.config_dir / path
        return path

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load and parse a YAML file."""
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")
        return data
