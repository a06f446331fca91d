"""
Configuration loader for siege settings and character classes.

Allows users to provide a character class roster and siege timing via a
YAML configuration file:

    siege:
      end_time: "21:15:00"
    characters:
      Hero1: Warrior
      Villain1: Mage
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, Optional, Any

from .settings import TIME_OF_DAY

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads custom configuration from YAML files."""

    @staticmethod
    def search_paths(config_path: Optional[str] = None):
        paths = [
            Path("siegelog.yaml"),
            Path("config/siegelog.yaml"),
            Path.home() / ".siegelog" / "siegelog.yaml",
            Path("/etc/siegelog/siegelog.yaml"),
        ]
        if config_path:
            paths.insert(0, Path(config_path))
        return paths

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to custom config file. If None, looks for:
                        1. siegelog.yaml in current directory
                        2. config/siegelog.yaml
                        3. ~/.siegelog/siegelog.yaml
                        4. /etc/siegelog/siegelog.yaml

        Returns:
            Configuration dictionary
        """
        for path in ConfigLoader.search_paths(config_path):
            if path.exists():
                try:
                    with open(path, "r") as f:
                        config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.error(f"Failed to load config from {path}: {e}")
                    continue

                if not isinstance(config, dict):
                    logger.error(f"Ignoring config at {path}: top level must be a mapping")
                    continue

                logger.info(f"Loaded configuration from {path}")
                return config

        logger.debug("No custom configuration file found, using defaults")
        return {}

    @staticmethod
    def class_lookup(config: Dict[str, Any]) -> Dict[str, str]:
        """
        Build the player name to class mapping from the ``characters`` key.

        Args:
            config: Configuration dictionary from YAML

        Returns:
            Name to class mapping
        """
        characters = config.get("characters") or {}
        if not isinstance(characters, dict):
            logger.warning("Ignoring 'characters': expected a name to class mapping")
            return {}

        lookup = {}
        for name, class_name in characters.items():
            if class_name is None:
                logger.warning(f"Ignoring character without class: {name}")
                continue
            lookup[str(name)] = str(class_name)
            logger.debug(f"Added character class: {name} = {class_name}")
        return lookup

    @staticmethod
    def siege_end_time(config: Dict[str, Any], default: str) -> str:
        """
        Read ``siege.end_time``, falling back to ``default`` when invalid.
        """
        siege = config.get("siege") or {}
        end_time = str(siege.get("end_time", default)).strip() if isinstance(siege, dict) else default

        if not TIME_OF_DAY.match(end_time):
            logger.warning(f"Invalid siege end time {end_time!r}, using {default}")
            return default
        return end_time


def load_class_lookup(config_path: Optional[str] = None) -> Dict[str, str]:
    """
    Load the character class mapping in one step.

    Args:
        config_path: Optional path to custom config file
    """
    loader = ConfigLoader()
    return loader.class_lookup(loader.load_config(config_path))
