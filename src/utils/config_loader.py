"""Configuration loader with environment variable substitution."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any
import logging
import re

logger = logging.getLogger(__name__)

VALID_ACCESS_MODES = ('random', 'sequential')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigLoader:
    """Load and validate configuration from YAML file."""

    def __init__(self, config_path: str = "config/config.yaml"):
        """Initialize configuration loader.

        Args:
            config_path: Path to configuration YAML file
        """
        self.config_path = Path(config_path)

    def load(self) -> Dict[str, Any]:
        """Load configuration with environment variable substitution.

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If neither the config file nor its .example exists
            yaml.YAMLError: If config file is invalid YAML
            ValueError: If a required section or setting is invalid
        """
        if not self.config_path.exists():
            example_path = Path(str(self.config_path) + ".example")
            if example_path.exists():
                logger.warning(
                    f"Config file not found: {self.config_path}. "
                    f"Using example: {example_path}"
                )
                self.config_path = example_path
            else:
                raise FileNotFoundError(
                    f"Configuration file not found: {self.config_path}"
                )

        with open(self.config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}

        config = self._substitute_env_vars(config)

        self._validate(config)

        logger.info(f"Configuration loaded from: {self.config_path}")
        return config

    def _substitute_env_vars(self, config: Any) -> Any:
        """Recursively substitute environment variables in config.

        Substitutes ${VAR_NAME} or ${VAR_NAME:default} patterns.
        """
        if isinstance(config, dict):
            return {k: self._substitute_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._substitute_string(config)
        else:
            return config

    def _substitute_string(self, value: str) -> str:
        # Pattern: ${VAR_NAME} or ${VAR_NAME:default_value}
        pattern = r'\$\{([A-Z_][A-Z0-9_]*?)(?::([^}]*))?\}'

        def replace(match):
            var_name = match.group(1)
            default = match.group(2) if match.group(2) is not None else ""

            env_value = os.getenv(var_name)

            if env_value is None:
                if default:
                    logger.debug(
                        f"Environment variable {var_name} not set, "
                        f"using default: {default}"
                    )
                    return default
                else:
                    logger.warning(
                        f"Environment variable {var_name} not set and no default provided"
                    )
                    return match.group(0)

            return env_value

        return re.sub(pattern, replace, value)

    def _validate(self, config: Dict) -> None:
        """Validate configuration has required fields.

        Args:
            config: Configuration dictionary

        Raises:
            ValueError: If required fields are missing or invalid
        """
        required_sections = ['loader', 'logging']

        for section in required_sections:
            if not isinstance(config.get(section), dict):
                raise ValueError(f"Missing required config section: {section}")

        access = config['loader'].get('access', 'random')
        if access not in VALID_ACCESS_MODES:
            raise ValueError(
                f"Invalid loader access mode: {access}. "
                f"Expected one of {', '.join(VALID_ACCESS_MODES)}"
            )

        level = str(config['logging'].get('level', 'INFO')).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {level}")

        if not config['loader'].get('bmp_fallback', True):
            logger.warning(
                "BMP fallback disabled. BMP files will fail to load "
                "unless libvips was built with ImageMagick."
            )

        logger.debug("Configuration validation passed")


def load_config(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """Convenience function to load configuration.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    loader = ConfigLoader(config_path)
    return loader.load()
