"""Configuration management for the long multiplication calculator."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from ..engine import DEFAULT_MAX_INPUT_DIGITS, DEFAULT_MAX_RESULT_DIGITS

logger = logging.getLogger(__name__)

OUTPUT_MODES = ("display", "store", "both")
STYLES = ("steps", "grid")


@dataclass
class Config:
    """Central configuration object for the calculator."""

    # Engine limits
    max_input_digits: int = DEFAULT_MAX_INPUT_DIGITS
    max_result_digits: int = DEFAULT_MAX_RESULT_DIGITS

    # Rendering
    style: str = "steps"
    annotate: bool = False

    # Output
    output_mode: str = "display"
    output_file: Path | None = None
    output_dir: Path = Path("./output")

    # HTTP service
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    # Logging
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Path | None = None
    logging_db_path: Path | None = None


class ConfigLoader:
    """Loads configuration from YAML and environment variables."""

    def __init__(self, config_path: str | None = "config/config.yaml", env_path: str = ".env"):
        """Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file, or None for defaults
            env_path: Path to the .env file
        """
        self.config_path = Path(config_path) if config_path else None
        self.env_path = Path(env_path)
        self._raw_config: dict[str, Any] = {}

    def load(self) -> Config:
        """Load configuration from files and environment.

        Returns:
            Populated Config object
        """
        # Load environment variables
        if self.env_path.exists():
            load_dotenv(self.env_path)
            logger.info(f"Loaded environment from {self.env_path}")

        if self.config_path is None:
            self._raw_config = {}
            return self._build_config()

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path) as f:
            self._raw_config = yaml.safe_load(f) or {}

        logger.info(f"Loaded configuration from {self.config_path}")

        return self._build_config()

    def _build_config(self) -> Config:
        """Build Config object from raw configuration."""
        config = Config()

        # Engine limits
        limits = self._raw_config.get("limits", {})
        config.max_input_digits = int(
            self._resolve_env(limits.get("max_input_digits")) or DEFAULT_MAX_INPUT_DIGITS
        )
        config.max_result_digits = int(
            self._resolve_env(limits.get("max_result_digits")) or DEFAULT_MAX_RESULT_DIGITS
        )

        # Rendering
        render = self._raw_config.get("render", {})
        config.style = render.get("style", "steps")
        if config.style not in STYLES:
            raise ValueError(
                f"Invalid render style '{config.style}'; use one of {', '.join(STYLES)}"
            )
        config.annotate = self._resolve_bool("render.annotate", render.get("annotate"), False)

        # Output
        output = self._raw_config.get("output", {})
        config.output_mode = output.get("mode", "display")
        if config.output_mode not in OUTPUT_MODES:
            raise ValueError(
                f"Invalid output mode '{config.output_mode}'; use one of {', '.join(OUTPUT_MODES)}"
            )
        output_file = self._resolve_env(output.get("file"))
        config.output_file = Path(output_file) if output_file else None
        config.output_dir = Path(output.get("output_dir", "./output"))

        # HTTP service
        server = self._raw_config.get("server", {})
        config.server_host = server.get("host", "127.0.0.1")
        config.server_port = int(server.get("port", 8000))

        # Logging
        logging_config = self._raw_config.get("logging", {})
        config.log_level = logging_config.get("level", "WARNING")
        config.log_format = logging_config.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        log_file = self._resolve_env(logging_config.get("file"))
        config.log_file = Path(log_file) if log_file else None
        db_path = self._resolve_env(logging_config.get("db_path"))
        config.logging_db_path = Path(db_path) if db_path else None

        return config

    def _resolve_bool(self, key: str, value: Any, default: bool) -> bool:
        """Resolve a flag given as a YAML boolean or as a string such as ``${VAR}``.

        Strings are read as YAML scalars, so ``"false"``, ``"no"`` and ``"off"``
        are false. Anything that is not a boolean raises ValueError.
        """
        value = self._resolve_env(value)
        if value is None:
            return default
        if isinstance(value, str):
            value = yaml.safe_load(value)
        if not isinstance(value, bool):
            raise ValueError(f"Invalid value for {key}: expected true or false")
        return value

    def _resolve_env(self, value: Any) -> Any:
        """Resolve environment variable references in config values.

        Args:
            value: Value that may be a ${VAR_NAME} reference

        Returns:
            Resolved value or None
        """
        if value is None or value == "":
            return None

        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            return os.getenv(env_var)

        return value


# Convenience function
def load_config(config_path: str | None = None, env_path: str = ".env") -> Config:
    """Load configuration from files.

    Args:
        config_path: Path to YAML configuration; None uses the defaults
        env_path: Path to .env file

    Returns:
        Loaded Config object
    """
    loader = ConfigLoader(config_path, env_path)
    return loader.load()
