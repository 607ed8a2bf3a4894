"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
YAML configuration file (~/.aisummarizer/config.yaml). Nested YAML sections
are addressable with dotted keys (e.g. 'huggingface.api_token').
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from aisummarizer.infrastructure.ai.huggingface.options import (
    DEFAULT_BASE_URL, DEFAULT_SUMMARIZATION_MODEL, DEFAULT_USER_AGENT, HuggingFaceOptions
)

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".aisummarizer"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"

class ConfigurationError(Exception):
    """Raised when configuration values are present but unusable."""
    pass

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False

def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat

def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Test overrides
    2. Environment Variables
    3. .env file
    4. YAML configuration file
    5. Default values supplied by the caller

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. YAML file (lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file (override=False: real environment variables take precedence)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
        else:
            logger.debug(f"No variables loaded from {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no file found).")

    # 3. Environment variables are read on demand in get_config

    _loaded = True
    logger.info("Configuration loading process completed.")

def reset_configuration() -> None:
    """Forgets loaded values so the next load_configuration() reads again."""
    global _config, _loaded
    _config = {}
    _loaded = False

def env_key_for(key: str) -> str:
    """Maps a dotted config key to its environment variable name."""
    return key.upper().replace('.', '_')

def _coerce(value: str) -> Any:
    lowered = value.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value

def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (dots become underscores, upper-cased)
    3. YAML config
    4. Default value

    Args:
        key: The configuration key
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_key_for(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default

def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Convenience Functions ---

def get_huggingface_api_token() -> Optional[str]:
    """Gets the Hugging Face API token (HUGGINGFACE_API_TOKEN, then HF_API_TOKEN)."""
    token = get_config('huggingface.api_token') or get_config('hf.api_token')
    return str(token) if token else None

def get_huggingface_options() -> HuggingFaceOptions:
    """Assembles validated client options from configuration.

    Raises:
        ConfigurationError: If a configured value is of the wrong type or out of range.
    """
    token = get_huggingface_api_token()
    if not token:
        logger.warning("No Hugging Face API token configured (HUGGINGFACE_API_TOKEN). Requests will fail authentication.")
    try:
        return HuggingFaceOptions(
            api_token=token or "",
            base_url=str(get_config('huggingface.base_url', DEFAULT_BASE_URL)),
            summarization_model=str(get_config('huggingface.summarization_model', DEFAULT_SUMMARIZATION_MODEL)),
            requests_per_minute=int(get_config('huggingface.requests_per_minute', 30)),
            timeout_seconds=float(get_config('huggingface.timeout_seconds', 30)),
            max_retry_attempts=int(get_config('huggingface.max_retry_attempts', 3)),
            base_retry_delay_ms=int(get_config('huggingface.base_retry_delay_ms', 1000)),
            circuit_failure_threshold=int(get_config('huggingface.circuit_failure_threshold', 5)),
            circuit_break_seconds=float(get_config('huggingface.circuit_break_seconds', 30)),
            user_agent=str(get_config('huggingface.user_agent', DEFAULT_USER_AGENT)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid Hugging Face configuration: {e}") from e

def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {sorted(config_dict)}")

def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
