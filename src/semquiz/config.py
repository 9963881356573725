# src/semquiz/config.py
"""Configuration loading utilities for semquiz.

This module provides configuration loading that can be used by:
- CLI commands
- Applications hosting semquiz as a library

It handles:
- Finding and loading semquiz.yaml config files
- Loading .env files for provider credentials
- Building Settings objects from multiple sources
- Creating SemQuiz instances from configuration
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from semquiz.exceptions import ConfigurationError

if TYPE_CHECKING:
    from semquiz.semquiz import SemQuiz
    from semquiz.settings import Settings

# Default paths
DEFAULT_DATA_DIR = "./semquiz_data"
CONFIG_FILES = ["semquiz.yaml", "semquiz.yml", ".semquizrc"]
ENV_FILE = ".env"


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            if key not in os.environ:
                os.environ[key] = value.strip().strip("'\"")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a configuration file in start_dir or its parents.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "api_base",
    "model_prefix",
    "data_dir",
    "settings",
}

VALID_SETTINGS_KEYS = {
    "default_model",
    "default_metric",
    "metric",  # alias
    "default_question_count",
    "question_count",  # alias
    "embedding_timeout",
    "num_retries",
    "session_ttl_seconds",
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")
    elif settings is not None:
        warnings.append("The 'settings' section must be a mapping")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Could not read config file {config_path}: {e}",
            {"path": str(config_path)},
        ) from e

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping",
            {"path": str(config_path)},
        )
    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from SEMQUIZ_* environment variables.

    Returns only values that are explicitly set, so that env vars override
    YAML settings without resetting them to defaults.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    if os.environ.get("SEMQUIZ_DEFAULT_MODEL"):
        result["default_model"] = os.environ["SEMQUIZ_DEFAULT_MODEL"]
    if os.environ.get("SEMQUIZ_DEFAULT_METRIC"):
        result["default_metric"] = os.environ["SEMQUIZ_DEFAULT_METRIC"]
    if (val := _safe_int(os.environ.get("SEMQUIZ_DEFAULT_QUESTION_COUNT"))) is not None:
        result["default_question_count"] = val
    if (fval := _safe_float(os.environ.get("SEMQUIZ_EMBEDDING_TIMEOUT"))) is not None:
        result["embedding_timeout"] = fval
    if (val := _safe_int(os.environ.get("SEMQUIZ_NUM_RETRIES"))) is not None:
        result["num_retries"] = val
    if "SEMQUIZ_SESSION_TTL_SECONDS" in os.environ:
        raw = os.environ["SEMQUIZ_SESSION_TTL_SECONDS"].strip().lower()
        if raw in ("", "none", "never"):
            result["session_ttl_seconds"] = None
        elif (fval := _safe_float(raw)) is not None:
            result["session_ttl_seconds"] = fval

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    result: dict[str, Any] = {}
    yaml_settings = config.get("settings", {}) or {}
    if not isinstance(yaml_settings, dict):
        return result

    key_mappings = {
        "default_model": "default_model",
        "default_metric": "default_metric",
        "metric": "default_metric",  # alias
        "default_question_count": "default_question_count",
        "question_count": "default_question_count",  # alias
        "embedding_timeout": "embedding_timeout",
        "num_retries": "num_retries",
        "session_ttl_seconds": "session_ttl_seconds",
    }

    for yaml_key, settings_key in key_mappings.items():
        if yaml_key in yaml_settings:
            result[settings_key] = yaml_settings[yaml_key]

    return result


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build a Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Raises:
        ConfigurationError: If a setting has an invalid value
    """
    from pydantic import ValidationError

    from semquiz.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    merged = {**yaml_settings, **env_settings}
    try:
        return Settings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}", {"settings": merged}) from e


@dataclass
class SemQuizConfig:
    """Configuration for creating a SemQuiz instance."""

    data_dir: str
    settings: Settings
    api_base: str | None = None
    model_prefix: str | None = None


def get_semquiz_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> SemQuizConfig | ConfigError:
    """Get configuration for creating a SemQuiz instance.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        SemQuizConfig with all settings, or ConfigError if invalid
    """
    try:
        config = load_config(config_path)
        settings = build_settings(config)
    except ConfigurationError as e:
        return ConfigError(
            message=e.message,
            suggestion="Check semquiz.yaml and SEMQUIZ_* environment variables",
        )

    effective_data_dir = (
        data_dir
        or os.environ.get("SEMQUIZ_DATA_DIR")
        or config.get("data_dir")
        or DEFAULT_DATA_DIR
    )
    api_base = os.environ.get("SEMQUIZ_API_BASE") or config.get("api_base")
    model_prefix = os.environ.get("SEMQUIZ_MODEL_PREFIX") or config.get("model_prefix")

    return SemQuizConfig(
        data_dir=str(effective_data_dir),
        settings=settings,
        api_base=api_base,
        model_prefix=model_prefix,
    )


def create_semquiz(config: SemQuizConfig) -> SemQuiz:
    """Create a SemQuiz instance from configuration."""
    from semquiz.configuration import LiteLLMProvider, LocalStorage
    from semquiz.semquiz import SemQuiz

    provider_kwargs: dict[str, Any] = {}
    if config.api_base:
        provider_kwargs["api_base"] = config.api_base
    if config.model_prefix is not None:
        provider_kwargs["model_prefix"] = config.model_prefix

    return SemQuiz(
        provider=LiteLLMProvider(**provider_kwargs),
        storage=LocalStorage(config.data_dir),
        settings=config.settings,
    )


def get_semquiz(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> SemQuiz | ConfigError:
    """Create a SemQuiz instance based on configuration.

    Combines get_semquiz_config and create_semquiz.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        Configured SemQuiz instance, or ConfigError if configuration is invalid
    """
    config = get_semquiz_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_semquiz(config)
