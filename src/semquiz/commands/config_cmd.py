# src/semquiz/commands/config_cmd.py
"""Config command - display current configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from semquiz.commands.base import ConfigResult, SettingInfo
from semquiz.config import (
    DEFAULT_DATA_DIR,
    build_settings,
    find_config_file,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
    validate_config,
)
from semquiz.exceptions import ConfigurationError
from semquiz.providers.litellm.client import DEFAULT_API_BASE, DEFAULT_MODEL_PREFIX


def _get_setting_source(
    key: str,
    yaml_settings: dict[str, Any],
    env_settings: dict[str, Any],
) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    return "default"


def config(
    config_path: str | Path | None = None,
    data_dir: str | Path | None = None,
) -> ConfigResult:
    """Get current configuration settings.

    Args:
        config_path: Override config file path
        data_dir: Override data directory

    Returns:
        ConfigResult with all settings and their sources
    """
    try:
        file_config = load_config(config_path)
        env_settings = get_settings_from_env()
        settings = build_settings(file_config, env_settings)
    except ConfigurationError as e:
        return ConfigResult(success=False, error=e.message)
    yaml_settings = get_settings_from_yaml(file_config)

    found_config_path = Path(config_path) if config_path is not None else find_config_file()

    result = ConfigResult(success=True)
    result.config_path = str(found_config_path) if found_config_path else None
    result.warnings = validate_config(file_config, found_config_path)

    result.api_base = (
        os.environ.get("SEMQUIZ_API_BASE") or file_config.get("api_base") or DEFAULT_API_BASE
    )
    prefix = os.environ.get("SEMQUIZ_MODEL_PREFIX") or file_config.get("model_prefix")
    result.model_prefix = prefix if prefix is not None else DEFAULT_MODEL_PREFIX
    result.data_dir = str(
        data_dir
        or os.environ.get("SEMQUIZ_DATA_DIR")
        or file_config.get("data_dir")
        or DEFAULT_DATA_DIR
    )

    ttl = settings.session_ttl_seconds
    setting_keys = [
        ("default_model", settings.default_model),
        ("default_metric", settings.default_metric.value),
        ("default_question_count", str(settings.default_question_count)),
        ("embedding_timeout", str(settings.embedding_timeout)),
        ("num_retries", str(settings.num_retries)),
        ("session_ttl_seconds", str(ttl) if ttl is not None else "never"),
    ]

    for key, value in setting_keys:
        result.settings.append(
            SettingInfo(
                name=key,
                value=value,
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )

    return result
