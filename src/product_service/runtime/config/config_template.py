"""Configuration template substitution utilities."""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.product_service.runtime.config.config_data import ConfigData
from src.product_service.runtime.config.settings import EnvironmentVariables

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str, values: Mapping[str, str] | None = None) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message

    Variables are looked up in ``values`` when given, otherwise in os.environ.
    """
    lookup = os.environ if values is None else values

    def replacer(match: re.Match[str]) -> str:
        var_expr = match.group(1)

        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            value = lookup.get(var_name)
            return default if value in (None, "") else value

        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = lookup.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = lookup.get(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def collect_template_values(env_file: Path | None = None) -> dict[str, str]:
    """Gather the values available to config.yaml placeholders.

    Precedence, lowest first: the .env file, the process environment, and
    finally variables prefixed with the active environment name
    (``TEST_DB_HOST`` overrides ``DB_HOST`` when APP_ENVIRONMENT=test).
    """
    dotenv = EnvironmentVariables(_env_file=env_file) if env_file else EnvironmentVariables()
    values: dict[str, str] = {**dotenv.template_values, **os.environ}

    env_mode = values.get("APP_ENVIRONMENT", "development")
    prefix = f"{env_mode.upper()}_"
    overrides = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix)
    }
    if overrides:
        logger.debug("Applying {} environment overrides: {}", env_mode, sorted(overrides))
    values.update(overrides)
    return values


def load_templated_yaml(file_path: Path, values: Mapping[str, str] | None = None) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        values: Placeholder values; collected from .env and the environment when omitted

    Returns:
        Parsed YAML with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the YAML is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = f.read()

    if values is None:
        values = collect_template_values()

    substituted_content = substitute_env_vars(content, values)

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        config = ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    logger.debug("Loaded configuration for environment: {}", config.app.environment)
    return config
