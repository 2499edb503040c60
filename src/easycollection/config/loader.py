"""Configuration loading and override resolution."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import find_dotenv, load_dotenv

from easycollection.config.models import AppConfig

DEFAULT_CONFIG_PATH = Path("config/settings.yaml")
DOTENV_DISABLE_VAR = "EASYCOLLECTION_DISABLE_DOTENV"

_ENV_STORAGE_OVERRIDES = {
    "EASYCOLLECTION_STORAGE_BACKEND": "backend",
    "EASYCOLLECTION_MONGO_URI": "uri",
    "EASYCOLLECTION_DATABASE": "database",
}


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Configuration file must deserialize to a mapping")
    return data


def apply_overrides(
    raw_config: dict[str, Any],
    env: Mapping[str, str],
    cli_overrides: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Apply precedence: CLI > env > YAML defaults."""
    merged = dict(raw_config)
    storage = dict(merged.get("storage") or {})
    for env_name, key in _ENV_STORAGE_OVERRIDES.items():
        if env.get(env_name):
            storage[key] = env[env_name]
    if env.get("EASYCOLLECTION_LOG_LEVEL"):
        merged["logging"] = {
            **(merged.get("logging") or {}),
            "level": env["EASYCOLLECTION_LOG_LEVEL"],
        }

    if cli_overrides:
        for key in ("backend", "uri", "database"):
            if cli_overrides.get(key):
                storage[key] = cli_overrides[key]
    if storage:
        merged["storage"] = storage
    return merged


def load_app_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Load and validate central application config."""
    active_env = os.environ if env is None else env
    raw = _load_yaml(config_path or DEFAULT_CONFIG_PATH)
    merged = apply_overrides(raw, active_env, cli_overrides)
    return AppConfig.model_validate(merged)


def load_env_file(filename: str = ".env") -> bool:
    """Export ``EASYCOLLECTION_*`` overrides from a .env file found from cwd upwards.

    Values already present in the process env win. Returns whether a file
    was loaded; setting ``EASYCOLLECTION_DISABLE_DOTENV`` turns loading off.
    """
    if os.getenv(DOTENV_DISABLE_VAR, "").strip().lower() in {"1", "true", "yes", "on"}:
        return False
    dotenv_path = find_dotenv(filename=filename, usecwd=True)
    if not dotenv_path:
        return False
    return bool(load_dotenv(dotenv_path=dotenv_path, override=False))
