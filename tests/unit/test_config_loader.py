"""Configuration loading tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from easycollection.config.loader import load_app_config, load_env_file
from easycollection.schemas.enums import FieldKind, StorageBackend

BASE_CONFIG = """
schema_version: "1.0.0"
storage:
  backend: "mongodb"
  uri: "mongodb://db.internal:27017"
  database: "app"
collections:
  users:
    sort: [["name", 1], ["age", -1]]
    model:
      name:
        type: "str"
        required: true
      enabled:
        type: "boolean"
        default: true
""".strip()


def _write_config(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "settings.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


def test_yaml_models_are_parsed(tmp_path: Path) -> None:
    """Collection models and sort orders come from YAML."""
    config = load_app_config(_write_config(tmp_path, BASE_CONFIG), env={})
    users = config.collections["users"]
    assert config.storage.backend == StorageBackend.MONGO
    assert users.sort == [("name", 1), ("age", -1)]
    assert users.model is not None
    assert users.model["name"].type == FieldKind.STRING
    assert users.model["enabled"].has_default


def test_cli_overrides_env_and_yaml_defaults(tmp_path: Path) -> None:
    """CLI override should have highest precedence."""
    config = load_app_config(
        _write_config(tmp_path, BASE_CONFIG),
        env={
            "EASYCOLLECTION_DATABASE": "from-env",
            "EASYCOLLECTION_MONGO_URI": "mongodb://env:27017",
        },
        cli_overrides={"database": "from-cli", "uri": None},
    )
    assert config.storage.database == "from-cli"
    assert config.storage.uri == "mongodb://env:27017"


def test_env_overrides_backend_and_log_level(tmp_path: Path) -> None:
    """Backend aliases and log levels are normalized from env."""
    config = load_app_config(
        _write_config(tmp_path, BASE_CONFIG),
        env={
            "EASYCOLLECTION_STORAGE_BACKEND": "in-memory",
            "EASYCOLLECTION_LOG_LEVEL": "debug",
        },
    )
    assert config.storage.backend == StorageBackend.MEMORY
    assert config.logging.level == "DEBUG"


def test_unknown_collection_falls_back_to_unmodelled(tmp_path: Path) -> None:
    """Collections missing from config have no model and no sort."""
    config = load_app_config(_write_config(tmp_path, BASE_CONFIG), env={})
    games = config.collection_config("games")
    assert games.model is None
    assert games.sort == []


def test_invalid_model_is_rejected(tmp_path: Path) -> None:
    """Object fields cannot carry both a model and a class tag."""
    content = """
collections:
  users:
    model:
      owner:
        type: "object"
        class: "Owner"
        model:
          name:
            type: "string"
""".strip()
    with pytest.raises(ValidationError):
        load_app_config(_write_config(tmp_path, content), env={})


def test_invalid_sort_direction_is_rejected(tmp_path: Path) -> None:
    """Sort directions are 1 or -1."""
    content = 'collections:\n  users:\n    sort: [["name", 2]]\n'
    with pytest.raises(ValidationError):
        load_app_config(_write_config(tmp_path, content), env={})


def test_unknown_log_level_is_rejected(tmp_path: Path) -> None:
    """Log levels must be known to the logging module."""
    with pytest.raises(ValidationError):
        load_app_config(
            _write_config(tmp_path, BASE_CONFIG),
            env={"EASYCOLLECTION_LOG_LEVEL": "chatty"},
        )


def test_missing_config_file_raises(tmp_path: Path) -> None:
    """A missing settings file is reported."""
    with pytest.raises(FileNotFoundError):
        load_app_config(tmp_path / "absent.yaml", env={})


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    """Settings must deserialize to a mapping."""
    with pytest.raises(ValueError):
        load_app_config(_write_config(tmp_path, "- a\n- b\n"), env={})


def test_env_file_fills_missing_overrides(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".env").write_text("EASYCOLLECTION_DATABASE=from-dotenv\n", encoding="utf-8")
    config_path = tmp_path / "settings.yaml"
    config_path.write_text(BASE_CONFIG, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EASYCOLLECTION_DATABASE", raising=False)
    monkeypatch.delenv("EASYCOLLECTION_DISABLE_DOTENV", raising=False)

    assert load_env_file() is True
    assert load_app_config(config_path).storage.database == "from-dotenv"
    monkeypatch.delenv("EASYCOLLECTION_DATABASE", raising=False)


def test_env_file_does_not_override_process_env(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".env").write_text("EASYCOLLECTION_DATABASE=from-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("EASYCOLLECTION_DATABASE", "from-shell")
    monkeypatch.delenv("EASYCOLLECTION_DISABLE_DOTENV", raising=False)

    load_env_file()

    assert os.environ["EASYCOLLECTION_DATABASE"] == "from-shell"


def test_env_file_loading_can_be_disabled(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".env").write_text("EASYCOLLECTION_DATABASE=from-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EASYCOLLECTION_DATABASE", raising=False)
    monkeypatch.setenv("EASYCOLLECTION_DISABLE_DOTENV", "1")

    assert load_env_file() is False
    assert "EASYCOLLECTION_DATABASE" not in os.environ
