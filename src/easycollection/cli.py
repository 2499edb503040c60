"""CLI for easycollection."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from easycollection.collection import Collection, create_collection
from easycollection.config import AppConfig, load_app_config
from easycollection.constants import PACKAGE_VERSION
from easycollection.schemas.enums import StorageBackend
from easycollection.security.redaction import redact_text
from easycollection.storage import create_database
from easycollection.validation import validate_against_model

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="easycollection validated document collections.",
)
console = Console()


@app.command()
def version() -> None:
    """Print the easycollection version."""
    typer.echo(PACKAGE_VERSION)


@app.command("validate-config")
def validate_config(
    config: Path | None = typer.Option(
        None, "--config", help="Path to settings.yaml override."
    ),
) -> None:
    """Validate configuration and print configured collections."""
    try:
        config_model = load_app_config(config)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Configuration validation failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title="Collections")
    table.add_column("Collection")
    table.add_column("Fields")
    table.add_column("Required")
    table.add_column("Sort")
    for name, collection in config_model.collections.items():
        model = collection.model or {}
        table.add_row(
            name,
            ", ".join(model) or "-",
            ", ".join(field for field, spec in model.items() if spec.required) or "-",
            ", ".join(f"{field}:{direction}" for field, direction in collection.sort)
            or "-",
        )
    console.print(table)


@app.command("check")
def check(
    document: Path = typer.Argument(..., help="JSON file holding one document."),
    collection: str = typer.Option(..., "--collection", help="Configured collection name."),
    update: bool = typer.Option(False, "--update", help="Validate as an update patch."),
    config: Path | None = typer.Option(None, "--config", help="Path to settings.yaml override."),
) -> None:
    """Validate a document against a collection model without touching the store."""
    try:
        cfg = load_app_config(config)
        _configure_logging(cfg)
        model = cfg.collection_config(collection).model
        if model is None:
            raise typer.BadParameter(f"Collection '{collection}' has no model configured")
        payload = orjson.loads(document.read_bytes())
        if not isinstance(payload, dict):
            raise typer.BadParameter("Document file must hold a JSON object")
    except typer.BadParameter:
        raise
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Check failed:[/red] {redact_text(str(exc))}")
        raise typer.Exit(code=1) from exc

    outcome = validate_against_model(model, payload, is_insert=not update)
    if not outcome:
        console.print(f"[red]Invalid document[/red] for collection '{collection}'")
        raise typer.Exit(code=1)
    typer.echo(orjson.dumps(outcome.document, option=orjson.OPT_INDENT_2).decode("utf-8"))


@app.command("count")
def count(
    collection: str = typer.Option(..., "--collection", help="Collection name."),
    config: Path | None = typer.Option(None, "--config", help="Path to settings.yaml override."),
    backend: str | None = typer.Option(None, "--backend", help="Storage backend override."),
    uri: str | None = typer.Option(None, "--uri", help="MongoDB URI override."),
    database: str | None = typer.Option(None, "--database", help="Database name override."),
) -> None:
    """Print the number of documents stored in a collection."""
    overrides = {"backend": backend, "uri": uri, "database": database}
    try:
        cfg = load_app_config(config, cli_overrides=overrides)
        _require_persistent_store(cfg)
        _configure_logging(cfg)
        total = asyncio.run(_count(cfg, collection))
    except typer.BadParameter:
        raise
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Count failed:[/red] {redact_text(str(exc))}")
        raise typer.Exit(code=1) from exc
    typer.echo(str(total))


@app.command("exists")
def exists(
    name: str = typer.Argument(..., help="Collection name."),
    config: Path | None = typer.Option(None, "--config", help="Path to settings.yaml override."),
    backend: str | None = typer.Option(None, "--backend", help="Storage backend override."),
    uri: str | None = typer.Option(None, "--uri", help="MongoDB URI override."),
    database: str | None = typer.Option(None, "--database", help="Database name override."),
) -> None:
    """Exit 0 when the collection exists in the store, 1 otherwise."""
    overrides = {"backend": backend, "uri": uri, "database": database}
    try:
        cfg = load_app_config(config, cli_overrides=overrides)
        _require_persistent_store(cfg)
        _configure_logging(cfg)
        found = asyncio.run(_exists(cfg, name))
    except typer.BadParameter:
        raise
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Exists check failed:[/red] {redact_text(str(exc))}")
        raise typer.Exit(code=1) from exc
    console.print(f"{name}: {'[green]exists[/green]' if found else '[yellow]missing[/yellow]'}")
    if not found:
        raise typer.Exit(code=1)


def _require_persistent_store(cfg: AppConfig) -> None:
    # A memory store starts empty in every process, so there is nothing to inspect.
    if cfg.storage.backend == StorageBackend.MEMORY:
        raise typer.BadParameter(
            "the memory backend keeps no data between runs; use --backend mongo",
            param_hint="--backend",
        )


async def _count(cfg: AppConfig, name: str) -> int:
    database = create_database(cfg.storage)
    try:
        return await create_collection(database, name, cfg).count()
    finally:
        await database.close()


async def _exists(cfg: AppConfig, name: str) -> bool:
    database = create_database(cfg.storage)
    try:
        return await Collection.exists(database, name)
    finally:
        await database.close()


def _configure_logging(cfg: AppConfig) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=cfg.logging.level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
