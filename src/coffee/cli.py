"""CLI for the coffee shop."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn

from coffee.aot.contract import contract_from_repository
from coffee.aot.processor import process_all
from coffee.aot.validator import ContractCoverage, validate_all
from coffee.api.rest.app import create_app
from coffee.config import CoffeeConfig, load_config
from coffee.infra import REPOSITORIES
from coffee.server.wire import build_database, build_services

app = typer.Typer(help="Coffee shop CLI")
aot_app = typer.Typer(help="Build-time repository query processing")
app.add_typer(aot_app, name="aot")

ConfigOption = typer.Option(None, "--config", help="Path to config YAML")


@app.command("init-db")
def init_db(config: Optional[str] = ConfigOption) -> None:
    """Create the schema and load the seed data when enabled."""
    cfg = _load(config)
    database = build_database(cfg)
    database.dispose()
    typer.echo(f"Initialized {cfg.database_url}")


@app.command()
def serve(config: Optional[str] = ConfigOption) -> None:
    """Run the REST API."""
    cfg = _load(config)
    services = build_services(build_database(cfg))
    uvicorn.run(create_app(services), host=cfg.server.host, port=cfg.server.port, log_level=cfg.logging.level.lower())


@aot_app.command("process")
def process(config: Optional[str] = ConfigOption) -> None:
    """Prepare every repository query and write the metadata artifacts."""
    written = process_command(config)
    for path in written:
        typer.echo(f"Wrote {path}")


@aot_app.command("validate")
def validate(config: Optional[str] = ConfigOption) -> None:
    """Check that every custom repository method was processed."""
    results = validate_command(config)
    for result in results:
        if result.ok:
            typer.echo(f"OK   {result.contract.name}")
        else:
            typer.echo(f"FAIL {result.error}", err=True)
    if not all(result.ok for result in results):
        raise typer.Exit(code=1)


def process_command(config: Optional[str] = None) -> List[Path]:
    cfg = _load(config)
    return process_all(REPOSITORIES, cfg.aot_output_dir)


def validate_command(config: Optional[str] = None) -> List[ContractCoverage]:
    cfg = _load(config)
    contracts = [contract_from_repository(repository) for repository in REPOSITORIES]
    return validate_all(contracts, cfg.aot_output_dir)


def _load(config: Optional[str]) -> CoffeeConfig:
    cfg = load_config(config)
    logging.basicConfig(level=cfg.logging.level, format=cfg.logging.format)
    return cfg
