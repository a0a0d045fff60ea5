"""Configuration loading for the coffee shop."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from coffee.paths import resolve_database_url, resolve_path


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///coffee.db"
    seed: bool = True


class AotConfig(BaseModel):
    output_dir: str = "build/aot"


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(8080, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CoffeeConfig(BaseModel):
    version: int = 1
    database: DatabaseConfig = DatabaseConfig()
    aot: AotConfig = AotConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()
    base_dir: Path = Field(default_factory=Path.cwd)

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError("Only version 1 config is supported")
        return value

    @property
    def database_url(self) -> str:
        return resolve_database_url(self.base_dir, self.database.url)

    @property
    def aot_output_dir(self) -> Path:
        return resolve_path(self.base_dir, self.aot.output_dir)


def load_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")
    payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    return payload or {}


def load_config(path: Optional[str] = None) -> CoffeeConfig:
    if path is None:
        return CoffeeConfig()
    config_path = Path(path)
    payload = load_yaml(config_path)
    payload.setdefault("base_dir", config_path.resolve().parent)
    return CoffeeConfig(**payload)
