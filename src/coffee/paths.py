"""Path resolution helpers for config-driven paths."""

from __future__ import annotations

from pathlib import Path


def is_absolute_like(path: str) -> bool:
    return Path(path).is_absolute() or path.startswith("~")


def resolve_path(base_dir: Path, path: str) -> Path:
    if is_absolute_like(path):
        return Path(path).expanduser().resolve()
    return (Path(base_dir) / path).resolve()


def resolve_database_url(base_dir: Path, url: str) -> str:
    """Anchor a relative SQLite file URL at ``base_dir``; other URLs pass through."""
    prefix = "sqlite:///"
    if not url.startswith(prefix):
        return url
    database = url[len(prefix) :]
    if not database or database == ":memory:" or is_absolute_like(database):
        return url
    return prefix + str(resolve_path(base_dir, database))
