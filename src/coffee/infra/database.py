"""SQLAlchemy engine wrapper with schema and seed loading."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
SCHEMA_PATH = RESOURCES_DIR / "schema.sql"
DATA_PATH = RESOURCES_DIR / "data.sql"


class Database:
    def __init__(self, url: str = "sqlite://") -> None:
        self.url = url
        self.engine = _build_engine(url)
        self._active: ContextVar[Optional[Connection]] = ContextVar(f"active_connection_{id(self)}", default=None)

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Yield the connection of the enclosing transaction, or a fresh one that commits on exit."""
        active = self._active.get()
        if active is not None:
            yield active
            return
        with self.engine.begin() as connection:
            yield connection

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        active = self._active.get()
        if active is not None:
            yield active
            return
        with self.engine.begin() as connection:
            token = self._active.set(connection)
            try:
                yield connection
            finally:
                self._active.reset(token)

    def initialize(self, *, seed: bool = False) -> None:
        self.run_script(SCHEMA_PATH)
        if seed:
            self.run_script(DATA_PATH)

    def run_script(self, path: Path) -> None:
        statements = split_statements(path.read_text(encoding="utf-8"))
        with self.connect() as connection:
            for statement in statements:
                connection.execute(text(statement))
        logger.info("Executed %d statements from %s", len(statements), path.name)

    def dispose(self) -> None:
        self.engine.dispose()


def split_statements(script: str) -> List[str]:
    """Split a SQL script on ``;``, dropping ``--`` comments outside quoted text."""
    statements: List[str] = []
    current: List[str] = []
    quote: Optional[str] = None
    index = 0
    while index < len(script):
        char = script[index]
        if quote is not None:
            current.append(char)
            if char == quote:
                # a doubled quote is an escaped quote inside the literal
                if script.startswith(quote, index + 1):
                    current.append(quote)
                    index += 1
                else:
                    quote = None
        elif char in ("'", '"'):
            quote = char
            current.append(char)
        elif script.startswith("--", index):
            end = script.find("\n", index)
            index = len(script) if end == -1 else end
            continue
        elif char == ";":
            statements.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    if quote is not None:
        raise ValueError("Unterminated quoted text in SQL script")
    statements.append("".join(current))
    return [statement.strip() for statement in statements if statement.strip()]


def _build_engine(url: str) -> Engine:
    if _is_memory_url(url):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
        if engine.url.database:
            Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)
    else:
        engine = create_engine(url)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def _is_memory_url(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:", "sqlite+pysqlite://", "sqlite+pysqlite:///:memory:"}


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
