"""CRUD repository base class and the ``@query`` method decorator."""

from __future__ import annotations

import functools
import inspect
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import bindparam, text
from sqlalchemy.engine import Row

from coffee.infra.database import Database

T = TypeVar("T", bound=BaseModel)
ID = TypeVar("ID")

QUERY_ATTRIBUTE = "__query__"


def query(sql: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach literal SQL to a repository method.

    The SQL uses ``:name`` placeholders that bind to the method's parameters
    by name. The decorated method executes the statement and returns the
    rows mapped to the repository's entity.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        signature = inspect.signature(func)
        bind_names = bind_parameter_names(sql)

        @functools.wraps(func)
        def wrapper(self: CrudRepository, *args: Any, **kwargs: Any) -> List[Any]:
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            params = {
                name: bind_value(value)
                for name, value in bound.arguments.items()
                if name in bind_names
            }
            return self._select(sql, params)

        setattr(wrapper, QUERY_ATTRIBUTE, sql)
        return wrapper

    return decorator


def attached_query(func: Any) -> Optional[str]:
    return getattr(func, QUERY_ATTRIBUTE, None)


def bind_parameter_names(sql: str) -> List[str]:
    return list(text(sql).compile().params)


def bind_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(sep=" ", timespec="seconds")
    return value


class CrudRepository(Generic[T, ID]):
    table: ClassVar[str]
    entity: ClassVar[Type[BaseModel]]
    id_column: ClassVar[str] = "id"

    def __init__(self, database: Database) -> None:
        self.database = database

    def save(self, entity: T) -> T:
        values = self._values(entity)
        entity_id = getattr(entity, self.id_column)
        with self.database.connect() as connection:
            if entity_id is None:
                columns = ", ".join(values)
                placeholders = ", ".join(f":{column}" for column in values)
                result = connection.execute(
                    text(f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})"),
                    values,
                )
                return entity.model_copy(update={self.id_column: result.lastrowid})
            assignments = ", ".join(f"{column} = :{column}" for column in values)
            connection.execute(
                text(f"UPDATE {self.table} SET {assignments} WHERE {self.id_column} = :_id"),
                {**values, "_id": entity_id},
            )
        return entity

    def save_all(self, entities: Iterable[T]) -> List[T]:
        with self.database.transaction():
            return [self.save(entity) for entity in entities]

    def find_by_id(self, id: ID) -> Optional[T]:
        rows = self._select(f"SELECT * FROM {self.table} WHERE {self.id_column} = :id", {"id": id})
        return rows[0] if rows else None

    def exists_by_id(self, id: ID) -> bool:
        with self.database.connect() as connection:
            found = connection.execute(
                text(f"SELECT 1 FROM {self.table} WHERE {self.id_column} = :id"),
                {"id": id},
            ).first()
        return found is not None

    def find_all(self) -> List[T]:
        return self._select(f"SELECT * FROM {self.table} ORDER BY {self.id_column}", {})

    def find_all_by_id(self, ids: Iterable[ID]) -> List[T]:
        ids = list(ids)
        if not ids:
            return []
        statement = text(
            f"SELECT * FROM {self.table} WHERE {self.id_column} IN :ids ORDER BY {self.id_column}"
        ).bindparams(bindparam("ids", expanding=True))
        with self.database.connect() as connection:
            rows = connection.execute(statement, {"ids": ids}).all()
        return [self._to_entity(row) for row in rows]

    def count(self) -> int:
        with self.database.connect() as connection:
            return int(connection.execute(text(f"SELECT COUNT(*) FROM {self.table}")).scalar_one())

    def delete_by_id(self, id: ID) -> None:
        with self.database.connect() as connection:
            connection.execute(
                text(f"DELETE FROM {self.table} WHERE {self.id_column} = :id"),
                {"id": id},
            )

    def delete(self, entity: T) -> None:
        entity_id = getattr(entity, self.id_column)
        if entity_id is not None:
            self.delete_by_id(entity_id)

    def delete_all_by_id(self, ids: Iterable[ID]) -> None:
        with self.database.transaction():
            for entity_id in ids:
                self.delete_by_id(entity_id)

    def delete_all_entities(self, entities: Iterable[T]) -> None:
        with self.database.transaction():
            for entity in entities:
                self.delete(entity)

    def delete_all(self) -> None:
        with self.database.connect() as connection:
            connection.execute(text(f"DELETE FROM {self.table}"))

    def _select(self, sql: str, params: Dict[str, Any]) -> List[T]:
        with self.database.connect() as connection:
            rows = connection.execute(text(sql), params).all()
        return [self._to_entity(row) for row in rows]

    def _to_entity(self, row: Row) -> T:
        return self.entity.model_validate(dict(row._mapping))

    def _values(self, entity: T) -> Dict[str, Any]:
        data = entity.model_dump(exclude={self.id_column})
        return {column: bind_value(value) for column, value in data.items()}
