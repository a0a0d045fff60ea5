"""Build-time processing of repository query methods.

Each custom method's SQL is prepared against the schema before the
application runs. Methods that cannot be prepared are left out of the
metadata artifact with a warning; the coverage validator reports them.
"""

from __future__ import annotations

import inspect
import logging
import typing
from pathlib import Path
from typing import Any, Iterable, List, Optional, Type

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from coffee.aot.contract import CRUD_CONTRACT, contract_from_repository, repository_functions, type_qualified_name
from coffee.aot.metadata import ProcessedMethod, RepositoryMetadata, write_metadata
from coffee.aot.validator import declared_methods
from coffee.infra.database import Database
from coffee.infra.repository import attached_query, bind_parameter_names

logger = logging.getLogger(__name__)


def process_repository(repository: Type[Any], database: Database) -> RepositoryMetadata:
    contract = contract_from_repository(repository)
    custom = {method.name for method in declared_methods(contract, CRUD_CONTRACT)}
    qualified_repository = f"{repository.__module__}.{repository.__qualname__}"

    methods: List[ProcessedMethod] = []
    for name, func in repository_functions(repository):
        if name not in custom:
            continue
        sql = attached_query(getattr(repository, name))
        reason = _prepare(sql, func, database)
        if reason:
            logger.warning("Skipping %s.%s: %s", repository.__name__, name, reason)
            continue
        methods.append(
            ProcessedMethod(
                name=name,
                signature=method_signature(qualified_repository, name, func),
                query={"query": _normalize_sql(sql)},
            )
        )
    logger.info("Processed %d of %d query methods in %s", len(methods), len(custom), repository.__name__)
    return RepositoryMetadata(name=contract.qualified_name, methods=methods)


def process_all(repositories: Iterable[Type[Any]], output_dir: Path) -> List[Path]:
    database = Database("sqlite://")
    try:
        database.initialize(seed=False)
        written: List[Path] = []
        for repository in repositories:
            metadata = process_repository(repository, database)
            contract = contract_from_repository(repository)
            written.append(write_metadata(output_dir, contract, metadata))
        return written
    finally:
        database.dispose()


def method_signature(declaring_type: str, name: str, func: Any) -> str:
    hints = typing.get_type_hints(func)
    parameters = list(inspect.signature(func).parameters.values())[1:]
    param_types = ",".join(type_qualified_name(hints.get(parameter.name, Any)) for parameter in parameters)
    return_type = _return_type_name(hints.get("return"))
    return f"def {return_type} {declaring_type}.{name}({param_types})"


def _prepare(sql: Optional[str], func: Any, database: Database) -> Optional[str]:
    if not sql:
        return "no query attached"
    parameter_names = set(list(inspect.signature(func).parameters)[1:])
    bind_names = bind_parameter_names(sql)
    unbound = [name for name in bind_names if name not in parameter_names]
    if unbound:
        return f"query parameters {unbound} do not match method parameters"
    try:
        with database.connect() as connection:
            connection.execute(text(f"EXPLAIN {sql.strip()}"), {name: None for name in bind_names})
    except SQLAlchemyError as exc:
        return f"query does not prepare against the schema: {exc.__cause__ or exc}"
    return None


def _return_type_name(annotation: Any) -> str:
    if annotation is None:
        return "None"
    return str(annotation).replace("typing.", "") if typing.get_origin(annotation) else type_qualified_name(annotation)


def _normalize_sql(sql: str) -> str:
    return " ".join(sql.split())
