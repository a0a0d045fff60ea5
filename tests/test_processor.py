from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, List

import pytest

from coffee.aot.contract import contract_from_repository
from coffee.aot.errors import CoverageGapError
from coffee.aot.metadata import load_metadata, metadata_location
from coffee.aot.processor import method_signature, process_all, process_repository
from coffee.aot.validator import validate
from coffee.domain.models import Coffee
from coffee.infra.coffee_repository import CoffeeRepository
from coffee.infra.database import Database
from coffee.infra.repository import CrudRepository, query


class TypoCoffeeRepository(CrudRepository[Coffee, int]):
    table = "coffee"
    entity = Coffee

    def find_by_naame(self, name: str) -> List[Coffee]:
        ...

    @query("SELECT * FROM coffee WHERE naame = :name")
    def find_by_bad_column(self, name: str) -> List[Coffee]:
        ...

    @query("SELECT * FROM coffee WHERE name = :coffee_name")
    def find_by_unbound_parameter(self, name: str) -> List[Coffee]:
        ...

    @query("SELECT * FROM coffee WHERE name = :name")
    def find_by_name(self, name: str) -> List[Coffee]:
        ...

    def save(self, entity: Coffee) -> Coffee:
        return super().save(entity)


@pytest.fixture
def schema() -> Iterator[Database]:
    database = Database("sqlite://")
    database.initialize(seed=False)
    yield database
    database.dispose()


def test_process_repository_records_every_query_method(schema: Database) -> None:
    metadata = process_repository(CoffeeRepository, schema)
    assert metadata.name == "coffee.infra.CoffeeRepository"
    assert [method.name for method in metadata.methods] == [
        "find_by_name_containing_ignore_case",
        "find_by_size_and_price_greater_than",
        "find_affordable_coffees_by_size",
    ]
    affordable = metadata.methods[2]
    assert affordable.signature.endswith(
        "coffee.infra.coffee_repository.CoffeeRepository.find_affordable_coffees_by_size(builtins.str,decimal.Decimal)"
    )
    assert affordable.query is not None
    assert affordable.query["query"] == (
        "SELECT * FROM coffee WHERE size = :size AND price <= :max_price ORDER BY price DESC"
    )


def test_process_repository_skips_methods_that_do_not_prepare(schema: Database, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="coffee.aot.processor"):
        metadata = process_repository(TypoCoffeeRepository, schema)

    assert [method.name for method in metadata.methods] == ["find_by_name"]
    messages = " ".join(record.getMessage() for record in caplog.records)
    assert "find_by_naame: no query attached" in messages
    assert "find_by_bad_column: query does not prepare" in messages
    assert "find_by_unbound_parameter: query parameters ['coffee_name']" in messages


def test_skipped_methods_fail_validation(tmp_path: Path) -> None:
    process_all([TypoCoffeeRepository], tmp_path)
    contract = contract_from_repository(TypoCoffeeRepository)
    with pytest.raises(CoverageGapError) as excinfo:
        validate(contract, metadata_location(tmp_path, contract))
    assert excinfo.value.missing == [
        "find_by_naame(str)",
        "find_by_bad_column(str)",
        "find_by_unbound_parameter(str)",
    ]


def test_process_all_writes_json_artifacts(tmp_path: Path) -> None:
    written = process_all([CoffeeRepository], tmp_path)
    expected = tmp_path / "coffee" / "infra" / "CoffeeRepository.json"
    assert written == [expected]
    payload = json.loads(expected.read_text(encoding="utf-8"))
    assert payload["module"] == "SQLALCHEMY"
    assert len(payload["methods"]) == 3
    assert load_metadata(expected).methods[0].name == "find_by_name_containing_ignore_case"


def test_method_signature_shape() -> None:
    signature = method_signature(
        "coffee.infra.coffee_repository.CoffeeRepository",
        "find_by_size_and_price_greater_than",
        CoffeeRepository.find_by_size_and_price_greater_than,
    )
    assert signature == (
        "def List[coffee.domain.models.Coffee] "
        "coffee.infra.coffee_repository.CoffeeRepository.find_by_size_and_price_greater_than"
        "(coffee.domain.models.Size,decimal.Decimal)"
    )
