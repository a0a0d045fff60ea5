from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List

import pytest

from coffee.aot.contract import (
    CRUD_CONTRACT,
    DeclaredMethod,
    RepositoryContract,
    contract_from_repository,
    overrides_base,
)
from coffee.domain.models import Coffee, Size
from coffee.infra.coffee_repository import CoffeeRepository
from coffee.infra.repository import CrudRepository


def test_crud_contract_uses_type_variables() -> None:
    methods = {(method.name, method.param_types) for method in CRUD_CONTRACT.methods}
    assert ("save", ("T",)) in methods
    assert ("find_by_id", ("ID",)) in methods
    assert ("save_all", ("Iterable",)) in methods
    assert ("delete_all", ()) in methods
    assert CRUD_CONTRACT.type_variables == frozenset({"T", "ID"})


def test_contract_from_repository_lists_own_methods_in_order() -> None:
    contract = contract_from_repository(CoffeeRepository)
    assert contract.name == "CoffeeRepository"
    assert contract.package == "coffee.infra"
    assert contract.qualified_name == "coffee.infra.CoffeeRepository"
    assert list(contract.methods) == [
        DeclaredMethod("find_by_name_containing_ignore_case", ("str",)),
        DeclaredMethod("find_by_size_and_price_greater_than", ("Size", "Decimal")),
        DeclaredMethod("find_affordable_coffees_by_size", ("str", "Decimal")),
    ]


def test_contract_from_repository_includes_crud_overrides() -> None:
    class OverridingRepository(CrudRepository[Coffee, int]):
        def save(self, entity: Coffee) -> Coffee:
            return entity

        def find_cheap(self, sizes: Iterable[Size], limit: Decimal) -> List[Coffee]:
            return []

    contract = contract_from_repository(OverridingRepository)
    assert list(contract.methods) == [
        DeclaredMethod("save", ("Coffee",)),
        DeclaredMethod("find_cheap", ("Iterable", "Decimal")),
    ]


def test_overrides_base_treats_type_variables_as_wildcards() -> None:
    assert overrides_base(DeclaredMethod("save", ("Coffee",)), CRUD_CONTRACT)
    assert overrides_base(DeclaredMethod("exists_by_id", ("int",)), CRUD_CONTRACT)
    assert overrides_base(DeclaredMethod("delete_all", ()), CRUD_CONTRACT)


def test_overrides_base_requires_matching_parameters() -> None:
    assert not overrides_base(DeclaredMethod("save", ("Coffee", "bool")), CRUD_CONTRACT)
    assert not overrides_base(DeclaredMethod("find_by_name", ("str",)), CRUD_CONTRACT)


def test_overrides_base_with_explicit_base_table() -> None:
    base = RepositoryContract(
        name="CrudRepository",
        package="",
        methods=(DeclaredMethod("deleteAll", ()), DeclaredMethod("deleteAll", ("Iterable",))),
    )
    assert overrides_base(DeclaredMethod("deleteAll", ()), base)
    assert overrides_base(DeclaredMethod("deleteAll", ("Iterable",)), base)
    assert not overrides_base(DeclaredMethod("deleteAll", ("List",)), base)


if TYPE_CHECKING:
    from coffee.domain.models import OrderItem


def test_unresolvable_annotation_names_the_method() -> None:
    class TaggedRepository(CrudRepository[Coffee, int]):
        def find_by_item(self, item: OrderItem) -> List[Coffee]:
            raise NotImplementedError

    with pytest.raises(ValueError, match="TaggedRepository.find_by_item"):
        contract_from_repository(TaggedRepository)
