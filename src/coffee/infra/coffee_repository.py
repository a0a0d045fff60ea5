"""Coffee repository."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from coffee.domain.models import Coffee, Size
from coffee.infra.repository import CrudRepository, query


class CoffeeRepository(CrudRepository[Coffee, int]):
    table = "coffee"
    entity = Coffee

    @query(
        """
        SELECT * FROM coffee
        WHERE UPPER(name) LIKE '%' || UPPER(:name) || '%'
        ORDER BY id
        """
    )
    def find_by_name_containing_ignore_case(self, name: str) -> List[Coffee]:
        ...

    @query(
        """
        SELECT * FROM coffee
        WHERE size = :size AND price > :price
        ORDER BY id
        """
    )
    def find_by_size_and_price_greater_than(self, size: Size, price: Decimal) -> List[Coffee]:
        ...

    @query(
        """
        SELECT * FROM coffee
        WHERE size = :size
        AND price <= :max_price
        ORDER BY price DESC
        """
    )
    def find_affordable_coffees_by_size(self, size: str, max_price: Decimal) -> List[Coffee]:
        ...
