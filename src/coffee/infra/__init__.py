"""Relational data access."""

from coffee.infra.coffee_repository import CoffeeRepository
from coffee.infra.database import Database
from coffee.infra.order_repository import OrderItemRepository, OrderRepository
from coffee.infra.repository import CrudRepository, query

REPOSITORIES = (CoffeeRepository, OrderRepository, OrderItemRepository)

__all__ = [
    "REPOSITORIES",
    "CoffeeRepository",
    "CrudRepository",
    "Database",
    "OrderItemRepository",
    "OrderRepository",
    "query",
]
