"""Composition root for the coffee shop server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from coffee.config import CoffeeConfig
from coffee.domain.models import Order, OrderRequest, OrderStatus, OrderWithItems
from coffee.infra.coffee_repository import CoffeeRepository
from coffee.infra.database import Database
from coffee.infra.order_repository import OrderItemRepository, OrderRepository
from coffee.usecases.create_order import create_order
from coffee.usecases.update_order_status import update_order_status


@dataclass
class ServiceBundle:
    database: Database
    coffees: CoffeeRepository
    orders: OrderRepository
    order_items: OrderItemRepository

    def create_order(self, request: OrderRequest) -> OrderWithItems:
        return create_order(self.database, self.coffees, self.orders, self.order_items, request)

    def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        return update_order_status(self.orders, order_id, status)

    def order_with_items(self, order_id: int) -> Optional[OrderWithItems]:
        order = self.orders.find_by_id(order_id)
        if order is None:
            return None
        return OrderWithItems(order=order, items=self.order_items.find_by_order_id(order_id))


def build_services(database: Database) -> ServiceBundle:
    return ServiceBundle(
        database=database,
        coffees=CoffeeRepository(database),
        orders=OrderRepository(database),
        order_items=OrderItemRepository(database),
    )


def build_database(config: CoffeeConfig) -> Database:
    database = Database(config.database_url)
    database.initialize(seed=config.database.seed)
    return database
