"""Order and order item repositories."""

from __future__ import annotations

from datetime import datetime
from typing import List

from coffee.domain.models import Order, OrderItem, OrderStatus
from coffee.infra.repository import CrudRepository, query


class OrderRepository(CrudRepository[Order, int]):
    table = "orders"
    entity = Order

    @query("SELECT * FROM orders WHERE customer_name = :customer_name ORDER BY id")
    def find_by_customer_name(self, customer_name: str) -> List[Order]:
        ...

    @query(
        """
        SELECT * FROM orders
        WHERE status = :status AND order_date > :order_date
        ORDER BY id
        """
    )
    def find_by_status_and_order_date_after(self, status: OrderStatus, order_date: datetime) -> List[Order]:
        ...

    @query(
        """
        SELECT DISTINCT o.* FROM orders o
        JOIN order_items oi ON oi.order_id = o.id
        JOIN coffee c ON c.id = oi.coffee_id
        WHERE c.name = :coffee_name
        ORDER BY o.order_date DESC
        """
    )
    def find_orders_by_coffee_name(self, coffee_name: str) -> List[Order]:
        ...


class OrderItemRepository(CrudRepository[OrderItem, int]):
    table = "order_items"
    entity = OrderItem

    @query("SELECT * FROM order_items WHERE order_id = :order_id ORDER BY id")
    def find_by_order_id(self, order_id: int) -> List[OrderItem]:
        ...

    @query(
        """
        SELECT oi.* FROM order_items oi
        JOIN coffee c ON c.id = oi.coffee_id
        WHERE oi.order_id = :order_id
        ORDER BY c.name
        """
    )
    def find_order_items_with_coffee_details(self, order_id: int) -> List[OrderItem]:
        ...
