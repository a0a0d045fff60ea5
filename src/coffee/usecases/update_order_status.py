"""Update order status use-case."""

from __future__ import annotations

from typing import Optional

from coffee.domain.models import Order, OrderStatus
from coffee.infra.order_repository import OrderRepository


def update_order_status(orders: OrderRepository, order_id: int, status: OrderStatus) -> Optional[Order]:
    existing = orders.find_by_id(order_id)
    if existing is None:
        return None
    return orders.save(existing.model_copy(update={"status": status}))
