"""Create order use-case."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict

from coffee.domain.errors import UnknownCoffeeError
from coffee.domain.models import Coffee, Order, OrderItem, OrderRequest, OrderStatus, OrderWithItems
from coffee.infra.coffee_repository import CoffeeRepository
from coffee.infra.database import Database
from coffee.infra.order_repository import OrderItemRepository, OrderRepository


def create_order(
    database: Database,
    coffees: CoffeeRepository,
    orders: OrderRepository,
    order_items: OrderItemRepository,
    request: OrderRequest,
) -> OrderWithItems:
    with database.transaction():
        catalog: Dict[int, Coffee] = {}
        total = Decimal("0")
        for item in request.items:
            coffee = catalog.get(item.coffee_id) or coffees.find_by_id(item.coffee_id)
            if coffee is None:
                raise UnknownCoffeeError(item.coffee_id)
            catalog[item.coffee_id] = coffee
            total += coffee.price * item.quantity

        order = orders.save(
            Order(
                customer_id=request.customer_id,
                customer_name=request.customer_name,
                order_date=datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0),
                total_amount=total,
                status=OrderStatus.PENDING,
            )
        )
        items = order_items.save_all(
            OrderItem(
                order_id=order.id,
                coffee_id=item.coffee_id,
                quantity=item.quantity,
                price=catalog[item.coffee_id].price,
            )
            for item in request.items
        )
    return OrderWithItems(order=order, items=items)
