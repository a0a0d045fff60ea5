"""Domain models for the coffee shop."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

CENTS = Decimal("0.01")


def _to_money(value: Any) -> Decimal:
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value).quantize(CENTS)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc


Money = Annotated[Decimal, BeforeValidator(_to_money)]


class Size(str, Enum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    READY = "READY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Coffee(BaseModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    price: Money
    size: Size


class Order(BaseModel):
    id: Optional[int] = None
    customer_id: Optional[int] = None
    customer_name: str
    order_date: datetime
    total_amount: Money
    status: OrderStatus


class OrderItem(BaseModel):
    id: Optional[int] = None
    order_id: int
    coffee_id: int
    quantity: int
    price: Money


class CoffeeRequest(BaseModel):
    name: str
    description: Optional[str] = None
    price: Money = Field(gt=0)
    size: Size


class OrderItemRequest(BaseModel):
    coffee_id: int
    quantity: int = Field(gt=0)


class OrderRequest(BaseModel):
    customer_id: Optional[int] = None
    customer_name: str
    items: List[OrderItemRequest] = Field(min_length=1)


class OrderWithItems(BaseModel):
    order: Order
    items: List[OrderItem]
