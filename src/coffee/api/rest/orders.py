"""Order endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from coffee.api.rest.deps import get_services
from coffee.domain.errors import UnknownCoffeeError
from coffee.domain.models import Order, OrderRequest, OrderStatus, OrderWithItems
from coffee.server.wire import ServiceBundle

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[Order])
def get_all_orders(services: ServiceBundle = Depends(get_services)) -> List[Order]:
    return services.orders.find_all()


@router.get("/customer/{customer_name}", response_model=List[Order])
def get_orders_by_customer(customer_name: str, services: ServiceBundle = Depends(get_services)) -> List[Order]:
    """Example: GET /api/orders/customer/Alice Johnson"""
    return services.orders.find_by_customer_name(customer_name)


@router.get("/recent", response_model=List[Order])
def get_recent_orders_by_status(
    status: OrderStatus,
    since: datetime,
    services: ServiceBundle = Depends(get_services),
) -> List[Order]:
    """Example: GET /api/orders/recent?status=PENDING&since=2024-01-01T00:00:00"""
    return services.orders.find_by_status_and_order_date_after(status, since)


@router.get("/by-coffee", response_model=List[Order])
def get_orders_by_coffee(
    coffee_name: str = Query(..., alias="coffeeName"),
    services: ServiceBundle = Depends(get_services),
) -> List[Order]:
    """Example: GET /api/orders/by-coffee?coffeeName=Cappuccino"""
    return services.orders.find_orders_by_coffee_name(coffee_name)


@router.get("/{order_id}", response_model=OrderWithItems)
def get_order_by_id(order_id: int, services: ServiceBundle = Depends(get_services)) -> OrderWithItems:
    found = services.order_with_items(order_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return found


@router.post("", response_model=OrderWithItems, status_code=201)
def create_order(request: OrderRequest, services: ServiceBundle = Depends(get_services)) -> OrderWithItems:
    try:
        return services.create_order(request)
    except UnknownCoffeeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: int,
    status: OrderStatus,
    services: ServiceBundle = Depends(get_services),
) -> Order:
    updated = services.update_order_status(order_id, status)
    if updated is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return updated


@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, services: ServiceBundle = Depends(get_services)) -> Response:
    """Order items go with the order through the foreign key cascade."""
    if not services.orders.exists_by_id(order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    services.orders.delete_by_id(order_id)
    return Response(status_code=204)
