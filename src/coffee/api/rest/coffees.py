"""Coffee endpoints."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import IntegrityError

from coffee.api.rest.deps import get_services
from coffee.domain.models import Coffee, CoffeeRequest, Size
from coffee.server.wire import ServiceBundle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/coffees", tags=["coffees"])


@router.get("", response_model=List[Coffee])
def get_all_coffees(services: ServiceBundle = Depends(get_services)) -> List[Coffee]:
    return services.coffees.find_all()


@router.get("/search", response_model=List[Coffee])
def search_coffees_by_name(pattern: str, services: ServiceBundle = Depends(get_services)) -> List[Coffee]:
    """Example: GET /api/coffees/search?pattern=latte"""
    return services.coffees.find_by_name_containing_ignore_case(pattern)


@router.get("/filter", response_model=List[Coffee])
def get_coffees_by_size_and_price(
    size: Size,
    min_price: Decimal = Query(..., alias="minPrice"),
    services: ServiceBundle = Depends(get_services),
) -> List[Coffee]:
    """Example: GET /api/coffees/filter?size=MEDIUM&minPrice=5.00"""
    return services.coffees.find_by_size_and_price_greater_than(size, min_price)


@router.get("/affordable", response_model=List[Coffee])
def get_affordable_coffees(
    size: Size,
    max_price: Decimal = Query(..., alias="maxPrice"),
    services: ServiceBundle = Depends(get_services),
) -> List[Coffee]:
    """Example: GET /api/coffees/affordable?size=LARGE&maxPrice=6.00"""
    return services.coffees.find_affordable_coffees_by_size(size.value, max_price)


@router.get("/{coffee_id}", response_model=Coffee)
def get_coffee_by_id(coffee_id: int, services: ServiceBundle = Depends(get_services)) -> Coffee:
    coffee = services.coffees.find_by_id(coffee_id)
    if coffee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coffee not found")
    return coffee


@router.post("", response_model=Coffee, status_code=status.HTTP_201_CREATED)
def create_coffee(request: CoffeeRequest, services: ServiceBundle = Depends(get_services)) -> Coffee:
    return services.coffees.save(Coffee(**request.model_dump()))


@router.put("/{coffee_id}", response_model=Coffee)
def update_coffee(
    coffee_id: int,
    request: CoffeeRequest,
    services: ServiceBundle = Depends(get_services),
) -> Coffee:
    if not services.coffees.exists_by_id(coffee_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coffee not found")
    return services.coffees.save(Coffee(id=coffee_id, **request.model_dump()))


@router.delete("/{coffee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_coffee(coffee_id: int, services: ServiceBundle = Depends(get_services)) -> Response:
    if not services.coffees.exists_by_id(coffee_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Coffee not found")
    try:
        services.coffees.delete_by_id(coffee_id)
    except IntegrityError as exc:
        logger.info("Coffee %s is still referenced: %s", coffee_id, exc.orig)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Coffee is referenced by existing orders",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
