"""Domain errors."""

from __future__ import annotations


class UnknownCoffeeError(ValueError):
    def __init__(self, coffee_id: int) -> None:
        super().__init__(f"Coffee not found: {coffee_id}")
        self.coffee_id = coffee_id
