# models/seat_category.py

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

Number = Union[int, float, Decimal]


@dataclass
class SeatCategory:
    id: str
    name: str
    default_price: Number
    color: str = "bg-gray-500"
    price: Optional[Number] = None  # showtime-specific price, when the API sends one

    def __post_init__(self):
        if not str(self.id).strip():
            raise ValueError("Seat category must have an id")
        if self.default_price < 0:
            raise ValueError("Seat category price must be positive")

    @property
    def effective_price(self) -> Number:
        return self.price if self.price is not None else self.default_price

    def __str__(self):
        return f"{self.name} ({self.effective_price})"


def category_id_from_name(name: str) -> str:
    """Derive a category id from its display name ("VIP Box" -> "vip-box")"""
    return "-".join(name.strip().lower().split())
