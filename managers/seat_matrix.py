# managers/seat_matrix.py


import logging
from collections import OrderedDict
from typing import Dict, List, Optional

from models.halls import DEFAULT_CATEGORY_ID, Hall, SpecialSeat
from models.seat import Seat
from models.seat_category import SeatCategory
from utils.seat_utils import make_seat_id

logger = logging.getLogger("seat_matrix")


def resolve_default_category(categories: List[SeatCategory]) -> SeatCategory:
    """Category with id "regular", else the first one"""
    if not categories:
        raise ValueError("At least one seat category is required")
    for category in categories:
        if category.id == DEFAULT_CATEGORY_ID:
            return category
    return categories[0]


class CategoryLookup:
    """Typed category-id lookup with an explicit fallback for unknown ids"""

    def __init__(self, categories: List[SeatCategory]):
        self.default = resolve_default_category(categories)
        self._by_id: Dict[str, SeatCategory] = {}
        for category in categories:
            # first definition wins, same as the layout renderer
            self._by_id.setdefault(category.id, category)

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._by_id

    def get(self, category_id: Optional[str]) -> Optional[SeatCategory]:
        if category_id is None:
            return None
        return self._by_id.get(category_id)

    def resolve(self, category_id: Optional[str]) -> SeatCategory:
        category = self.get(category_id)
        if category is None:
            if category_id is not None:
                logger.debug(
                    f"Unknown category id '{category_id}', falling back to '{self.default.id}'"
                )
            return self.default
        return category


def generate_seat_matrix(
    rows: int,
    seats_per_row: int,
    special_seats: List[SpecialSeat],
    categories: List[SeatCategory],
) -> List[Seat]:
    """
    Build the full seat grid of a hall.

    Args:
        rows: Number of rows (clamped to at least 1)
        seats_per_row: Seats in each row (clamped to at least 1)
        special_seats: Per-seat category overrides
        categories: Seat categories of the hall, must not be empty

    Returns:
        rows * seats_per_row seats in row-major order, all available
    """
    rows = max(1, int(rows))
    seats_per_row = max(1, int(seats_per_row))
    lookup = CategoryLookup(categories)

    # first override per coordinate wins
    overrides: Dict[tuple, str] = {}
    for special in special_seats:
        overrides.setdefault((special.row, special.seat), special.category_id)

    seats = []
    for row in range(1, rows + 1):
        for number in range(1, seats_per_row + 1):
            category = lookup.resolve(overrides.get((row, number)))
            seats.append(
                Seat(
                    id=make_seat_id(row, number),
                    row=row,
                    number=number,
                    category=category,
                    is_available=True,
                )
            )

    logger.debug(f"Generated {len(seats)} seats for a {rows}x{seats_per_row} layout")
    return seats


def generate_hall_seats(hall: Hall) -> List[Seat]:
    return generate_seat_matrix(
        hall.rows, hall.seats_per_row, hall.special_seats, hall.seat_categories
    )


def group_seats_by_row(seats: List[Seat]) -> "OrderedDict[int, List[Seat]]":
    """Group a flat seat list by row, keeping row-major order"""
    grouped: "OrderedDict[int, List[Seat]]" = OrderedDict()
    for seat in seats:
        grouped.setdefault(seat.row, []).append(seat)
    return grouped

