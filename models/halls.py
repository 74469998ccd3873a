# models/halls.py

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from models.seat_category import SeatCategory

DEFAULT_CATEGORY_ID = "regular"

logger = logging.getLogger("models.halls")


@dataclass
class SpecialSeat:
    row: int
    seat: int
    category_id: str

    def __post_init__(self):
        if self.row < 1 or self.seat < 1:
            raise ValueError(
                f"Special seat coordinates must be at least 1, got ({self.row}, {self.seat})"
            )

    @property
    def key(self) -> Tuple[int, int]:
        return (self.row, self.seat)


@dataclass
class Hall:
    id: str
    name: str
    rows: int
    seats_per_row: int
    seat_categories: List[SeatCategory]
    special_seats: List[SpecialSeat] = field(default_factory=list)

    def __post_init__(self):
        if self.rows < 1:
            raise ValueError("Hall must have at least 1 row")
        if self.seats_per_row < 1:
            raise ValueError("Hall must have at least 1 seat per row")
        if not self.seat_categories:
            raise ValueError("Hall must have at least one seat category")

        category_ids = [category.id for category in self.seat_categories]
        if len(category_ids) != len(set(category_ids)):
            raise ValueError(f"Duplicate seat category ids in hall {self.name}")

        seen = set()
        for special in self.special_seats:
            if special.key in seen:
                raise ValueError(
                    f"Duplicate special seat at row {special.row}, seat {special.seat}"
                )
            if not self.contains(special.row, special.seat):
                raise ValueError(
                    f"Special seat ({special.row}, {special.seat}) is outside "
                    f"the {self.rows}x{self.seats_per_row} layout of {self.name}"
                )
            seen.add(special.key)

    @property
    def total_capacity(self) -> int:
        return self.rows * self.seats_per_row

    def contains(self, row: int, seat: int) -> bool:
        return 1 <= row <= self.rows and 1 <= seat <= self.seats_per_row

    def default_category(self) -> SeatCategory:
        for category in self.seat_categories:
            if category.id == DEFAULT_CATEGORY_ID:
                return category
        return self.seat_categories[0]

    def category_lookup(self) -> Dict[str, SeatCategory]:
        return {category.id: category for category in self.seat_categories}

    def find_category(self, category_id: str) -> Optional[SeatCategory]:
        return self.category_lookup().get(category_id)

    def resize(self, rows: int, seats_per_row: int) -> List[SpecialSeat]:
        """
        Change the hall dimensions. Values below 1 are clamped to 1.

        Returns:
            The special seats that fell outside the new bounds and were pruned
        """
        self.rows = max(1, int(rows))
        self.seats_per_row = max(1, int(seats_per_row))

        kept = []
        pruned = []
        for special in self.special_seats:
            if self.contains(special.row, special.seat):
                kept.append(special)
            else:
                pruned.append(special)
        self.special_seats = kept

        if pruned:
            logger.info(
                f"Pruned {len(pruned)} special seats outside {self.rows}x{self.seats_per_row} in {self.name}"
            )
        return pruned

    def __str__(self):
        return f"{self.name} ({self.rows}x{self.seats_per_row}, {self.total_capacity} seats)"
