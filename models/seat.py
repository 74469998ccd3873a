# models/seat.py

from dataclasses import dataclass, replace

from models.seat_category import SeatCategory


@dataclass(frozen=True)
class Seat:
    id: str  # row letter + seat number, e.g. "C7"
    row: int
    number: int
    category: SeatCategory
    is_available: bool = True

    def with_availability(self, is_available: bool) -> "Seat":
        return replace(self, is_available=is_available)


@dataclass(frozen=True)
class BookedSeat:
    row: int
    seat: int
    category_id: str = ""


@dataclass(frozen=True)
class SelectedSeat:
    id: str
    row: int
    seat: int
    category: SeatCategory

    @classmethod
    def from_seat(cls, seat: Seat) -> "SelectedSeat":
        return cls(id=seat.id, row=seat.row, seat=seat.number, category=seat.category)
