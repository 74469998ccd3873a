# models/showtime.py

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Union

from models.halls import Hall
from models.seat import BookedSeat


class ShowtimeStatus(Enum):
    AVAILABLE = "available"
    HIGH_DEMAND = "high demand"
    SOLD_OUT = "sold out"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (ShowtimeStatus.SOLD_OUT, ShowtimeStatus.CANCELLED)


@dataclass
class Theater:
    id: str
    name: str
    location: str = ""
    phone: Optional[Union[str, int]] = None

    def __str__(self):
        return f"{self.name} - {self.location}" if self.location else self.name


@dataclass
class Showtime:
    id: str
    theater: Theater
    hall: Hall
    show_name: str
    date: Optional[date]
    start_times: List[str]
    status: ShowtimeStatus
    booked_seats: List[BookedSeat] = field(default_factory=list)
    held_seats: List[BookedSeat] = field(default_factory=list)  # pending checkouts
    end_time: Optional[str] = None
    total_seats: Optional[int] = None
    available_seats: Optional[int] = None
    genre: List[str] = field(default_factory=list)
    image_url: Optional[str] = None

    @property
    def start_time(self) -> Optional[str]:
        return self.start_times[0] if self.start_times else None

    @property
    def is_bookable(self) -> bool:
        return not self.status.is_terminal

    def __str__(self):
        when = self.date.isoformat() if self.date else "no date"
        return f"{self.show_name} @ {self.theater.name} / {self.hall.name} ({when} {self.start_time or ''})".strip()
