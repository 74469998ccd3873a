# models/ticket.py

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union
from decimal import Decimal


class TicketStatus(Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELED = "canceled"


@dataclass
class Ticket:
    id: str
    movie_title: str
    theater: str
    location: str
    showtime: datetime
    seats: List[str]
    status: TicketStatus
    total_amount: Union[int, float, Decimal]
    booking_date: datetime
    showtime_id: Optional[str] = None
    poster_url: str = "https://via.placeholder.com/300x400"

    def __str__(self):
        return (
            f"{self.movie_title} @ {self.theater} - {self.showtime.strftime('%Y-%m-%d %I:%M %p')} "
            f"[{', '.join(self.seats)}] {self.status.value}"
        )
