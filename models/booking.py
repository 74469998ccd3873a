# models/booking.py

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float, Decimal]


@dataclass
class BookingLine:
    """One seat of a booking submission"""

    seat_number: str  # seat id, e.g. "B4"
    seat_type: str  # category name
    price: Number
    category_id: str = ""


@dataclass
class Order:
    """Payment provider order returned by the booking submission"""

    id: str
    amount: int  # minor currency units
    currency: str
    key: str
    booking_id: Optional[str] = None


@dataclass
class PaymentResult:
    """Transaction identifiers handed back by the payment provider"""

    payment_id: str
    order_id: str
    signature: str


@dataclass
class BookingRecord:
    id: str
    showtime_id: Optional[str]
    seats: List[str]
    total_amount: Number
    status: str
    payment: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ModificationResult:
    """Outcome of changing the seats of an existing booking"""

    booking_id: str
    order: Optional[Order] = None  # extra payment required
    refund_amount: Optional[int] = None  # minor currency units

    @property
    def requires_payment(self) -> bool:
        return self.order is not None
