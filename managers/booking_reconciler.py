# managers/booking_reconciler.py


import logging
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from models.seat import BookedSeat, Seat, SelectedSeat
from models.showtime import Showtime

logger = logging.getLogger("booking_reconciler")


class RejectionReason(Enum):
    MISSING_DATE = "Please select a date."
    INVALID_DATE = "The selected date is no longer available."
    MISSING_TIME = "Please select a show time."
    INVALID_TIME = "The selected time is not offered for this show."
    NO_SHOWTIME = "No showtime has been chosen."
    NO_SEATS = "Please select at least one seat."
    SHOW_UNAVAILABLE = "show unavailable."

    @property
    def message(self) -> str:
        return self.value


class BookingValidationError(Exception):
    """Booking rejected locally, before any network call"""

    def __init__(self, reason: RejectionReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = reason.message if not detail else f"{reason.message} ({detail})"
        super().__init__(message)


def _coordinates(seats: Optional[Iterable[BookedSeat]]) -> Set[Tuple[int, int]]:
    return {(s.row, s.seat) for s in seats or []}


def resolve_availability(
    seats: List[Seat],
    booked_seats: List[BookedSeat],
    held_seats: Optional[List[BookedSeat]] = None,
    own_seat_ids: Optional[Iterable[str]] = None,
) -> List[Seat]:
    """
    Mark every booked or held seat as unavailable.

    Args:
        seats: Generated seat matrix
        booked_seats: Seats already booked for the showtime
        held_seats: Seats in another user's pending checkout
        own_seat_ids: Seats the current user already owns (booking
            modification); they stay selectable

    Returns:
        New list of seats with resolved availability
    """
    taken = _coordinates(booked_seats) | _coordinates(held_seats)
    own = set(own_seat_ids or [])

    resolved = []
    unavailable = 0
    for seat in seats:
        is_available = (seat.row, seat.number) not in taken or seat.id in own
        if not is_available:
            unavailable += 1
        resolved.append(seat.with_availability(is_available))

    logger.debug(f"Resolved availability: {unavailable}/{len(seats)} seats unavailable")
    return resolved


def compute_total(selected_seats: List[SelectedSeat]):
    """Sum of the seat prices of the selection, 0 when nothing is selected"""
    total = 0
    for selected in selected_seats:
        price = selected.category.effective_price
        if isinstance(price, Decimal) and not isinstance(total, Decimal):
            total = Decimal(str(total))
        elif isinstance(total, Decimal) and not isinstance(price, Decimal):
            price = Decimal(str(price))
        total += price
    return total


def validate_submission(
    selected_seats: List[SelectedSeat],
    selected_date: Optional[date],
    selected_time: Optional[str],
    showtime: Optional[Showtime],
    today: Optional[date] = None,
):
    """
    Check a booking before it is submitted.

    Raises:
        BookingValidationError: with a distinct reason for each failed check
    """
    if selected_date is None:
        raise BookingValidationError(RejectionReason.MISSING_DATE)
    if not isinstance(selected_date, date):
        raise BookingValidationError(RejectionReason.INVALID_DATE, str(selected_date))
    today = today or date.today()
    if selected_date < today:
        raise BookingValidationError(
            RejectionReason.INVALID_DATE, selected_date.isoformat()
        )

    if not selected_time:
        raise BookingValidationError(RejectionReason.MISSING_TIME)

    if showtime is None:
        raise BookingValidationError(RejectionReason.NO_SHOWTIME)

    if showtime.start_times and selected_time not in showtime.start_times:
        raise BookingValidationError(RejectionReason.INVALID_TIME, selected_time)

    if showtime.status.is_terminal:
        raise BookingValidationError(
            RejectionReason.SHOW_UNAVAILABLE, showtime.status.value
        )

    if not selected_seats:
        raise BookingValidationError(RejectionReason.NO_SEATS)
