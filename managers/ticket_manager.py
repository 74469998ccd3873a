# managers/ticket_manager.py


import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

from backend.errors import ApiError, SeatUnavailableError
from managers.booking_reconciler import (
    BookingValidationError,
    RejectionReason,
    compute_total,
    resolve_availability,
)
from managers.seat_matrix import generate_hall_seats
from managers.selection_tracker import SelectionFlow, SelectionMode, SelectionTracker
from models.booking import ModificationResult, PaymentResult
from models.seat import Seat, SelectedSeat
from models.showtime import Showtime
from models.ticket import Ticket
from utils.api_bookings import convert_modification_to_api, selection_to_booking_lines

logger = logging.getLogger("ticket_manager")

SORT_OPTIONS = ("newest", "oldest", "alphabetical")
STATUS_FILTERS = ("all", "confirmed", "pending", "canceled")


def filter_tickets(tickets: List[Ticket], query: str = "", status: str = "all") -> List[Ticket]:
    """Keep tickets whose movie title or theater contains query and whose status matches"""
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter '{status}', expected one of {STATUS_FILTERS}")
    needle = query.strip().lower()

    result = []
    for ticket in tickets:
        matches_search = needle in ticket.movie_title.lower() or needle in ticket.theater.lower()
        matches_status = status == "all" or ticket.status.value == status
        if matches_search and matches_status:
            result.append(ticket)
    return result


def sort_tickets(tickets: List[Ticket], sort_by: str = "newest") -> List[Ticket]:
    if sort_by == "oldest":
        return sorted(tickets, key=lambda t: t.booking_date)
    if sort_by == "alphabetical":
        return sorted(tickets, key=lambda t: t.movie_title.lower())
    if sort_by != "newest":
        logger.warning(f"Unknown sort option '{sort_by}', using newest first")
    return sorted(tickets, key=lambda t: t.booking_date, reverse=True)


def split_upcoming(
    tickets: List[Ticket], now: Optional[datetime] = None
) -> Tuple[List[Ticket], List[Ticket]]:
    """
    Split tickets into upcoming and past by the time of the show.

    Returns:
        Tuple of (upcoming, past), each in the input order
    """
    now = now or datetime.now()
    upcoming = [t for t in tickets if t.showtime > now]
    past = [t for t in tickets if t.showtime <= now]
    return upcoming, past


def _default_fetch(show_id: str, show_date) -> Showtime:
    from backend.get_showtime import get_showtime

    return get_showtime(show_id, show_date)


def _default_modify(booking_id: str, payload: Dict[str, Any]) -> ModificationResult:
    from backend.modify_booking import modify_booking

    return modify_booking(booking_id, payload)


def _default_confirm(booking_id: str, result: PaymentResult) -> Dict[str, Any]:
    from backend.modify_booking import confirm_modified_payment

    return confirm_modified_payment(booking_id, result)


class TicketModification:
    """Seat re-selection for an existing booking"""

    def __init__(
        self,
        ticket: Ticket,
        fetch_showtime: Callable = _default_fetch,
        modify_booking: Callable[[str, Dict[str, Any]], ModificationResult] = _default_modify,
        confirm_payment: Callable[[str, PaymentResult], Dict[str, Any]] = _default_confirm,
    ):
        if not ticket.showtime_id:
            raise ValueError("Cannot modify booking: showtime information missing")
        self.ticket = ticket
        self.fetch_showtime = fetch_showtime
        self.modify_booking = modify_booking
        self.confirm_payment_call = confirm_payment

        self.showtime: Optional[Showtime] = None
        self.seats: List[Seat] = []
        self.result: Optional[ModificationResult] = None
        self.tracker = SelectionTracker(SelectionFlow.BOOKING, SelectionMode.MULTI)

    def load(self) -> List[Seat]:
        """Fetch the showtime; the ticket's own seats stay selectable and start selected"""
        first_load = self.showtime is None
        self.showtime = self.fetch_showtime(self.ticket.showtime_id, self.ticket.showtime.date())
        self.seats = resolve_availability(
            generate_hall_seats(self.showtime.hall),
            self.showtime.booked_seats,
            self.showtime.held_seats,
            own_seat_ids=self.ticket.seats,
        )
        self.tracker.set_layout(self.seats)
        self.tracker.drop_unavailable()

        if first_load:
            for seat_id in self.ticket.seats:
                if not self.tracker.is_selected(seat_id):
                    self.tracker.toggle_id(seat_id)
        return self.seats

    @property
    def selected(self) -> List[SelectedSeat]:
        return self.tracker.selected

    def toggle_seat(self, seat_id: str) -> List[SelectedSeat]:
        return self.tracker.toggle_id(seat_id)

    def reset_selection(self):
        self.tracker.clear()

    @property
    def total(self):
        return compute_total(self.tracker.selected)

    @property
    def price_difference(self):
        """Positive when the new seats cost more than what was paid"""
        total = self.total
        paid = self.ticket.total_amount
        if isinstance(total, Decimal) or isinstance(paid, Decimal):
            return Decimal(str(total)) - Decimal(str(paid))
        return total - paid

    def submit(self) -> ModificationResult:
        if self.showtime is None:
            raise BookingValidationError(RejectionReason.NO_SHOWTIME)
        if self.showtime.status.is_terminal:
            raise BookingValidationError(
                RejectionReason.SHOW_UNAVAILABLE, self.showtime.status.value
            )
        if not self.tracker.selected:
            raise BookingValidationError(RejectionReason.NO_SEATS)

        payload = convert_modification_to_api(selection_to_booking_lines(self.tracker.selected))
        try:
            self.result = self.modify_booking(self.ticket.id, payload)
        except SeatUnavailableError:
            logger.warning(f"Seat conflict modifying booking {self.ticket.id}, refreshing seats")
            try:
                self.load()
            except ApiError as e:
                logger.error(f"Could not refresh booked seats after conflict: {e}")
            raise
        return self.result

    def confirm_payment(self, payment: PaymentResult) -> Dict[str, Any]:
        if self.result is None or not self.result.requires_payment:
            raise ValueError("This modification does not require a payment")
        return self.confirm_payment_call(self.ticket.id, payment)
