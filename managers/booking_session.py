# managers/booking_session.py


import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from backend.errors import ApiError, SeatUnavailableError
from managers.booking_reconciler import (
    BookingValidationError,
    compute_total,
    resolve_availability,
    validate_submission,
)
from managers.seat_matrix import generate_hall_seats
from managers.selection_tracker import SelectionFlow, SelectionMode, SelectionTracker
from models.booking import BookingRecord, Order, PaymentResult
from models.seat import Seat, SelectedSeat
from models.showtime import Showtime
from utils.api_bookings import convert_booking_to_api, selection_to_booking_lines


class BookingState(Enum):
    NO_SELECTION = "no selection"
    SELECTING = "selecting"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class RequestTracker:
    """Hands out increasing request tokens; only the latest one may apply its response"""

    def __init__(self):
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def next_token(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


def _default_fetch(show_id: str, show_date: Optional[date]) -> Showtime:
    from backend.get_showtime import get_showtime

    return get_showtime(show_id, show_date)


def _default_create(payload: Dict[str, Any]) -> Order:
    from backend.post_booking import create_booking

    return create_booking(payload)


def _default_confirm(result: PaymentResult) -> BookingRecord:
    from backend.post_booking import confirm_payment

    return confirm_payment(result)


class BookingSession:
    """
    Seat booking for one showtime.

    Owns the seat layout, the selection and the submission state of a single
    booking interaction. Network access goes through the injected
    collaborators so the flow can run against any backend.
    """

    def __init__(
        self,
        show_id: str,
        user_id: Optional[str] = None,
        fetch_showtime: Callable[[str, Optional[date]], Showtime] = _default_fetch,
        create_booking: Callable[[Dict[str, Any]], Order] = _default_create,
        confirm_payment: Callable[[PaymentResult], BookingRecord] = _default_confirm,
        today: Optional[date] = None,
    ):
        self.show_id = show_id
        self.user_id = user_id
        self.fetch_showtime = fetch_showtime
        self.create_booking = create_booking
        self.confirm_payment_call = confirm_payment
        self.today = today

        self.showtime: Optional[Showtime] = None
        self.seats: List[Seat] = []
        self.selected_date: Optional[date] = None
        self.selected_time: Optional[str] = None
        self.state = BookingState.NO_SELECTION
        self.order: Optional[Order] = None
        self.confirmation: Optional[BookingRecord] = None
        self.last_error: Optional[Exception] = None

        self.requests = RequestTracker()
        self.tracker = SelectionTracker(SelectionFlow.BOOKING, SelectionMode.MULTI)
        self.logger = logging.getLogger("booking_session")

    # Loading

    def begin_fetch(self) -> int:
        return self.requests.next_token()

    def apply_showtime(self, token: int, showtime: Showtime) -> bool:
        """
        Apply a fetched showtime if it answers the latest request.

        Returns:
            False when the response was superseded and discarded
        """
        if not self.requests.is_current(token):
            self.logger.debug(
                f"Discarding stale showtime response {token} (latest is {self.requests.latest})"
            )
            return False

        self.showtime = showtime
        self.seats = resolve_availability(
            generate_hall_seats(showtime.hall), showtime.booked_seats, showtime.held_seats
        )
        dropped = self.tracker.set_layout(self.seats)
        dropped += self.tracker.drop_unavailable()
        if dropped:
            self.logger.info(
                f"Removed {len(dropped)} seats that are no longer available: "
                f"{', '.join(s.id for s in dropped)}"
            )
        self._sync_selection_state(keep_rejected=True)
        return True

    def load(self, show_date: Optional[date] = None) -> Showtime:
        """Fetch the showtime and its booked seats for the selected date"""
        if show_date is not None:
            self.selected_date = show_date
        token = self.begin_fetch()
        try:
            showtime = self.fetch_showtime(self.show_id, self.selected_date)
        except ApiError as e:
            if self.requests.is_current(token):
                self.last_error = e
            raise

        self.apply_showtime(token, showtime)
        return self.showtime

    def select_date(self, show_date: date) -> Showtime:
        """Change the performance date; the selection and total start over"""
        self.selected_date = show_date
        self._reset_selection()
        return self.load()

    def select_time(self, start_time: str) -> Showtime:
        self.selected_time = start_time
        self._reset_selection()
        return self.load()

    # Selection

    @property
    def selected(self) -> List[SelectedSeat]:
        return self.tracker.selected

    @property
    def total(self):
        return compute_total(self.tracker.selected)

    def toggle_seat(self, seat_id: str) -> List[SelectedSeat]:
        if self.state in (BookingState.SUBMITTING, BookingState.CONFIRMED):
            self.logger.warning(f"Ignoring seat {seat_id}: booking is {self.state.value}")
            return self.selected

        selection = self.tracker.toggle_id(seat_id)
        self._sync_selection_state()
        return selection

    @property
    def last_rejection(self) -> Optional[str]:
        return str(self.last_error) if self.last_error is not None else None

    # Submission

    def submit(self) -> Order:
        """
        Validate the selection and create the booking order.

        Raises:
            BookingValidationError: rejected locally, nothing was sent
            SeatUnavailableError: a seat was taken meanwhile; the booked
                seats have been re-fetched and the taken seats deselected
            SubmissionError: the backend rejected the booking
        """
        if self.state in (BookingState.SUBMITTING, BookingState.CONFIRMED):
            raise ValueError(f"Booking is already {self.state.value}")

        try:
            validate_submission(
                self.tracker.selected,
                self.selected_date,
                self.selected_time,
                self.showtime,
                today=self.today,
            )
        except BookingValidationError as e:
            self._reject(e)
            raise

        payload = convert_booking_to_api(
            self.showtime,
            selection_to_booking_lines(self.tracker.selected),
            self.user_id,
            self.selected_date,
        )
        self.state = BookingState.SUBMITTING
        self.logger.info(
            f"Submitting {len(self.tracker)} seats for {self.showtime.show_name}, total {self.total}"
        )

        try:
            order = self.create_booking(payload)
        except SeatUnavailableError as e:
            self._reject(e)
            self.logger.warning(f"Seat conflict on submission, refreshing booked seats: {e}")
            self._refresh_after_conflict()
            raise
        except ApiError as e:
            self._reject(e)
            raise

        self.order = order
        self.last_error = None
        return order

    def confirm_payment(self, result: PaymentResult) -> BookingRecord:
        """
        Confirm the payment of the pending order.

        A failed confirmation leaves the booking unconfirmed; it may be retried.
        """
        if self.order is None or self.state != BookingState.SUBMITTING:
            raise ValueError("There is no pending booking to pay for")

        try:
            confirmation = self.confirm_payment_call(result)
        except ApiError as e:
            self.last_error = e
            self.logger.error(f"Payment confirmation failed for order {self.order.id}: {e}")
            raise

        self.confirmation = confirmation
        self.state = BookingState.CONFIRMED
        self.last_error = None
        self.tracker.clear()
        self.logger.info(f"Booking confirmed for order {self.order.id}")
        return confirmation

    # Internals

    def _reject(self, error: Exception):
        self.state = BookingState.REJECTED
        self.last_error = error
        self.logger.info(f"Booking rejected: {error}")

    def _refresh_after_conflict(self):
        conflict = self.last_error
        try:
            self.load()
        except ApiError as e:
            self.last_error = conflict
            self.logger.error(f"Could not refresh booked seats after conflict: {e}")

    def _reset_selection(self):
        self.tracker.clear()
        self.order = None
        if self.state != BookingState.CONFIRMED:
            self.state = BookingState.NO_SELECTION

    def _sync_selection_state(self, keep_rejected: bool = False):
        if self.state in (BookingState.SUBMITTING, BookingState.CONFIRMED):
            return
        # a rejection stays visible until the user changes the selection
        if keep_rejected and self.state == BookingState.REJECTED:
            return
        self.state = BookingState.SELECTING if self.tracker.selected else BookingState.NO_SELECTION
