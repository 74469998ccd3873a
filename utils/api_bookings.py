# utils/api_bookings.py


import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from models.booking import BookingLine, BookingRecord, ModificationResult, Order, PaymentResult
from models.seat import SelectedSeat
from models.showtime import Showtime
from models.ticket import Ticket, TicketStatus
from utils.api_showtimes import convert_start_times, parse_api_date

logger = logging.getLogger("utils.api_bookings")

DEFAULT_POSTER_URL = "https://via.placeholder.com/300x400"
SHOWTIME_FORMAT = "%Y-%m-%d %I:%M %p"


def _json_number(value):
    return float(value) if isinstance(value, Decimal) else value


def selection_to_booking_lines(selected_seats: List[SelectedSeat]) -> List[BookingLine]:
    return [
        BookingLine(
            seat_number=selected.id,
            seat_type=selected.category.name,
            price=selected.category.effective_price,
            category_id=selected.category.id,
        )
        for selected in selected_seats
    ]


def convert_booking_to_api(
    showtime: Showtime,
    lines: List[BookingLine],
    user_id: Optional[str],
    booking_date: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Build the booking creation payload.

    Args:
        showtime: Showtime being booked
        lines: One line per selected seat
        user_id: Id of the logged in user
        booking_date: Date of the performance the seats are for

    Returns:
        JSON-ready dictionary
    """
    booking_date = booking_date or showtime.date
    return {
        "showtimeId": showtime.id,
        "seats": [
            {
                "totalSeats": 1,
                "seatType": line.seat_type,
                "seatNumber": line.seat_number,
                "price": _json_number(line.price),
                "categoryId": line.category_id,
            }
            for line in lines
        ],
        "userId": user_id,
        "theaterId": showtime.theater.id,
        "bookingDate": booking_date.isoformat() if booking_date else None,
    }


def convert_modification_to_api(lines: List[BookingLine]) -> Dict[str, Any]:
    # the modify endpoint identifies the seat type by category id
    return {
        "seats": [
            {"seatNumber": line.seat_number, "seatType": line.category_id or "regular"}
            for line in lines
        ]
    }


def convert_payment_to_api(result: PaymentResult, booking_id: Optional[str] = None) -> Dict[str, Any]:
    payload = {
        "razorpay_payment_id": result.payment_id,
        "razorpay_order_id": result.order_id,
        "razorpay_signature": result.signature,
    }
    if booking_id:
        payload["bookingId"] = booking_id
    return payload


def convert_api_order(order_data: dict, booking_id: Optional[str] = None) -> Order:
    """Convert a payment provider order; amount is in minor currency units"""
    return Order(
        id=str(order_data["id"]),
        amount=int(order_data["amount"]),
        currency=order_data.get("currency", "INR"),
        key=order_data.get("key", ""),
        booking_id=booking_id or order_data.get("bookingId") or order_data.get("receipt"),
    )


def convert_api_booking_record(booking_data: dict) -> BookingRecord:
    showtime = booking_data.get("showtimeId")
    if isinstance(showtime, dict):
        showtime = showtime.get("_id") or showtime.get("id")

    return BookingRecord(
        id=str(booking_data.get("_id") or booking_data.get("id") or ""),
        showtime_id=str(showtime) if showtime else None,
        seats=[
            seat["seatNumber"] if isinstance(seat, dict) else str(seat)
            for seat in booking_data.get("seats", [])
        ],
        total_amount=booking_data.get("totalAmount", 0),
        status=booking_data.get("transactionStatus") or booking_data.get("status") or "",
        payment=booking_data.get("payment") or {},
    )


def convert_api_modification(booking_id: str, data: dict) -> ModificationResult:
    order_data = data.get("order")
    refund = data.get("refund")
    return ModificationResult(
        booking_id=booking_id,
        order=convert_api_order(order_data, booking_id) if order_data else None,
        refund_amount=int(refund["amount"]) if isinstance(refund, dict) and "amount" in refund else None,
    )


def convert_transaction_status(status_str: Optional[str]) -> TicketStatus:
    if status_str == "Paid":
        return TicketStatus.CONFIRMED
    if status_str == "Pending":
        return TicketStatus.PENDING
    return TicketStatus.CANCELED


def parse_api_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip().replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Could not parse datetime '{value}'")
        return None
    # compare naive local datetimes everywhere
    return parsed.replace(tzinfo=None)


def combine_showtime(show_date: Optional[date], start_time: Optional[str]) -> Optional[datetime]:
    """Join a show date with a "07:30 PM" style start time"""
    if show_date is None:
        return None
    if not start_time:
        return datetime(show_date.year, show_date.month, show_date.day)
    try:
        return datetime.strptime(f"{show_date.isoformat()} {start_time}", SHOWTIME_FORMAT)
    except ValueError:
        logger.warning(f"Unrecognized start time '{start_time}', using midnight")
        return datetime(show_date.year, show_date.month, show_date.day)


def convert_api_ticket(booking_data: dict) -> Ticket:
    """Convert API booking data (with populated showtimeId / theaterId) to Ticket object"""
    showtime_data = booking_data.get("showtimeId")
    if not isinstance(showtime_data, dict):
        showtime_data = {"_id": showtime_data} if showtime_data else {}
    theater_data = booking_data.get("theaterId")
    if not isinstance(theater_data, dict):
        theater_data = {}

    start_times = convert_start_times(showtime_data.get("startTime"))
    show_datetime = combine_showtime(
        parse_api_date(showtime_data.get("Date")),
        start_times[0] if start_times else None,
    )
    booking_date = parse_api_datetime(booking_data.get("bookingDate") or booking_data.get("createdAt"))
    image = showtime_data.get("image")

    return Ticket(
        id=str(booking_data.get("_id") or booking_data.get("id")),
        movie_title=showtime_data.get("showName", ""),
        theater=theater_data.get("name", ""),
        location=theater_data.get("location", ""),
        showtime=show_datetime or booking_date or datetime.min,
        seats=[
            seat["seatNumber"] if isinstance(seat, dict) else str(seat)
            for seat in booking_data.get("seats", [])
        ],
        status=convert_transaction_status(booking_data.get("transactionStatus")),
        total_amount=booking_data.get("totalAmount", 0),
        booking_date=booking_date or show_datetime or datetime.min,
        showtime_id=str(showtime_data["_id"]) if showtime_data.get("_id") else None,
        poster_url=image.get("url") if isinstance(image, dict) and image.get("url") else DEFAULT_POSTER_URL,
    )


def convert_api_tickets(bookings_data: List[dict]) -> List[Ticket]:
    tickets = []
    for booking_data in bookings_data or []:
        try:
            tickets.append(convert_api_ticket(booking_data))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping unreadable booking {booking_data.get('_id')}: {e}")
    return tickets
