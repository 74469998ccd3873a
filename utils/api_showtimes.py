# utils/api_showtimes.py


import logging
from datetime import date, datetime
from typing import Any, List, Optional

from models.seat import BookedSeat
from models.showtime import Showtime, ShowtimeStatus, Theater
from utils.api_halls import convert_api_hall
from utils.seat_utils import parse_seat_id

logger = logging.getLogger("utils.api_showtimes")

# the backend spells "available" both ways
STATUS_ALIASES = {
    "avaliable": ShowtimeStatus.AVAILABLE,
    "available": ShowtimeStatus.AVAILABLE,
    "high demand": ShowtimeStatus.HIGH_DEMAND,
    "sold out": ShowtimeStatus.SOLD_OUT,
    "cancelled": ShowtimeStatus.CANCELLED,
    "canceled": ShowtimeStatus.CANCELLED,
}


def convert_api_status(status_str: Optional[str]) -> ShowtimeStatus:
    """Convert status string from API to ShowtimeStatus enum"""
    if not status_str:
        return ShowtimeStatus.AVAILABLE
    status = STATUS_ALIASES.get(" ".join(str(status_str).lower().replace("_", " ").split()))
    if status is None:
        logger.warning(f"Unknown showtime status '{status_str}', treating as available")
        return ShowtimeStatus.AVAILABLE
    return status


def parse_api_date(value: Any) -> Optional[date]:
    """Parse an ISO date or datetime string ("2025-05-01" or "2025-05-01T00:00:00.000Z")"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        logger.warning(f"Could not parse date '{value}'")
        return None


def convert_start_times(value: Any) -> List[str]:
    """startTime is sent either as a single string or as a list of strings"""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    text = str(value).strip()
    return [text] if text else []


def convert_api_booked_seat(seat_data: Any) -> BookedSeat:
    """Booked seats arrive as {row, seat} objects or as seat ids like "B4" """
    if isinstance(seat_data, str):
        row, seat = parse_seat_id(seat_data)
        return BookedSeat(row=row, seat=seat)
    if not isinstance(seat_data, dict):
        raise ValueError(f"Unrecognized booked seat: {seat_data!r}")

    if "row" in seat_data and "seat" in seat_data:
        row, seat = int(seat_data["row"]), int(seat_data["seat"])
    elif seat_data.get("seatNumber"):
        row, seat = parse_seat_id(seat_data["seatNumber"])
    else:
        raise ValueError(f"Unrecognized booked seat: {seat_data}")

    category_id = seat_data.get("categoryId") or seat_data.get("seatType") or ""
    return BookedSeat(row=row, seat=seat, category_id=str(category_id))


def convert_api_booked_seats(seats_data: Optional[list]) -> List[BookedSeat]:
    booked = []
    for seat_data in seats_data or []:
        try:
            booked.append(convert_api_booked_seat(seat_data))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping booked seat entry: {e}")
    return booked


def convert_api_theater(theater_data: Any) -> Theater:
    # unpopulated references come back as a bare id
    if not isinstance(theater_data, dict):
        return Theater(id=str(theater_data or ""), name="")
    return Theater(
        id=str(theater_data.get("_id") or theater_data.get("id") or ""),
        name=theater_data.get("name", ""),
        location=theater_data.get("location", ""),
        phone=theater_data.get("phone"),
    )


def convert_api_showtime(showtime_data: dict) -> Showtime:
    """Convert API showtime data (with populated theaterId / screenId) to Showtime object"""
    screen_data = showtime_data.get("screenId") or showtime_data.get("screen")
    if not isinstance(screen_data, dict):
        raise ValueError("Showtime data has no hall layout")

    image = showtime_data.get("image")
    available_seats = showtime_data.get("avaliableSeats", showtime_data.get("availableSeats"))
    held_data = showtime_data.get("heldSeats") or showtime_data.get("lockedSeats")

    showtime = Showtime(
        id=str(showtime_data.get("_id") or showtime_data.get("id") or ""),
        theater=convert_api_theater(showtime_data.get("theaterId") or showtime_data.get("theater")),
        hall=convert_api_hall(screen_data),
        show_name=showtime_data.get("showName", ""),
        date=parse_api_date(showtime_data.get("Date") or showtime_data.get("date")),
        start_times=convert_start_times(showtime_data.get("startTime")),
        status=convert_api_status(showtime_data.get("status")),
        booked_seats=convert_api_booked_seats(showtime_data.get("bookedSeat") or showtime_data.get("bookedSeats")),
        held_seats=convert_api_booked_seats(held_data),
        end_time=showtime_data.get("endTime"),
        total_seats=showtime_data.get("totalSeats"),
        available_seats=available_seats,
        genre=list(showtime_data.get("genre") or []),
        image_url=image.get("url") if isinstance(image, dict) else None,
    )
    logger.debug(f"Converted showtime: {showtime}")
    return showtime
