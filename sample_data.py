# sample_data.py - builders shared by the *_test.py modules


from datetime import date, datetime
from typing import List, Optional

from models.halls import Hall, SpecialSeat
from models.seat import BookedSeat
from models.seat_category import SeatCategory
from models.showtime import Showtime, ShowtimeStatus, Theater
from models.ticket import Ticket, TicketStatus


def make_categories() -> List[SeatCategory]:
    return [
        SeatCategory(id="regular", name="Regular", default_price=10, color="bg-blue-500"),
        SeatCategory(id="vip", name="VIP", default_price=20, color="bg-yellow-500"),
    ]


def make_hall(rows: int = 2, seats_per_row: int = 3, special_seats=None) -> Hall:
    if special_seats is None:
        special_seats = [SpecialSeat(row=1, seat=1, category_id="vip")]
    return Hall(
        id="hall-1",
        name="Hall 1",
        rows=rows,
        seats_per_row=seats_per_row,
        seat_categories=make_categories(),
        special_seats=special_seats,
    )


def make_showtime(
    status: ShowtimeStatus = ShowtimeStatus.AVAILABLE,
    booked: Optional[List[BookedSeat]] = None,
    held: Optional[List[BookedSeat]] = None,
    show_date: date = date(2030, 1, 15),
    hall: Optional[Hall] = None,
) -> Showtime:
    return Showtime(
        id="show-1",
        theater=Theater(id="theater-1", name="Grand Cinema", location="Downtown"),
        hall=hall or make_hall(),
        show_name="Inception",
        date=show_date,
        start_times=["07:30 PM"],
        status=status,
        booked_seats=booked or [],
        held_seats=held or [],
    )


def make_ticket(
    ticket_id="t1",
    title="Inception",
    theater="Grand Cinema",
    status=TicketStatus.CONFIRMED,
    showtime=datetime(2030, 1, 15, 19, 30),
    booked=datetime(2030, 1, 1, 12, 0),
    seats=None,
    total=30,
) -> Ticket:
    """Ticket for A1 (VIP) and A3 (regular) of show-1 unless told otherwise"""
    return Ticket(
        id=ticket_id,
        movie_title=title,
        theater=theater,
        location="Downtown",
        showtime=showtime,
        seats=seats if seats is not None else ["A1", "A3"],
        status=status,
        total_amount=total,
        booking_date=booked,
        showtime_id="show-1",
    )


def make_hall_data() -> dict:
    """Hall as the screens endpoint returns it"""
    return {
        "_id": "hall-1",
        "name": "Hall 1",
        "rows": 2,
        "seatsPerRow": 3,
        "totalCapacity": 6,
        "seatCategories": [
            {"id": "regular", "name": "Regular", "defaultPrice": 10, "color": "bg-blue-500"},
            {"id": "vip", "name": "VIP", "defaultPrice": 20, "color": "bg-yellow-500"},
        ],
        "specialSeats": [{"row": 1, "seat": 1, "categoryId": "vip"}],
    }


def make_showtime_data() -> dict:
    """Showtime as the user showtime endpoint returns it"""
    return {
        "_id": "show-1",
        "theaterId": {"_id": "theater-1", "name": "Grand Cinema", "location": "Downtown"},
        "screenId": {
            "_id": "hall-1",
            "hallName": "Hall 1",
            "rows": 2,
            "seatsPerRow": 3,
            "seatCategories": [
                {"id": "regular", "name": "Regular", "price": 10, "color": "bg-blue-500"},
                {"id": "vip", "name": "VIP", "price": 20, "color": "bg-yellow-500"},
            ],
            "specialSeats": [{"row": 1, "seat": 1, "categoryId": "vip"}],
        },
        "showName": "Inception",
        "startTime": "07:30 PM",
        "endTime": "10:00 PM",
        "Date": "2030-01-15T00:00:00.000Z",
        "status": "avaliable",
        "totalSeats": 6,
        "avaliableSeats": 5,
        "bookedSeat": [{"row": 1, "seat": 2, "categoryId": "regular"}],
        "genre": ["Sci-Fi"],
        "image": {"publicId": "p1", "url": "https://img.example.com/inception.jpg"},
    }
