# converters_test.py


import unittest
from datetime import date, datetime
from decimal import Decimal

from models.booking import BookingLine, PaymentResult
from models.showtime import ShowtimeStatus
from models.ticket import TicketStatus
from models.user import Role
from sample_data import make_hall_data, make_showtime, make_showtime_data
from utils.api_bookings import (
    combine_showtime,
    convert_api_modification,
    convert_api_order,
    convert_api_ticket,
    convert_api_tickets,
    convert_booking_to_api,
    convert_modification_to_api,
    convert_payment_to_api,
)
from utils.api_halls import convert_api_hall, convert_api_special_seat, convert_hall_to_api
from utils.api_showtimes import convert_api_showtime, convert_api_status, convert_start_times
from utils.api_users import convert_api_user


def make_booking_data(**overrides):
    data = {
        "_id": "booking-1",
        "showtimeId": {
            "_id": "show-1",
            "showName": "Inception",
            "Date": "2030-01-15T00:00:00.000Z",
            "startTime": ["07:30 PM", "10:30 PM"],
            "image": {"url": "https://img.example.com/inception.jpg"},
        },
        "theaterId": {"_id": "theater-1", "name": "Grand Cinema", "location": "Downtown"},
        "seats": [{"seatNumber": "A1", "seatType": "VIP"}, {"seatNumber": "A3", "seatType": "Regular"}],
        "transactionStatus": "Paid",
        "totalAmount": 30,
        "bookingDate": "2030-01-02T10:15:00.000Z",
    }
    data.update(overrides)
    return data


class TestHallConverters(unittest.TestCase):
    def test_convert_hall(self):
        hall = convert_api_hall(make_hall_data())
        self.assertEqual(hall.id, "hall-1")
        self.assertEqual((hall.rows, hall.seats_per_row, hall.total_capacity), (2, 3, 6))
        self.assertEqual([c.id for c in hall.seat_categories], ["regular", "vip"])
        self.assertEqual(hall.seat_categories[1].effective_price, 20)
        self.assertEqual(hall.special_seats[0].category_id, "vip")

    def test_special_seat_accepts_both_keys(self):
        self.assertEqual(convert_api_special_seat({"row": 1, "seat": 2, "category": "vip"}).category_id, "vip")
        self.assertEqual(convert_api_special_seat({"row": 1, "seat": 2, "categoryId": "vip"}).category_id, "vip")
        with self.assertRaises(ValueError):
            convert_api_special_seat({"row": 1, "seat": 2})

    def test_invalid_overrides_are_dropped(self):
        data = make_hall_data()
        data["specialSeats"] += [
            {"row": 1, "seat": 1, "categoryId": "regular"},
            {"row": 5, "seat": 1, "categoryId": "vip"},
        ]
        with self.assertLogs("utils.api_halls", level="WARNING"):
            hall = convert_api_hall(data)
        self.assertEqual([(s.row, s.seat, s.category_id) for s in hall.special_seats], [(1, 1, "vip")])

    def test_overrides_below_one_are_dropped(self):
        data = make_hall_data()
        data["specialSeats"] = [
            {"row": 0, "seat": 1, "categoryId": "regular"},
            {"row": 2, "seat": -1, "categoryId": "vip"},
            {"row": 9, "seat": 1, "categoryId": "vip"},
            {"row": 2, "seat": 3, "categoryId": "vip"},
        ]
        with self.assertLogs("utils.api_halls", level="WARNING"):
            hall = convert_api_hall(data)
        self.assertEqual([(s.row, s.seat) for s in hall.special_seats], [(2, 3)])

    def test_hall_payload(self):
        hall = convert_api_hall(make_hall_data())
        hall.seat_categories[0].default_price = Decimal("12.50")
        payload = convert_hall_to_api(hall)

        self.assertEqual(payload["totalCapacity"], 6)
        self.assertEqual(payload["seatCategories"][0]["defaultPrice"], 12.5)
        self.assertEqual(payload["specialSeats"], [{"row": 1, "seat": 1, "categoryId": "vip"}])


class TestShowtimeConverters(unittest.TestCase):
    def test_convert_showtime(self):
        showtime = convert_api_showtime(make_showtime_data())

        self.assertEqual(showtime.id, "show-1")
        self.assertEqual(showtime.theater.name, "Grand Cinema")
        self.assertEqual(showtime.hall.name, "Hall 1")
        self.assertEqual(showtime.date, date(2030, 1, 15))
        self.assertEqual(showtime.start_times, ["07:30 PM"])
        self.assertEqual(showtime.status, ShowtimeStatus.AVAILABLE)
        self.assertEqual([(b.row, b.seat) for b in showtime.booked_seats], [(1, 2)])
        self.assertEqual(showtime.available_seats, 5)
        self.assertEqual(showtime.image_url, "https://img.example.com/inception.jpg")

    def test_status_variants(self):
        self.assertEqual(convert_api_status("avaliable"), ShowtimeStatus.AVAILABLE)
        self.assertEqual(convert_api_status("Sold Out"), ShowtimeStatus.SOLD_OUT)
        self.assertEqual(convert_api_status("sold_out"), ShowtimeStatus.SOLD_OUT)
        self.assertEqual(convert_api_status("canceled"), ShowtimeStatus.CANCELLED)
        self.assertEqual(convert_api_status("high demand"), ShowtimeStatus.HIGH_DEMAND)
        self.assertEqual(convert_api_status(None), ShowtimeStatus.AVAILABLE)

    def test_start_times(self):
        self.assertEqual(convert_start_times("07:30 PM"), ["07:30 PM"])
        self.assertEqual(convert_start_times(["01:00 PM", " ", "04:00 PM"]), ["01:00 PM", "04:00 PM"])
        self.assertEqual(convert_start_times(None), [])

    def test_booked_seats_as_ids_and_held_seats(self):
        data = make_showtime_data()
        data["bookedSeat"] = ["B3", {"seatNumber": "A3"}, {"bogus": True}]
        data["heldSeats"] = [{"row": 2, "seat": 1}]
        showtime = convert_api_showtime(data)

        self.assertEqual([(b.row, b.seat) for b in showtime.booked_seats], [(2, 3), (1, 3)])
        self.assertEqual([(b.row, b.seat) for b in showtime.held_seats], [(2, 1)])

    def test_null_and_numeric_booked_entries_are_skipped(self):
        data = make_showtime_data()
        data["bookedSeat"] = [None, 7, {"row": 1, "seat": 2}]
        with self.assertLogs("utils.api_showtimes", level="WARNING"):
            showtime = convert_api_showtime(data)
        self.assertEqual([(b.row, b.seat) for b in showtime.booked_seats], [(1, 2)])

    def test_showtime_without_hall_is_rejected(self):
        data = make_showtime_data()
        del data["screenId"]
        with self.assertRaises(ValueError):
            convert_api_showtime(data)


class TestBookingConverters(unittest.TestCase):
    def test_booking_payload(self):
        lines = [BookingLine("A1", "VIP", Decimal("20.00"), "vip")]
        payload = convert_booking_to_api(make_showtime(), lines, "user-1")

        self.assertEqual(payload["showtimeId"], "show-1")
        self.assertEqual(payload["theaterId"], "theater-1")
        self.assertEqual(payload["bookingDate"], "2030-01-15")
        self.assertEqual(
            payload["seats"],
            [{"totalSeats": 1, "seatType": "VIP", "seatNumber": "A1", "price": 20.0, "categoryId": "vip"}],
        )

    def test_modification_payload_uses_category_ids(self):
        payload = convert_modification_to_api([BookingLine("A1", "VIP", 20, "vip"), BookingLine("A2", "Regular", 10)])
        self.assertEqual(
            payload["seats"], [{"seatNumber": "A1", "seatType": "vip"}, {"seatNumber": "A2", "seatType": "regular"}]
        )

    def test_payment_payload(self):
        result = PaymentResult("pay_1", "order_1", "sig")
        self.assertEqual(
            convert_payment_to_api(result),
            {"razorpay_payment_id": "pay_1", "razorpay_order_id": "order_1", "razorpay_signature": "sig"},
        )
        self.assertEqual(convert_payment_to_api(result, "b1")["bookingId"], "b1")

    def test_order(self):
        order = convert_api_order({"id": "order_1", "amount": 34400, "currency": "INR", "key": "k"}, "b1")
        self.assertEqual((order.id, order.amount, order.booking_id), ("order_1", 34400, "b1"))

    def test_modification_result(self):
        with_order = convert_api_modification("b1", {"order": {"id": "o", "amount": 500, "currency": "INR", "key": "k"}})
        self.assertTrue(with_order.requires_payment)

        with_refund = convert_api_modification("b1", {"refund": {"amount": 1200}})
        self.assertFalse(with_refund.requires_payment)
        self.assertEqual(with_refund.refund_amount, 1200)

    def test_ticket(self):
        ticket = convert_api_ticket(make_booking_data())

        self.assertEqual(ticket.id, "booking-1")
        self.assertEqual(ticket.movie_title, "Inception")
        self.assertEqual(ticket.showtime, datetime(2030, 1, 15, 19, 30))
        self.assertEqual(ticket.seats, ["A1", "A3"])
        self.assertEqual(ticket.status, TicketStatus.CONFIRMED)
        self.assertEqual(ticket.booking_date, datetime(2030, 1, 2, 10, 15))
        self.assertEqual(ticket.showtime_id, "show-1")
        self.assertEqual(ticket.poster_url, "https://img.example.com/inception.jpg")

    def test_ticket_status_mapping(self):
        self.assertEqual(convert_api_ticket(make_booking_data(transactionStatus="Pending")).status, TicketStatus.PENDING)
        self.assertEqual(convert_api_ticket(make_booking_data(transactionStatus="Refunded")).status, TicketStatus.CANCELED)

    def test_tickets_skip_unreadable_entries(self):
        tickets = convert_api_tickets([make_booking_data(), {"seats": [{}]}])
        self.assertEqual([t.id for t in tickets], ["booking-1"])

    def test_combine_showtime(self):
        self.assertEqual(combine_showtime(date(2030, 1, 15), "10:05 AM"), datetime(2030, 1, 15, 10, 5))
        self.assertEqual(combine_showtime(date(2030, 1, 15), "late"), datetime(2030, 1, 15))
        self.assertIsNone(combine_showtime(None, "10:05 AM"))


class TestUserConverter(unittest.TestCase):
    def test_convert_user(self):
        user = convert_api_user(
            {"_id": "u1", "firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com", "role": "theaterOwner"}
        )
        self.assertEqual(user.user_id, "u1")
        self.assertEqual(user.full_name, "Ada Lovelace")
        self.assertEqual(user.role, Role.THEATER_OWNER)

    def test_unknown_role_defaults_to_user(self):
        user = convert_api_user({"id": "u2", "email": "x@example.com", "role": "superhero"})
        self.assertEqual(user.role, Role.USER)

    def test_user_without_id(self):
        with self.assertRaises(ValueError):
            convert_api_user({"email": "x@example.com"})


if __name__ == "__main__":
    unittest.main()
