# booking_reconciler_test.py


import unittest
from datetime import date
from decimal import Decimal

from managers.booking_reconciler import (
    BookingValidationError,
    RejectionReason,
    compute_total,
    resolve_availability,
    validate_submission,
)
from managers.seat_matrix import generate_hall_seats
from models.seat import BookedSeat, SelectedSeat
from models.seat_category import SeatCategory
from models.showtime import ShowtimeStatus
from sample_data import make_hall, make_showtime

TODAY = date(2030, 1, 10)


def selected(seat_id="A1", price=10, row=1, seat=1):
    category = SeatCategory(id="regular", name="Regular", default_price=price)
    return SelectedSeat(id=seat_id, row=row, seat=seat, category=category)


class TestResolveAvailability(unittest.TestCase):
    def setUp(self):
        self.seats = generate_hall_seats(make_hall())

    def test_booked_seat_is_unavailable(self):
        resolved = resolve_availability(self.seats, [BookedSeat(row=1, seat=2)])
        availability = {seat.id: seat.is_available for seat in resolved}

        self.assertFalse(availability["A2"])
        self.assertEqual(sum(availability.values()), 5)

    def test_held_seats_are_unavailable(self):
        resolved = resolve_availability(
            self.seats, [BookedSeat(row=1, seat=2)], held_seats=[BookedSeat(row=2, seat=3)]
        )
        unavailable = [seat.id for seat in resolved if not seat.is_available]
        self.assertEqual(unavailable, ["A2", "B3"])

    def test_own_seats_stay_available(self):
        resolved = resolve_availability(
            self.seats, [BookedSeat(1, 2), BookedSeat(1, 3)], own_seat_ids=["A3"]
        )
        unavailable = [seat.id for seat in resolved if not seat.is_available]
        self.assertEqual(unavailable, ["A2"])

    def test_input_is_not_mutated(self):
        resolve_availability(self.seats, [BookedSeat(row=1, seat=1)])
        self.assertTrue(all(seat.is_available for seat in self.seats))

    def test_booked_seat_outside_hall_is_ignored(self):
        resolved = resolve_availability(self.seats, [BookedSeat(row=9, seat=9)])
        self.assertTrue(all(seat.is_available for seat in resolved))


class TestComputeTotal(unittest.TestCase):
    def test_empty_selection(self):
        self.assertEqual(compute_total([]), 0)

    def test_n_seats_of_same_price(self):
        for n in range(1, 6):
            seats = [selected(f"A{i}", 12, 1, i) for i in range(1, n + 1)]
            self.assertEqual(compute_total(seats), n * 12)

    def test_mixed_prices(self):
        seats = generate_hall_seats(make_hall())
        picked = [SelectedSeat.from_seat(seat) for seat in seats[:3]]
        self.assertEqual(compute_total(picked), 40)

    def test_showtime_price_overrides_default(self):
        category = SeatCategory(id="vip", name="VIP", default_price=20, price=25)
        seat = SelectedSeat(id="A1", row=1, seat=1, category=category)
        self.assertEqual(compute_total([seat, seat]), 50)

    def test_decimal_prices(self):
        seats = [selected(price=Decimal("9.99")), selected("A2", 10, 1, 2)]
        self.assertEqual(compute_total(seats), Decimal("19.99"))

    def test_float_before_decimal_keeps_decimal_value(self):
        seats = [selected(price=10.1), selected("A2", Decimal("2.2"), 1, 2)]
        self.assertEqual(compute_total(seats), Decimal("12.3"))


class TestValidateSubmission(unittest.TestCase):
    def assertRejected(self, reason, *args):
        with self.assertRaises(BookingValidationError) as ctx:
            validate_submission(*args, today=TODAY)
        self.assertEqual(ctx.exception.reason, reason)
        return ctx.exception

    def test_valid_submission_passes(self):
        validate_submission([selected()], date(2030, 1, 15), "07:30 PM", make_showtime(), today=TODAY)

    def test_missing_date(self):
        self.assertRejected(RejectionReason.MISSING_DATE, [selected()], None, "07:30 PM", make_showtime())

    def test_past_date(self):
        self.assertRejected(
            RejectionReason.INVALID_DATE, [selected()], date(2030, 1, 1), "07:30 PM", make_showtime()
        )

    def test_missing_time(self):
        self.assertRejected(RejectionReason.MISSING_TIME, [selected()], date(2030, 1, 15), "", make_showtime())

    def test_time_not_offered(self):
        self.assertRejected(
            RejectionReason.INVALID_TIME, [selected()], date(2030, 1, 15), "09:00 AM", make_showtime()
        )

    def test_no_showtime(self):
        self.assertRejected(RejectionReason.NO_SHOWTIME, [selected()], date(2030, 1, 15), "07:30 PM", None)

    def test_no_seats(self):
        self.assertRejected(RejectionReason.NO_SEATS, [], date(2030, 1, 15), "07:30 PM", make_showtime())

    def test_sold_out_show(self):
        error = self.assertRejected(
            RejectionReason.SHOW_UNAVAILABLE,
            [selected()],
            date(2030, 1, 15),
            "07:30 PM",
            make_showtime(ShowtimeStatus.SOLD_OUT),
        )
        self.assertTrue(str(error).startswith("show unavailable."))

    def test_cancelled_show(self):
        self.assertRejected(
            RejectionReason.SHOW_UNAVAILABLE,
            [selected()],
            date(2030, 1, 15),
            "07:30 PM",
            make_showtime(ShowtimeStatus.CANCELLED),
        )

    def test_high_demand_is_bookable(self):
        validate_submission(
            [selected()], date(2030, 1, 15), "07:30 PM", make_showtime(ShowtimeStatus.HIGH_DEMAND), today=TODAY
        )

    def test_each_reason_has_a_distinct_message(self):
        messages = [reason.message for reason in RejectionReason]
        self.assertEqual(len(messages), len(set(messages)))
        self.assertEqual(RejectionReason.SHOW_UNAVAILABLE.message, "show unavailable.")


if __name__ == "__main__":
    unittest.main()
