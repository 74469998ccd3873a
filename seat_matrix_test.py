# seat_matrix_test.py


import unittest

from managers.seat_matrix import (
    CategoryLookup,
    generate_hall_seats,
    generate_seat_matrix,
    group_seats_by_row,
    resolve_default_category,
)
from models.halls import Hall, SpecialSeat
from models.seat_category import SeatCategory
from sample_data import make_categories, make_hall
from utils.seat_utils import make_seat_id, parse_seat_id, row_from_letter, row_letter


class TestSeatMatrix(unittest.TestCase):
    def test_generates_every_seat_once(self):
        for rows, seats_per_row in [(1, 1), (2, 3), (5, 7), (12, 20)]:
            seats = generate_seat_matrix(rows, seats_per_row, [], make_categories())
            ids = [seat.id for seat in seats]

            self.assertEqual(len(seats), rows * seats_per_row)
            self.assertEqual(len(set(ids)), len(ids))
            expected = [
                f"{row_letter(r)}{n}"
                for r in range(1, rows + 1)
                for n in range(1, seats_per_row + 1)
            ]
            self.assertEqual(ids, expected)

    def test_all_seats_start_available(self):
        seats = generate_seat_matrix(3, 4, [], make_categories())
        self.assertTrue(all(seat.is_available for seat in seats))

    def test_special_seat_prices(self):
        seats = generate_hall_seats(make_hall())
        prices = {seat.id: seat.category.effective_price for seat in seats}

        self.assertEqual(prices["A1"], 20)
        for seat_id in ["A2", "A3", "B1", "B2", "B3"]:
            self.assertEqual(prices[seat_id], 10)

    def test_overrides_resolve_to_their_category(self):
        specials = [
            SpecialSeat(row=2, seat=2, category_id="vip"),
            SpecialSeat(row=3, seat=1, category_id="vip"),
        ]
        seats = generate_seat_matrix(3, 3, specials, make_categories())
        vip = {seat.id for seat in seats if seat.category.id == "vip"}
        self.assertEqual(vip, {"B2", "C1"})

    def test_unknown_override_category_falls_back_to_default(self):
        specials = [SpecialSeat(row=1, seat=2, category_id="balcony")]
        seats = generate_seat_matrix(1, 3, specials, make_categories())
        self.assertEqual(seats[1].category.id, "regular")

    def test_default_is_first_category_without_regular(self):
        categories = [
            SeatCategory(id="premium", name="Premium", default_price=15),
            SeatCategory(id="vip", name="VIP", default_price=25),
        ]
        seats = generate_seat_matrix(1, 2, [], categories)
        self.assertEqual({seat.category.id for seat in seats}, {"premium"})

    def test_dimensions_below_one_are_clamped(self):
        seats = generate_seat_matrix(0, -3, [], make_categories())
        self.assertEqual([seat.id for seat in seats], ["A1"])

    def test_requires_categories(self):
        with self.assertRaises(ValueError):
            generate_seat_matrix(2, 2, [], [])

    def test_first_override_per_coordinate_wins(self):
        specials = [
            SpecialSeat(row=1, seat=1, category_id="vip"),
            SpecialSeat(row=1, seat=1, category_id="regular"),
        ]
        seats = generate_seat_matrix(1, 1, specials, make_categories())
        self.assertEqual(seats[0].category.id, "vip")

    def test_rows_past_z(self):
        seats = generate_seat_matrix(28, 1, [], make_categories())
        self.assertEqual([seat.id for seat in seats[-3:]], ["Z1", "AA1", "AB1"])

    def test_group_by_row(self):
        grouped = group_seats_by_row(generate_seat_matrix(2, 3, [], make_categories()))
        self.assertEqual(list(grouped.keys()), [1, 2])
        self.assertEqual([seat.id for seat in grouped[2]], ["B1", "B2", "B3"])


class TestCategoryLookup(unittest.TestCase):
    def test_resolve(self):
        lookup = CategoryLookup(make_categories())
        self.assertEqual(lookup.resolve("vip").id, "vip")
        self.assertEqual(lookup.resolve("missing").id, "regular")
        self.assertEqual(lookup.resolve(None).id, "regular")
        self.assertIsNone(lookup.get("missing"))
        self.assertIn("vip", lookup)

    def test_resolve_default_category(self):
        self.assertEqual(resolve_default_category(make_categories()).id, "regular")
        with self.assertRaises(ValueError):
            resolve_default_category([])


class TestSeatUtils(unittest.TestCase):
    def test_row_letters(self):
        self.assertEqual(row_letter(1), "A")
        self.assertEqual(row_letter(26), "Z")
        self.assertEqual(row_letter(27), "AA")
        self.assertEqual(row_letter(52), "AZ")
        self.assertEqual(row_letter(53), "BA")
        with self.assertRaises(ValueError):
            row_letter(0)

    def test_row_from_letter(self):
        for row in [1, 9, 26, 27, 53, 702, 703]:
            self.assertEqual(row_from_letter(row_letter(row)), row)

    def test_seat_ids(self):
        self.assertEqual(make_seat_id(3, 12), "C12")
        self.assertEqual(parse_seat_id("C12"), (3, 12))
        self.assertEqual(parse_seat_id(" aa3 "), (27, 3))
        for bad in ["", "12", "A", "A-1"]:
            with self.assertRaises(ValueError):
                parse_seat_id(bad)


class TestHall(unittest.TestCase):
    def test_capacity_follows_dimensions(self):
        hall = make_hall()
        self.assertEqual(hall.total_capacity, 6)
        hall.resize(4, 5)
        self.assertEqual(hall.total_capacity, 20)

    def test_resize_prunes_out_of_bounds_overrides(self):
        hall = make_hall(3, 3, [SpecialSeat(1, 1, "vip"), SpecialSeat(3, 3, "vip")])
        pruned = hall.resize(2, 2)

        self.assertEqual([(s.row, s.seat) for s in pruned], [(3, 3)])
        self.assertEqual([(s.row, s.seat) for s in hall.special_seats], [(1, 1)])

    def test_resize_clamps(self):
        hall = make_hall()
        hall.resize(0, 0)
        self.assertEqual((hall.rows, hall.seats_per_row), (1, 1))

    def test_rejects_invalid_halls(self):
        with self.assertRaises(ValueError):
            Hall("h", "H", 0, 3, make_categories())
        with self.assertRaises(ValueError):
            Hall("h", "H", 2, 3, [])
        with self.assertRaises(ValueError):
            Hall("h", "H", 2, 3, make_categories() + make_categories())
        with self.assertRaises(ValueError):
            Hall("h", "H", 2, 3, make_categories(), [SpecialSeat(1, 1, "vip"), SpecialSeat(1, 1, "regular")])
        with self.assertRaises(ValueError):
            Hall("h", "H", 2, 3, make_categories(), [SpecialSeat(3, 1, "vip")])
        with self.assertRaises(ValueError):
            SpecialSeat(0, 1, "vip")


if __name__ == "__main__":
    unittest.main()
