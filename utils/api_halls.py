# utils/api_halls.py


import logging
from typing import Any, Dict, List

from models.halls import Hall, SpecialSeat
from models.seat_category import SeatCategory

logger = logging.getLogger("utils.api_halls")


def convert_api_seat_category(category_data: dict) -> SeatCategory:
    """Convert API seat category data to SeatCategory object"""
    price = category_data.get("price")
    default_price = category_data.get("defaultPrice")
    if default_price is None:
        default_price = price if price is not None else 0

    return SeatCategory(
        id=str(category_data["id"]),
        name=category_data.get("name", str(category_data["id"])),
        default_price=default_price,
        color=category_data.get("color", "bg-gray-500"),
        price=price,
    )


def convert_api_special_seat(special_data: dict) -> SpecialSeat:
    """Convert API special seat data; accepts both 'categoryId' and 'category' keys"""
    category_id = special_data.get("categoryId") or special_data.get("category")
    if not category_id:
        raise ValueError(f"Special seat without category: {special_data}")
    return SpecialSeat(
        row=int(special_data["row"]),
        seat=int(special_data["seat"]),
        category_id=str(category_id),
    )


def convert_api_hall(hall_data: dict) -> Hall:
    """
    Convert API hall (screen) data to Hall object.

    Overrides outside the hall bounds and repeated coordinates are dropped
    with a warning instead of failing the whole hall.
    """
    hall_id = hall_data.get("id") or hall_data.get("_id")
    name = hall_data.get("name") or hall_data.get("hallName") or ""
    rows = max(1, int(hall_data.get("rows") or 1))
    seats_per_row = max(1, int(hall_data.get("seatsPerRow") or 1))

    categories = [
        convert_api_seat_category(category_data)
        for category_data in hall_data.get("seatCategories", [])
    ]

    special_seats = []
    seen = set()
    for special_data in hall_data.get("specialSeats", []):
        try:
            special = convert_api_special_seat(special_data)
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Hall {name}: dropping special seat entry {special_data}: {e}")
            continue
        if not (1 <= special.row <= rows and 1 <= special.seat <= seats_per_row):
            logger.warning(
                f"Hall {name}: dropping special seat ({special.row}, {special.seat}) outside {rows}x{seats_per_row}"
            )
            continue
        if special.key in seen:
            logger.warning(
                f"Hall {name}: dropping repeated special seat ({special.row}, {special.seat})"
            )
            continue
        seen.add(special.key)
        special_seats.append(special)

    declared_capacity = hall_data.get("totalCapacity")
    if declared_capacity is not None and int(declared_capacity) != rows * seats_per_row:
        logger.warning(
            f"Hall {name}: totalCapacity {declared_capacity} does not match {rows}x{seats_per_row}, recomputing"
        )

    hall = Hall(
        id=str(hall_id) if hall_id is not None else "",
        name=name,
        rows=rows,
        seats_per_row=seats_per_row,
        seat_categories=categories,
        special_seats=special_seats,
    )
    logger.debug(f"Converted hall: {hall}")
    return hall


def convert_hall_to_api(hall: Hall) -> Dict[str, Any]:
    """Convert a Hall to the payload of the screen update endpoint"""
    categories: List[Dict[str, Any]] = []
    for category in hall.seat_categories:
        categories.append(
            {
                "id": category.id,
                "name": category.name,
                "defaultPrice": float(category.default_price),
                "color": category.color,
            }
        )

    return {
        "action": "updateScreen",
        "name": hall.name,
        "rows": hall.rows,
        "seatsPerRow": hall.seats_per_row,
        "totalCapacity": hall.total_capacity,
        "seatCategories": categories,
        "specialSeats": [
            {"row": special.row, "seat": special.seat, "categoryId": special.category_id}
            for special in hall.special_seats
        ],
    }
