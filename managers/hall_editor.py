# managers/hall_editor.py


import copy
import logging
from typing import Any, Callable, Dict, List, Optional

from managers.seat_matrix import generate_hall_seats
from managers.selection_tracker import SelectionFlow, SelectionMode, SelectionTracker
from models.halls import Hall, SpecialSeat
from models.seat import Seat, SelectedSeat
from models.seat_category import SeatCategory, category_id_from_name
from seat_validator import HallValidator, ValidationMessage
from utils.api_halls import convert_hall_to_api


def _default_save(hall_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    from backend.update_hall import update_hall

    return update_hall(hall_id, payload)


class HallEditor:
    """
    Hall configuration editing: dimensions, categories, prices and per-seat
    category assignment. Works on a copy of the hall until it is saved.
    """

    def __init__(
        self,
        hall: Hall,
        save_hall: Callable[[str, Dict[str, Any]], Dict[str, Any]] = _default_save,
        mode: SelectionMode = SelectionMode.MULTI,
    ):
        self.hall = copy.deepcopy(hall)
        self.save_hall = save_hall
        self.dirty = False
        self.tracker = SelectionTracker(SelectionFlow.EDITOR, mode)
        self.logger = logging.getLogger("hall_editor")
        self._refresh()

    def _refresh(self):
        self.tracker.set_layout(self.layout())

    def layout(self) -> List[Seat]:
        return generate_hall_seats(self.hall)

    @property
    def selected(self) -> List[SelectedSeat]:
        return self.tracker.selected

    def set_mode(self, mode: SelectionMode):
        self.tracker.mode = mode

    def set_dimensions(self, rows: int, seats_per_row: int) -> List[SpecialSeat]:
        """
        Resize the hall. Overrides and selected seats outside the new
        bounds are dropped.

        Returns:
            The pruned special seats
        """
        pruned = self.hall.resize(rows, seats_per_row)
        self._refresh()
        self.dirty = True
        self.logger.info(
            f"{self.hall.name}: resized to {self.hall.rows}x{self.hall.seats_per_row} "
            f"({self.hall.total_capacity} seats)"
        )
        return pruned

    def toggle_seat(self, seat_id: str) -> List[SelectedSeat]:
        return self.tracker.toggle_id(seat_id)

    def reset_selection(self):
        self.tracker.clear()

    def assign_category(self, category_id: str) -> List[SpecialSeat]:
        if self.hall.find_category(category_id) is None:
            raise ValueError(f"Unknown seat category '{category_id}'")
        if not self.tracker.selected:
            return self.hall.special_seats

        self.tracker.assign_category(self.hall.special_seats, category_id)
        self._refresh()
        self.dirty = True
        return self.hall.special_seats

    def add_category(
        self,
        name: str,
        default_price,
        color: str = "bg-gray-500",
        category_id: Optional[str] = None,
    ) -> SeatCategory:
        if not name.strip():
            raise ValueError("Category name is required")
        category = SeatCategory(
            id=category_id or category_id_from_name(name),
            name=name.strip(),
            default_price=default_price,
            color=color,
        )
        if self.hall.find_category(category.id) is not None:
            raise ValueError(f"Seat category '{category.id}' already exists")

        self.hall.seat_categories.append(category)
        self.dirty = True
        self.logger.info(f"{self.hall.name}: added category {category}")
        return category

    def remove_category(self, category_id: str) -> List[SpecialSeat]:
        """
        Remove a category. Seats that used it go back to the default category.

        Returns:
            The special seats that were dropped with it
        """
        if self.hall.find_category(category_id) is None:
            raise ValueError(f"Unknown seat category '{category_id}'")
        if len(self.hall.seat_categories) == 1:
            raise ValueError("A hall needs at least one seat category")

        self.hall.seat_categories = [
            category for category in self.hall.seat_categories if category.id != category_id
        ]
        dropped = [s for s in self.hall.special_seats if s.category_id == category_id]
        self.hall.special_seats = [
            s for s in self.hall.special_seats if s.category_id != category_id
        ]
        self._refresh()
        self.dirty = True
        return dropped

    def set_price(self, category_id: str, price) -> SeatCategory:
        category = self.hall.find_category(category_id)
        if category is None:
            raise ValueError(f"Unknown seat category '{category_id}'")
        if price < 0:
            raise ValueError("Seat category price must be positive")

        category.default_price = price
        self._refresh()
        self.dirty = True
        return category

    def validate(self) -> List[ValidationMessage]:
        return HallValidator().validate_hall(self.hall)

    def to_payload(self) -> Dict[str, Any]:
        return convert_hall_to_api(self.hall)

    def save(self) -> Dict[str, Any]:
        validator = HallValidator()
        validator.validate_hall(self.hall)
        if validator.has_errors():
            raise ValueError(f"Hall {self.hall.name} has configuration errors")

        response = self.save_hall(self.hall.id, self.to_payload())
        self.dirty = False
        self.logger.info(f"Saved hall {self.hall}")
        return response
