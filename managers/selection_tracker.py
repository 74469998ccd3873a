# managers/selection_tracker.py


import logging
from enum import Enum
from typing import Dict, List, Optional

from models.halls import SpecialSeat
from models.seat import Seat, SelectedSeat
from utils.seat_utils import make_seat_id, parse_seat_id


class SelectionMode(Enum):
    SINGLE = "single"
    MULTI = "multi"


class SelectionFlow(Enum):
    EDITOR = "editor"  # hall configuration, availability ignored
    BOOKING = "booking"  # seat booking, booked seats cannot be picked


def assign_category(
    special_seats: List[SpecialSeat],
    selection: List[SelectedSeat],
    category_id: str,
) -> List[SpecialSeat]:
    """
    Assign a category to every selected seat.

    Existing overrides are updated in place, missing ones are appended, so a
    coordinate never ends up with two overrides.

    Returns:
        The same special_seats list, updated
    """
    by_key: Dict[tuple, SpecialSeat] = {}
    for special in special_seats:
        by_key.setdefault((special.row, special.seat), special)

    for selected in selection:
        key = (selected.row, selected.seat)
        existing = by_key.get(key)
        if existing is not None:
            existing.category_id = category_id
        else:
            special = SpecialSeat(row=selected.row, seat=selected.seat, category_id=category_id)
            special_seats.append(special)
            by_key[key] = special

    return special_seats


class SelectionTracker:
    def __init__(
        self,
        flow: SelectionFlow = SelectionFlow.BOOKING,
        mode: SelectionMode = SelectionMode.MULTI,
        seats: Optional[List[Seat]] = None,
    ):
        self.flow = flow
        self.mode = mode
        self.rows = 0
        self.seats_per_row = 0
        self._layout: Dict[str, Seat] = {}
        self._selected: List[SelectedSeat] = []
        self.logger = logging.getLogger("selection_tracker")

        if seats is not None:
            self.set_layout(seats)

    @property
    def selected(self) -> List[SelectedSeat]:
        return list(self._selected)

    @property
    def selected_ids(self) -> List[str]:
        return [s.id for s in self._selected]

    def __len__(self):
        return len(self._selected)

    def is_selected(self, seat_id: str) -> bool:
        return any(s.id == seat_id for s in self._selected)

    def set_layout(self, seats: List[Seat]) -> List[SelectedSeat]:
        """
        Replace the seat layout the selection refers to.

        Selected seats that no longer exist in the new layout are dropped and
        the remaining ones pick up their current category.

        Returns:
            The selected seats that were dropped
        """
        self._layout = {seat.id: seat for seat in seats}
        self.rows = max((seat.row for seat in seats), default=0)
        self.seats_per_row = max((seat.number for seat in seats), default=0)

        kept = []
        dropped = []
        for selected in self._selected:
            seat = self._layout.get(selected.id)
            if seat is None:
                dropped.append(selected)
            else:
                kept.append(SelectedSeat.from_seat(seat))
        self._selected = kept

        if dropped:
            self.logger.debug(
                f"Dropped {len(dropped)} selected seats outside {self.rows}x{self.seats_per_row}"
            )
        return dropped

    def toggle(
        self, row: int, seat: int, mode: Optional[SelectionMode] = None
    ) -> List[SelectedSeat]:
        """
        Handle a click on a seat.

        Args:
            row: 1-based row
            seat: 1-based seat number
            mode: Selection mode to switch to before applying the click

        Returns:
            The selection after the click
        """
        if mode is not None:
            self.mode = mode

        if not (1 <= row <= self.rows and 1 <= seat <= self.seats_per_row):
            self.logger.debug(f"Ignoring click on stale seat ({row}, {seat})")
            return self.selected

        seat_id = make_seat_id(row, seat)
        layout_seat = self._layout.get(seat_id)
        if layout_seat is None:
            return self.selected

        if self.flow == SelectionFlow.BOOKING and not layout_seat.is_available:
            self.logger.debug(f"Ignoring click on unavailable seat {seat_id}")
            return self.selected

        clicked = SelectedSeat.from_seat(layout_seat)

        if self.mode == SelectionMode.SINGLE:
            self._selected = [clicked]
        elif self.is_selected(seat_id):
            self._selected = [s for s in self._selected if s.id != seat_id]
        else:
            self._selected.append(clicked)

        return self.selected

    def toggle_id(self, seat_id: str, mode: Optional[SelectionMode] = None) -> List[SelectedSeat]:
        row, seat = parse_seat_id(seat_id)
        return self.toggle(row, seat, mode)

    def assign_category(
        self, special_seats: List[SpecialSeat], category_id: str
    ) -> List[SpecialSeat]:
        """Apply category_id to the current selection and clear it"""
        if not self._selected:
            return special_seats

        assign_category(special_seats, self._selected, category_id)
        self.logger.info(f"Assigned '{category_id}' to {len(self._selected)} seats")
        self.clear()
        return special_seats

    def drop_unavailable(self) -> List[SelectedSeat]:
        """Remove selected seats the current layout marks as unavailable"""
        kept = []
        dropped = []
        for selected in self._selected:
            seat = self._layout.get(selected.id)
            if seat is not None and seat.is_available:
                kept.append(selected)
            else:
                dropped.append(selected)
        self._selected = kept
        return dropped

    def clear(self):
        self._selected = []
