# seat_validator.py


import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List

from models.halls import DEFAULT_CATEGORY_ID, Hall
from models.showtime import Showtime
from utils.seat_utils import make_seat_id


class ValidationLevel(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass
class ValidationMessage:
    level: ValidationLevel
    message: str
    context: dict
    timestamp: datetime = field(default_factory=datetime.now)


class HallValidator:
    """Checks hall configurations and showtime seat data for suspicious values"""

    def __init__(self):
        self.logger = logging.getLogger("seat_validator")
        self.validation_messages: List[ValidationMessage] = []

    def validate_hall(self, hall: Hall) -> List[ValidationMessage]:
        """Validate a hall before it is saved or rendered"""
        self.validation_messages = []
        self._validate_categories(hall)
        self._validate_special_seats(hall)
        return self.validation_messages

    def _validate_categories(self, hall: Hall):
        category_ids = {category.id for category in hall.seat_categories}
        if DEFAULT_CATEGORY_ID not in category_ids:
            self._add_warning(
                "Hall has no 'regular' category, the first category is the default",
                {"hall": hall.name, "default": hall.seat_categories[0].id},
            )

        names = Counter(category.name.strip().lower() for category in hall.seat_categories)
        for name, count in names.items():
            if count > 1:
                self._add_warning(
                    "Several categories share the same name",
                    {"hall": hall.name, "name": name, "count": count},
                )

        for category in hall.seat_categories:
            if category.effective_price == 0:
                self._add_info(
                    "Category is free of charge",
                    {"hall": hall.name, "category": category.id},
                )

        used = {special.category_id for special in hall.special_seats}
        for category in hall.seat_categories:
            if category.id != hall.default_category().id and category.id not in used:
                self._add_info(
                    "Category is not assigned to any seat",
                    {"hall": hall.name, "category": category.id},
                )

    def _validate_special_seats(self, hall: Hall):
        category_ids = {category.id for category in hall.seat_categories}
        default_id = hall.default_category().id

        for special in hall.special_seats:
            seat_id = make_seat_id(special.row, special.seat)
            if special.category_id not in category_ids:
                self._add_error(
                    "Special seat refers to an unknown category",
                    {"hall": hall.name, "seat": seat_id, "category": special.category_id},
                )
            elif special.category_id == default_id:
                self._add_info(
                    "Special seat repeats the default category",
                    {"hall": hall.name, "seat": seat_id},
                )

    def validate_showtime(self, showtime: Showtime) -> List[ValidationMessage]:
        """Validate the booked seat data of a showtime against its hall"""
        self.validation_messages = []
        hall = showtime.hall
        self._validate_categories(hall)
        self._validate_special_seats(hall)

        seen = set()
        for booked in showtime.booked_seats:
            key = (booked.row, booked.seat)
            if not hall.contains(booked.row, booked.seat):
                self._add_warning(
                    "Booked seat is outside the hall layout",
                    {"showtime": showtime.id, "row": booked.row, "seat": booked.seat},
                )
            elif key in seen:
                self._add_warning(
                    "Seat is booked twice",
                    {"showtime": showtime.id, "seat": make_seat_id(booked.row, booked.seat)},
                )
            else:
                seen.add(key)

        if showtime.available_seats is not None:
            expected = hall.total_capacity - len(seen)
            if showtime.available_seats != expected:
                self._add_info(
                    "Reported available seats differ from the booked seat list",
                    {
                        "showtime": showtime.id,
                        "reported": showtime.available_seats,
                        "computed": expected,
                    },
                )

        if not showtime.is_bookable:
            self._add_info(
                "Showtime cannot be booked",
                {"showtime": showtime.id, "status": showtime.status.value},
            )

        if not showtime.start_times:
            self._add_error("Showtime has no start time", {"showtime": showtime.id})

        return self.validation_messages

    def has_errors(self) -> bool:
        return any(m.level == ValidationLevel.ERROR for m in self.validation_messages)

    def _add_error(self, message: str, context: dict):
        """Add error level validation message"""
        self.validation_messages.append(
            ValidationMessage(ValidationLevel.ERROR, message, context)
        )
        self.logger.error(f"{message} - Context: {context}")

    def _add_warning(self, message: str, context: dict):
        """Add warning level validation message"""
        self.validation_messages.append(
            ValidationMessage(ValidationLevel.WARNING, message, context)
        )
        self.logger.warning(f"{message} - Context: {context}")

    def _add_info(self, message: str, context: dict):
        self.validation_messages.append(
            ValidationMessage(ValidationLevel.INFO, message, context)
        )
        self.logger.info(f"{message} - Context: {context}")

    def get_validation_summary(self) -> Dict:
        """Generate summary of validation results"""
        counts = Counter(m.level for m in self.validation_messages)
        return {
            "total_messages": len(self.validation_messages),
            "errors": counts[ValidationLevel.ERROR],
            "warnings": counts[ValidationLevel.WARNING],
            "info": counts[ValidationLevel.INFO],
            "messages": [
                {
                    "level": m.level.value,
                    "message": m.message,
                    "context": m.context,
                    "timestamp": m.timestamp.isoformat(),
                }
                for m in self.validation_messages
            ],
        }
