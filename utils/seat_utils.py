# utils/seat_utils.py

import re
from typing import Tuple

_SEAT_ID_PATTERN = re.compile(r"^([A-Z]+)(\d+)$")


def row_letter(row: int) -> str:
    """
    Get the letter label of a 1-based row.

    Rows 1..26 map to A..Z, later rows continue as AA, AB, ...

    Args:
        row: 1-based row index

    Returns:
        Row label
    """
    if row < 1:
        raise ValueError(f"Row index must be at least 1, got {row}")

    label = ""
    while row > 0:
        row, remainder = divmod(row - 1, 26)
        label = chr(65 + remainder) + label
    return label


def row_from_letter(label: str) -> int:
    """Inverse of row_letter"""
    row = 0
    for char in label.upper():
        if not "A" <= char <= "Z":
            raise ValueError(f"Invalid row label: {label}")
        row = row * 26 + (ord(char) - 64)
    return row


def make_seat_id(row: int, seat: int) -> str:
    return f"{row_letter(row)}{seat}"


def parse_seat_id(seat_id: str) -> Tuple[int, int]:
    """
    Split a seat id like "C12" into its (row, seat) coordinates.

    Returns:
        Tuple of (row, seat), both 1-based
    """
    match = _SEAT_ID_PATTERN.match(seat_id.strip().upper())
    if not match:
        raise ValueError(f"Invalid seat id: {seat_id}")
    return row_from_letter(match.group(1)), int(match.group(2))
