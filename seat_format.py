# seat_format.py


from collections import Counter
from typing import Iterable, List, Optional

from managers.seat_matrix import group_seats_by_row
from models.halls import Hall
from models.seat import Seat, SelectedSeat
from models.seat_category import SeatCategory
from models.showtime import Showtime
from models.ticket import Ticket
from utils.seat_utils import row_letter

BOOKED_MARK = "XX"
SELECTED_MARK = "**"


def _category_marks(categories: List[SeatCategory]) -> dict:
    """Two-letter mark per category, taken from its name"""
    marks = {}
    used = set()
    for category in categories:
        base = "".join(ch for ch in category.name.upper() if ch.isalnum()) or category.id.upper()
        mark = base[:2].ljust(2, ".")
        suffix = 1
        while mark in used or mark in (BOOKED_MARK, SELECTED_MARK):
            mark = f"{base[:1]}{suffix}"
            suffix += 1
        used.add(mark)
        marks[category.id] = mark
    return marks


def format_seat_layout(
    seats: List[Seat],
    categories: List[SeatCategory],
    selected_ids: Optional[Iterable[str]] = None,
) -> str:
    """Format a seat grid as text, one line per row, screen on top"""
    selected = set(selected_ids or [])
    marks = _category_marks(categories)
    grouped = group_seats_by_row(seats)
    seats_per_row = max((len(row) for row in grouped.values()), default=0)
    label_width = max((len(row_letter(row)) for row in grouped), default=1)

    output = []
    width = label_width + 1 + seats_per_row * 3
    output.append("SCREEN".center(width))
    output.append("-" * width)
    output.append(" " * (label_width + 1) + "".join(f"{n:>2} " for n in range(1, seats_per_row + 1)))

    for row, row_seats in grouped.items():
        cells = []
        for seat in row_seats:
            if seat.id in selected:
                cells.append(SELECTED_MARK)
            elif not seat.is_available:
                cells.append(BOOKED_MARK)
            else:
                cells.append(marks.get(seat.category.id, "??"))
        output.append(f"{row_letter(row):>{label_width}} " + " ".join(cells))

    output.append("")
    output.append(format_category_legend(categories, marks))
    output.append(f"{BOOKED_MARK} = booked   {SELECTED_MARK} = selected")
    return "\n".join(output)


def format_category_legend(categories: List[SeatCategory], marks: Optional[dict] = None) -> str:
    marks = marks or _category_marks(categories)
    return "   ".join(
        f"{marks[category.id]} = {category.name} ({category.effective_price})"
        for category in categories
    )


def format_hall_layout(hall: Hall, seats: List[Seat], selected_ids=None) -> str:
    header = f"{hall.name}: {hall.rows} rows x {hall.seats_per_row} seats ({hall.total_capacity} total)"
    return header + "\n" + format_seat_layout(seats, hall.seat_categories, selected_ids)


def format_booking_summary(showtime: Showtime, selected: List[SelectedSeat], total) -> str:
    """Format the seats and total of a booking before payment"""
    output = []
    output.append("=" * 50)
    output.append("BOOKING SUMMARY")
    output.append("=" * 50)
    output.append(f"Show: {showtime.show_name}")
    output.append(f"Theater: {showtime.theater}")
    output.append(f"Hall: {showtime.hall.name}")
    when = showtime.date.isoformat() if showtime.date else "-"
    output.append(f"Date: {when} {', '.join(showtime.start_times)}")
    output.append(f"Status: {showtime.status.value}")
    output.append("-" * 50)

    if not selected:
        output.append("No seats selected")
    for seat in selected:
        output.append(f"  {seat.id:<6} {seat.category.name:<20} {seat.category.effective_price:>10}")

    counts = Counter(seat.category.name for seat in selected)
    if counts:
        output.append("-" * 50)
        output.append(", ".join(f"{count} x {name}" for name, count in counts.items()))
    output.append(f"Total: {total}")
    output.append("=" * 50)
    return "\n".join(output)


def format_tickets(tickets: List[Ticket], title: str = "TICKETS") -> str:
    output = [title, "-" * len(title)]
    if not tickets:
        output.append("No tickets found")
    for ticket in tickets:
        output.append(
            f"{ticket.id}: {ticket.movie_title} | {ticket.theater} - {ticket.location} | "
            f"{ticket.showtime.strftime('%Y-%m-%d %I:%M %p')} | {', '.join(ticket.seats)} | "
            f"{ticket.status.value} | {ticket.total_amount}"
        )
    return "\n".join(output)


def print_hall_statistics(hall: Hall, seats: List[Seat]):
    """Print seat counts per category and availability"""
    by_category = Counter(seat.category.name for seat in seats)
    booked = len([seat for seat in seats if not seat.is_available])

    print("\n" + "=" * 50)
    print("HALL STATISTICS")
    print("=" * 50)
    print(f"Total Seats: {hall.total_capacity}")
    print(f"Booked Seats: {booked}")
    print(f"Available Seats: {len(seats) - booked}")
    for name, count in by_category.items():
        print(f"{name}: {count}")
    print("=" * 50)
