# main.py - Seat Booking Client Entry Point

import argparse
import logging
import sys
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from backend.errors import ApiError, SeatUnavailableError
from backend.get_bookings import get_user_tickets
from backend.get_halls import get_hall
from backend.login import get_current_user_id, login, logout
from managers.booking_reconciler import BookingValidationError
from managers.booking_session import BookingSession
from managers.hall_editor import HallEditor
from managers.selection_tracker import SelectionMode
from managers.ticket_manager import (
    SORT_OPTIONS,
    STATUS_FILTERS,
    TicketModification,
    filter_tickets,
    sort_tickets,
    split_upcoming,
)
from models.booking import PaymentResult
from seat_format import (
    format_booking_summary,
    format_hall_layout,
    format_tickets,
    print_hall_statistics,
)
from utils.local_storage import THEMES, LocalStorage

LOG_FILE = "booking_client_debug.log"


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def parse_price(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Invalid price '{value}'")


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Movie Ticket Seat Booking Client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py login --email user@example.com --password secret
  python main.py layout 6650f1c2 --date 2025-06-01
  python main.py book 6650f1c2 --date 2025-06-01 --time "07:30 PM" --seats A1 A2
  python main.py edit-hall T1 H1 --rows 10 --seats-per-row 12 --assign vip --seats A1 A2 --save
  python main.py tickets --status confirmed --sort oldest
  python main.py modify 6651a0b4 --seats B3 B4
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login", help="Log in and store the token")
    login_parser.add_argument("--email", help="Defaults to the EMAIL environment variable")
    login_parser.add_argument("--password", help="Defaults to the PASSWORD environment variable")

    subparsers.add_parser("logout", help="Forget the stored token and user")

    layout_parser = subparsers.add_parser("layout", help="Show the seat layout of a showtime")
    layout_parser.add_argument("show_id")
    layout_parser.add_argument("--date", type=parse_date)

    book_parser = subparsers.add_parser("book", help="Book seats for a showtime")
    book_parser.add_argument("show_id")
    book_parser.add_argument("--date", type=parse_date, required=True)
    book_parser.add_argument("--time", help="Start time, defaults to the first one offered")
    book_parser.add_argument("--seats", nargs="+", required=True, help="Seat ids, e.g. A1 B4")
    book_parser.add_argument("--payment-id", help="Provider payment id to confirm right away")
    book_parser.add_argument("--order-id", help="Provider order id, defaults to the created order")
    book_parser.add_argument("--signature", help="Provider payment signature")

    hall_parser = subparsers.add_parser("edit-hall", help="Edit a hall configuration")
    hall_parser.add_argument("theater_id")
    hall_parser.add_argument("hall_id")
    hall_parser.add_argument("--rows", type=int)
    hall_parser.add_argument("--seats-per-row", type=int)
    hall_parser.add_argument(
        "--add-category", nargs=2, metavar=("NAME", "PRICE"), action="append", default=[]
    )
    hall_parser.add_argument("--remove-category", action="append", default=[])
    hall_parser.add_argument(
        "--price", nargs=2, metavar=("CATEGORY", "PRICE"), action="append", default=[]
    )
    hall_parser.add_argument("--assign", metavar="CATEGORY", help="Category for --seats")
    hall_parser.add_argument("--seats", nargs="+", default=[])
    hall_parser.add_argument("--save", action="store_true", help="Send the changes to the backend")

    tickets_parser = subparsers.add_parser("tickets", help="List your tickets")
    tickets_parser.add_argument("--query", default="")
    tickets_parser.add_argument("--status", choices=STATUS_FILTERS, default="all")
    tickets_parser.add_argument("--sort", choices=SORT_OPTIONS, default="newest")

    modify_parser = subparsers.add_parser("modify", help="Change the seats of one of your bookings")
    modify_parser.add_argument("booking_id")
    modify_parser.add_argument("--seats", nargs="+", required=True, help="The new seat ids")
    modify_parser.add_argument("--payment-id", help="Provider payment id for an extra charge")
    modify_parser.add_argument("--order-id", help="Provider order id, defaults to the created order")
    modify_parser.add_argument("--signature", help="Provider payment signature")

    theme_parser = subparsers.add_parser("theme", help="Show or change the theme")
    theme_parser.add_argument("theme", nargs="?", choices=THEMES + ("toggle",))

    return parser.parse_args(argv)


def setup_logging(verbose: bool = False):
    """Setup logging: everything to the debug log file, INFO and up to the console"""

    # Remove any existing handlers to prevent duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )

    file_handler = logging.FileHandler(LOG_FILE, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    loggers = [
        "backend.login",
        "backend.get_showtime",
        "backend.get_halls",
        "backend.update_hall",
        "backend.post_booking",
        "backend.get_bookings",
        "backend.modify_booking",
        "utils.api_halls",
        "utils.api_showtimes",
        "utils.api_bookings",
        "utils.local_storage",
        "seat_matrix",
        "selection_tracker",
        "booking_reconciler",
        "booking_session",
        "hall_editor",
        "ticket_manager",
        "seat_validator",
    ]
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = True

    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)


def run_login(args) -> int:
    login(args.email, args.password)
    print("Logged in")
    return 0


def run_logout(args) -> int:
    logout()
    print("Logged out")
    return 0


def run_layout(args) -> int:
    session = BookingSession(args.show_id)
    showtime = session.load(args.date)
    print(showtime)
    print(format_hall_layout(showtime.hall, session.seats))
    print_hall_statistics(showtime.hall, session.seats)
    return 0


def run_book(args) -> int:
    logger = logging.getLogger("main")
    session = BookingSession(args.show_id, user_id=get_current_user_id())
    showtime = session.select_date(args.date)
    session.select_time(args.time or showtime.start_time or "")

    for seat_id in args.seats:
        before = len(session.selected)
        session.toggle_seat(seat_id)
        if len(session.selected) == before:
            print(f"Seat {seat_id} is not available")

    print(format_hall_layout(session.showtime.hall, session.seats, [s.id for s in session.selected]))
    print(format_booking_summary(session.showtime, session.selected, session.total))

    try:
        order = session.submit()
    except BookingValidationError as e:
        print(f"Booking rejected: {e}")
        return 1
    except SeatUnavailableError as e:
        print(f"Booking rejected: {e}")
        print(f"Still selected after refresh: {', '.join(s.id for s in session.selected) or 'none'}")
        return 1

    print(f"Order {order.id}: {order.amount / 100:.2f} {order.currency}")
    logger.info(f"Created order {order.id} for booking {order.booking_id}")

    if not args.payment_id:
        print("Complete the payment with the provider, then confirm it with --payment-id")
        return 0

    record = session.confirm_payment(
        PaymentResult(
            payment_id=args.payment_id,
            order_id=args.order_id or order.id,
            signature=args.signature or "",
        )
    )
    print(f"Booking {record.id} confirmed: {', '.join(record.seats)} ({record.status})")
    return 0


def run_edit_hall(args) -> int:
    editor = HallEditor(get_hall(args.theater_id, args.hall_id))

    if args.rows is not None or args.seats_per_row is not None:
        pruned = editor.set_dimensions(
            args.rows if args.rows is not None else editor.hall.rows,
            args.seats_per_row if args.seats_per_row is not None else editor.hall.seats_per_row,
        )
        if pruned:
            print(f"Removed {len(pruned)} special seats outside the new layout")

    for name, price in args.add_category:
        editor.add_category(name, parse_price(price))
    for category_id, price in args.price:
        editor.set_price(category_id, parse_price(price))
    for category_id in args.remove_category:
        editor.remove_category(category_id)

    if args.seats:
        editor.set_mode(SelectionMode.MULTI)
        for seat_id in args.seats:
            editor.toggle_seat(seat_id)
        if args.assign:
            editor.assign_category(args.assign)

    print(format_hall_layout(editor.hall, editor.layout(), [s.id for s in editor.selected]))
    for message in editor.validate():
        print(f"{message.level.value}: {message.message} {message.context}")

    if args.save:
        editor.save()
        print(f"Saved {editor.hall}")
    elif editor.dirty:
        print("Changes not saved, use --save to send them")
    return 0


def run_tickets(args) -> int:
    tickets = sort_tickets(filter_tickets(get_user_tickets(), args.query, args.status), args.sort)
    upcoming, past = split_upcoming(tickets)
    print(format_tickets(upcoming, "UPCOMING"))
    print()
    print(format_tickets(past, "PAST"))
    return 0


def run_modify(args) -> int:
    ticket = next((t for t in get_user_tickets() if t.id == args.booking_id), None)
    if ticket is None:
        raise ValueError(f"Booking {args.booking_id} is not among your tickets")

    modification = TicketModification(ticket)
    modification.load()
    modification.reset_selection()
    for seat_id in args.seats:
        before = len(modification.selected)
        modification.toggle_seat(seat_id)
        if len(modification.selected) == before:
            print(f"Seat {seat_id} is not available")

    selected_ids = [s.id for s in modification.selected]
    print(format_hall_layout(modification.showtime.hall, modification.seats, selected_ids))
    print(f"New total: {modification.total} (difference {modification.price_difference})")

    try:
        result = modification.submit()
    except BookingValidationError as e:
        print(f"Modification rejected: {e}")
        return 1
    except SeatUnavailableError as e:
        print(f"Modification rejected: {e}")
        return 1

    if result.refund_amount is not None:
        print(f"Refund: {result.refund_amount / 100:.2f}")
    if not result.requires_payment:
        print(f"Booking {ticket.id} now holds {', '.join(selected_ids)}")
        return 0

    order = result.order
    print(f"Extra payment order {order.id}: {order.amount / 100:.2f} {order.currency}")
    if not args.payment_id:
        print("Complete the payment with the provider, then confirm it with --payment-id")
        return 0

    modification.confirm_payment(
        PaymentResult(
            payment_id=args.payment_id,
            order_id=args.order_id or order.id,
            signature=args.signature or "",
        )
    )
    print(f"Booking {ticket.id} now holds {', '.join(selected_ids)}")
    return 0


def run_theme(args) -> int:
    storage = LocalStorage()
    if args.theme == "toggle":
        storage.toggle_theme()
    elif args.theme:
        storage.set_theme(args.theme)
    print(f"Theme: {storage.get_theme()}")
    return 0


COMMANDS = {
    "login": run_login,
    "logout": run_logout,
    "layout": run_layout,
    "book": run_book,
    "edit-hall": run_edit_hall,
    "tickets": run_tickets,
    "modify": run_modify,
    "theme": run_theme,
}


def main(argv=None):
    """Main entry point"""
    try:
        args = parse_arguments(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1

    setup_logging(args.verbose)
    logger = logging.getLogger("main")
    logger.debug(f"Command: {args.command}")

    try:
        return COMMANDS[args.command](args)
    except (ApiError, ValueError) as e:
        logger.error(f"{args.command} failed: {str(e)}", exc_info=args.verbose)
        print(f"FAILED: {str(e)}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
