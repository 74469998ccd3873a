# backend/post_booking.py

import logging
from typing import Any, Dict

import requests

from backend.errors import (
    PaymentError,
    SeatUnavailableError,
    SubmissionError,
    response_message,
    response_payload,
)
from backend.login import WRITE_TIMEOUT, build_headers, get_auth_token, get_backend_url
from models.booking import BookingRecord, Order, PaymentResult
from utils.api_bookings import convert_api_booking_record, convert_api_order, convert_payment_to_api

# Set up logging
logger = logging.getLogger("backend.post_booking")


def validate_booking_payload(booking_data: Dict[str, Any]) -> bool:
    """
    Validate booking data before sending to backend.

    Args:
        booking_data: Dictionary built by utils.api_bookings.convert_booking_to_api

    Returns:
        bool: True if valid, False otherwise
    """
    for field in ["showtimeId", "seats", "theaterId"]:
        if not booking_data.get(field):
            logger.error(f"Missing required field: {field}")
            return False

    seats = booking_data["seats"]
    if not isinstance(seats, list):
        logger.error("Seats field must be a list")
        return False

    seen = set()
    for i, seat in enumerate(seats):
        for field in ["seatNumber", "seatType", "price"]:
            if field not in seat:
                logger.error(f"Seat {i + 1} missing required field: {field}")
                return False
        if seat["seatNumber"] in seen:
            logger.error(f"Seat {seat['seatNumber']} is listed twice")
            return False
        seen.add(seat["seatNumber"])

    logger.debug(f"Booking payload validation passed ({len(seats)} seats)")
    return True


def _raise_submission_error(response: requests.Response, action: str):
    message = response_message(response)
    payload = response_payload(response)
    logger.error(f"Failed to {action}. Status: {response.status_code}")
    logger.error(f"Response: {payload}")

    if response.status_code == 409:
        raise SeatUnavailableError(message, status_code=409, payload=payload)
    raise SubmissionError(message, status_code=response.status_code, payload=payload)


def create_booking(booking_data: Dict[str, Any]) -> Order:
    """
    Create a pending booking and its payment order.

    Booking creation is not idempotent, so it is never retried.

    Raises:
        SeatUnavailableError: a seat was booked by someone else meanwhile
        SubmissionError: any other rejection or network failure
    """
    if not validate_booking_payload(booking_data):
        raise SubmissionError("Booking payload is incomplete")

    url = get_backend_url()
    endpoint = f"{url}/user/bookings"
    logger.info(f"Posting booking of {len(booking_data['seats'])} seats to: {endpoint}")

    try:
        response = requests.post(
            endpoint,
            headers=build_headers(get_auth_token()),
            json=booking_data,
            timeout=WRITE_TIMEOUT,
        )
    except requests.exceptions.Timeout as e:
        logger.error("Request timed out")
        raise SubmissionError("Request timed out while creating the booking") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error - check if backend is running")
        raise SubmissionError("Could not connect to the backend") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {str(e)}")
        raise SubmissionError(f"Request failed: {str(e)}") from e

    if response.status_code not in [200, 201]:
        _raise_submission_error(response, "create booking")

    data = response_payload(response)
    if not isinstance(data, dict) or not isinstance(data.get("order"), dict):
        raise SubmissionError("Backend did not return a payment order", payload=data)

    booking = data.get("booking") or data.get("data") or {}
    booking_id = booking.get("_id") if isinstance(booking, dict) else None
    order = convert_api_order(data["order"], booking_id)
    logger.info(f"Booking order created with ID: {order.id}")
    return order


def confirm_payment(result: PaymentResult) -> BookingRecord:
    """
    Confirm the payment of a booking order.

    Returns:
        The confirmed booking

    Raises:
        PaymentError: the confirmation failed; the booking stays unconfirmed
    """
    url = get_backend_url()
    logger.info(f"Confirming payment {result.payment_id} for order {result.order_id}")

    try:
        response = requests.patch(
            f"{url}/user/bookings/confirm-payment",
            headers=build_headers(get_auth_token()),
            json=convert_payment_to_api(result),
            timeout=WRITE_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Payment confirmation request failed: {str(e)}")
        raise PaymentError(f"Payment confirmation failed: {str(e)}") from e

    data = response_payload(response)
    if response.status_code not in [200, 201] or not isinstance(data, dict) or not data.get("success"):
        message = response_message(response) if response.status_code not in [200, 201] else "Payment was not confirmed"
        logger.error(f"Payment confirmation failed. Status: {response.status_code} - {message}")
        raise PaymentError(message, status_code=response.status_code, payload=data)

    record = convert_api_booking_record(data.get("data") or {})
    logger.info(f"Payment confirmed for booking {record.id}")
    return record
