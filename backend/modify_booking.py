# backend/modify_booking.py


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
from models.booking import ModificationResult, PaymentResult
from utils.api_bookings import convert_api_modification, convert_payment_to_api

logger = logging.getLogger("backend.modify_booking")


def modify_booking(booking_id: str, payload: Dict[str, Any]) -> ModificationResult:
    """
    Replace the seats of an existing booking.

    The result carries a payment order when the new seats cost more and a
    refund amount when they cost less.
    """
    url = get_backend_url()
    logger.info(f"Modifying booking {booking_id}: {len(payload.get('seats', []))} seats")

    try:
        response = requests.put(
            f"{url}/user/bookings/{booking_id}/modify",
            headers=build_headers(get_auth_token()),
            json=payload,
            timeout=WRITE_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {str(e)}")
        raise SubmissionError(f"Request failed: {str(e)}") from e

    if response.status_code == 409:
        raise SeatUnavailableError(
            response_message(response), status_code=409, payload=response_payload(response)
        )
    if response.status_code not in [200, 201]:
        message = response_message(response)
        logger.error(f"Failed to modify booking. Status: {response.status_code} - {message}")
        raise SubmissionError(message, status_code=response.status_code)

    result = convert_api_modification(booking_id, response_payload(response))
    if result.refund_amount is not None:
        logger.info(f"Booking {booking_id} modified, refund of {result.refund_amount / 100:.2f}")
    elif result.requires_payment:
        logger.info(f"Booking {booking_id} modified, payment of {result.order.amount / 100:.2f} required")
    else:
        logger.info(f"Booking {booking_id} modified")
    return result


def confirm_modified_payment(booking_id: str, result: PaymentResult) -> Dict[str, Any]:
    url = get_backend_url()
    try:
        response = requests.post(
            f"{url}/user/bookings/confirm-modified-payment/{booking_id}",
            headers=build_headers(get_auth_token()),
            json=convert_payment_to_api(result, booking_id),
            timeout=WRITE_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Payment confirmation request failed: {str(e)}")
        raise PaymentError(f"Payment confirmation failed: {str(e)}") from e

    if response.status_code not in [200, 201]:
        raise PaymentError(response_message(response), status_code=response.status_code)

    logger.info(f"Payment for modified booking {booking_id} confirmed")
    data = response_payload(response)
    return data if isinstance(data, dict) else {}
