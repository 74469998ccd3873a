# backend/errors.py

from typing import Any, Optional

import requests


class ApiError(Exception):
    """Base class for failures talking to the booking backend"""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class AuthenticationError(ApiError):
    pass


class FetchError(ApiError):
    """Loading hall, showtime or booking data failed"""


class SubmissionError(ApiError):
    """The backend rejected a booking submission"""


class SeatUnavailableError(SubmissionError):
    """A selected seat was taken between fetch and submit"""


class PaymentError(ApiError):
    """Payment confirmation failed; the booking stays unconfirmed"""


def response_message(response: requests.Response) -> str:
    """Best-effort error message from a backend response"""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            if data.get(key):
                return str(data[key])
    return f"HTTP {response.status_code}"


def response_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
