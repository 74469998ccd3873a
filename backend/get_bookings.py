# backend/get_bookings.py


import logging
from typing import List, Optional

import requests

from backend.errors import AuthenticationError, FetchError, response_message
from backend.login import build_headers, get_auth_token, get_backend_url, get_current_user_id
from models.ticket import Ticket
from utils.api_bookings import convert_api_tickets

logger = logging.getLogger("backend.get_bookings")


def get_user_tickets(user_id: Optional[str] = None) -> List[Ticket]:
    """Fetch the bookings of a user (default: the logged in user) as tickets"""
    token = get_auth_token()
    user_id = user_id or get_current_user_id()
    if not user_id:
        raise AuthenticationError("No logged in user")

    url = get_backend_url()
    try:
        response = requests.get(
            f"{url}/user/bookings/{user_id}", headers=build_headers(token), timeout=15
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {str(e)}")
        raise FetchError(f"Request failed: {str(e)}") from e

    if response.status_code != 200:
        raise FetchError(response_message(response), status_code=response.status_code)

    data = response.json()
    tickets = convert_api_tickets(data.get("data", []) if isinstance(data, dict) else data)
    logger.info(f"Loaded {len(tickets)} tickets for user {user_id}")
    return tickets


if __name__ == "__main__":
    for ticket in get_user_tickets():
        print(ticket)
