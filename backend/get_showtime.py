# backend/get_showtime.py


import logging
from datetime import date
from typing import Optional

import requests

from backend.errors import FetchError, response_message
from backend.login import build_headers, get_auth_token, get_backend_url
from models.showtime import Showtime
from utils.api_showtimes import convert_api_showtime

logger = logging.getLogger("backend.get_showtime")

READ_TIMEOUT = 15


def get_showtime(show_id: str, show_date: Optional[date] = None) -> Showtime:
    """
    Fetch a showtime with its hall layout and booked seats.

    Args:
        show_id: Showtime id
        show_date: Performance date; booked seats are per date

    Raises:
        FetchError: network failure or unusable response
    """
    if not show_id:
        raise FetchError("Show ID is required")

    url = get_backend_url()
    params = {"date": show_date.isoformat()} if show_date else None
    logger.info(f"Fetching showtime {show_id} for {show_date or 'any date'}")

    try:
        response = requests.get(
            f"{url}/user/showtimes/{show_id}",
            headers=build_headers(get_auth_token()),
            params=params,
            timeout=READ_TIMEOUT,
        )
    except requests.exceptions.Timeout as e:
        logger.error("Request timed out")
        raise FetchError("Request timed out while loading the showtime") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error - check if backend is running")
        raise FetchError("Could not connect to the backend") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {str(e)}")
        raise FetchError(f"Request failed: {str(e)}") from e

    if response.status_code != 200:
        message = response_message(response)
        logger.error(f"Failed to load showtime. Status: {response.status_code} - {message}")
        raise FetchError(message, status_code=response.status_code)

    try:
        data = response.json()
        showtime_data = data["data"] if isinstance(data, dict) and "data" in data else data
        return convert_api_showtime(showtime_data)
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Unusable showtime response: {str(e)}")
        raise FetchError(f"Unusable showtime response: {str(e)}") from e


if __name__ == "__main__":
    import sys

    print(get_showtime(sys.argv[1]))
