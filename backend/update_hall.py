# backend/update_hall.py


import logging
from typing import Any, Dict

import requests

from backend.errors import SubmissionError, response_message, response_payload
from backend.login import WRITE_TIMEOUT, build_headers, get_auth_token, get_backend_url

logger = logging.getLogger("backend.update_hall")


def update_hall(hall_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Save a hall configuration.

    Args:
        hall_id: Hall (screen) id
        payload: Body built by utils.api_halls.convert_hall_to_api

    Returns:
        The backend response body
    """
    url = get_backend_url()
    endpoint = f"{url}/theater/screens/{hall_id}"
    logger.info(
        f"Updating hall {hall_id}: {payload.get('rows')}x{payload.get('seatsPerRow')}, "
        f"{len(payload.get('specialSeats', []))} special seats"
    )

    try:
        response = requests.patch(
            endpoint,
            headers=build_headers(get_auth_token()),
            json=payload,
            timeout=WRITE_TIMEOUT,
        )
    except requests.exceptions.Timeout as e:
        logger.error("Request timed out")
        raise SubmissionError("Request timed out while saving the hall") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {str(e)}")
        raise SubmissionError(f"Request failed: {str(e)}") from e

    if response.status_code not in [200, 201]:
        message = response_message(response)
        logger.error(f"Failed to update hall. Status: {response.status_code} - {message}")
        raise SubmissionError(
            message, status_code=response.status_code, payload=response_payload(response)
        )

    logger.info(f"Hall {hall_id} saved")
    return response_payload(response)
