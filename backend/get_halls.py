# backend/get_halls.py


import logging
from typing import List

import requests

from backend.errors import FetchError, response_message
from backend.login import build_headers, get_auth_token, get_backend_url
from models.halls import Hall
from utils.api_halls import convert_api_hall

logger = logging.getLogger("backend.get_halls")


def get_theater_halls(theater_id: str) -> List[Hall]:
    url = get_backend_url()
    try:
        response = requests.get(
            f"{url}/theater/screens/{theater_id}",
            headers=build_headers(get_auth_token()),
            timeout=15,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {str(e)}")
        raise FetchError(f"Request failed: {str(e)}") from e

    if response.status_code != 200:
        raise FetchError(response_message(response), status_code=response.status_code)

    data = response.json()
    halls_data = data["data"] if isinstance(data, dict) else data
    if isinstance(halls_data, dict):
        halls_data = halls_data.get("screens", [])

    halls = []
    for hall_data in halls_data:
        try:
            halls.append(convert_api_hall(hall_data))
        except (KeyError, ValueError) as e:
            logger.warning(f"Skipping hall {hall_data.get('_id')}: {e}")
    logger.info(f"Loaded {len(halls)} halls for theater {theater_id}")
    return halls


def get_hall(theater_id: str, hall_id: str) -> Hall:
    for hall in get_theater_halls(theater_id):
        if hall.id == hall_id:
            return hall
    raise FetchError(f"Hall {hall_id} not found in theater {theater_id}", status_code=404)


if __name__ == "__main__":
    import sys

    for hall in get_theater_halls(sys.argv[1]):
        print(hall)
