# backend/login.py

import logging
import os
from typing import Any, Dict, Optional

import requests
from dotenv import load_dotenv

from backend.errors import AuthenticationError, response_message
from utils.api_users import convert_api_user
from utils.local_storage import AUTHENTICATED_KEY, USER_INFO_KEY, LocalStorage

logger = logging.getLogger("backend.login")

DEFAULT_BACKEND_URL = "http://localhost:5000/api/v1"
WRITE_TIMEOUT = 30

_AUTH_TOKEN = None


def get_backend_url() -> str:
    load_dotenv()
    return os.getenv("BACKEND_URL") or DEFAULT_BACKEND_URL


def build_headers(token: Optional[str] = None) -> Dict[str, str]:
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Accept-Language": "en",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _extract_token(data: Dict[str, Any]) -> Optional[str]:
    if data.get("token"):
        return data["token"]
    inner = data.get("data")
    if isinstance(inner, dict) and inner.get("token"):
        return inner["token"]
    return None


def _extract_user(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    for container in (data, data.get("data") if isinstance(data.get("data"), dict) else {}):
        for key in ("user", "userInfo"):
            if isinstance(container.get(key), dict):
                return container[key]
    return None


def _store_session(data: Dict[str, Any], storage: LocalStorage) -> Optional[str]:
    token = _extract_token(data)
    if token:
        storage.set_token(token)
        storage.set(AUTHENTICATED_KEY, True)

    user_data = _extract_user(data)
    if user_data:
        try:
            user = convert_api_user(user_data)
            storage.set(USER_INFO_KEY, user_data)
            logger.info(f"Logged in as {user}")
        except (KeyError, ValueError) as e:
            logger.warning(f"Could not read user info from login response: {e}")
    return token


def login(
    email: Optional[str] = None,
    password: Optional[str] = None,
    storage: Optional[LocalStorage] = None,
) -> str:
    """
    Log in and persist the bearer token.

    Credentials default to the EMAIL / PASSWORD environment variables.

    Returns:
        The bearer token
    """
    load_dotenv()
    url = get_backend_url()
    email = email or os.getenv("EMAIL")
    password = password or os.getenv("PASSWORD")
    storage = storage or LocalStorage()

    if not email or not password:
        raise AuthenticationError("Email and password are required to log in")

    logger.info(f"Logging in to {url} with email {email}")

    try:
        response = requests.post(
            f"{url}/auth/login",
            json={"email": email, "password": password},
            headers=build_headers(),
            timeout=WRITE_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Login request failed: {str(e)}")
        raise AuthenticationError(f"Login request failed: {str(e)}") from e

    if response.status_code not in [200, 201]:
        message = response_message(response)
        logger.error(f"Login failed. Status: {response.status_code} - {message}")
        raise AuthenticationError(message, status_code=response.status_code)

    token = _store_session(response.json(), storage)
    if not token:
        raise AuthenticationError("Login response did not contain a token")

    logger.info("Login successful")
    return token


def signup(user_data: Dict[str, Any]) -> Dict[str, Any]:
    url = get_backend_url()
    response = requests.post(
        f"{url}/auth/signup", json=user_data, headers=build_headers(), timeout=WRITE_TIMEOUT
    )
    if response.status_code not in [200, 201]:
        raise AuthenticationError(response_message(response), status_code=response.status_code)
    return response.json()


def verify_social_token(token: str, storage: Optional[LocalStorage] = None) -> Dict[str, Any]:
    """Verify the token returned by a social login callback and keep it"""
    url = get_backend_url()
    storage = storage or LocalStorage()
    response = requests.post(
        f"{url}/auth/verify-social-token",
        json={"token": token},
        headers=build_headers(),
        timeout=WRITE_TIMEOUT,
    )
    if response.status_code not in [200, 201]:
        raise AuthenticationError(response_message(response), status_code=response.status_code)

    data = response.json()
    storage.set_token(token)
    storage.set(AUTHENTICATED_KEY, True)
    user_data = _extract_user(data)
    if user_data:
        storage.set(USER_INFO_KEY, user_data)
    return data


def forgot_password(email: str) -> Dict[str, Any]:
    url = get_backend_url()
    response = requests.post(
        f"{url}/auth/forgot-password",
        json={"email": email},
        headers=build_headers(),
        timeout=WRITE_TIMEOUT,
    )
    if response.status_code not in [200, 201]:
        raise AuthenticationError(response_message(response), status_code=response.status_code)
    return response.json()


def reset_password(token: str, new_password: str) -> Dict[str, Any]:
    url = get_backend_url()
    response = requests.post(
        f"{url}/auth/reset-password",
        json={"token": token, "newPassword": new_password},
        headers=build_headers(),
        timeout=WRITE_TIMEOUT,
    )
    if response.status_code not in [200, 201]:
        raise AuthenticationError(response_message(response), status_code=response.status_code)
    return response.json()


def logout(storage: Optional[LocalStorage] = None):
    global _AUTH_TOKEN
    _AUTH_TOKEN = None
    (storage or LocalStorage()).clear_auth()
    logger.info("Logged out, local session cleared")


def get_auth_token(storage: Optional[LocalStorage] = None) -> str:
    """Get authentication token: memory, then local storage, then login"""
    global _AUTH_TOKEN
    if not _AUTH_TOKEN:
        storage = storage or LocalStorage()
        _AUTH_TOKEN = storage.get_token() or login(storage=storage)
    return _AUTH_TOKEN


def get_current_user_id(storage: Optional[LocalStorage] = None) -> Optional[str]:
    user_data = (storage or LocalStorage()).get(USER_INFO_KEY)
    if not isinstance(user_data, dict):
        return None
    return user_data.get("id") or user_data.get("userId") or user_data.get("_id")


if __name__ == "__main__":
    login()
