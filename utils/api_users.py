# utils/api_users.py


import logging

from models.user import AccountStatus, Role, UserInfo


def convert_api_role(role_str: str) -> Role:
    """Convert role string from API to Role enum"""
    for role in Role:
        if role.value.lower() == str(role_str).lower():
            return role
    logging.warning(f"Unknown role '{role_str}', defaulting to USER")
    return Role.USER


def convert_api_account_status(status_str: str) -> AccountStatus:
    for status in AccountStatus:
        if status.value.lower() == str(status_str).lower():
            return status
    return AccountStatus.ACTIVE


def convert_api_user(user_data: dict) -> UserInfo:
    """Convert API user data to UserInfo object"""
    user_id = user_data.get("userId") or user_data.get("id") or user_data.get("_id")
    if not user_id:
        raise ValueError("User data has no id")

    return UserInfo(
        user_id=str(user_id),
        first_name=user_data.get("firstName", ""),
        last_name=user_data.get("lastName", ""),
        email=user_data["email"],
        role=convert_api_role(user_data.get("role", "user")),
        status=convert_api_account_status(user_data.get("status", "Active")),
        phone=user_data.get("phone"),
        avatar=user_data.get("avatar"),
    )
