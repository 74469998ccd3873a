# models/user.py

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(Enum):
    ADMIN = "admin"
    THEATER_OWNER = "theaterOwner"
    USER = "user"


class AccountStatus(Enum):
    ACTIVE = "Active"
    BANNED = "Banned"
    INACTIVE = "Inactive"
    UNBANNED = "Unbanned"


@dataclass
class UserInfo:
    user_id: str
    first_name: str
    last_name: str
    email: str
    role: Role
    status: AccountStatus = AccountStatus.ACTIVE
    phone: Optional[str] = None
    avatar: Optional[str] = None

    def __post_init__(self):
        if not self.email.strip():
            raise ValueError("User must have an email")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return f"{self.full_name} <{self.email}> ({self.role.value})"
