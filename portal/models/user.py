from enum import Enum
from pydantic import BaseModel


class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"


class UserRecord(BaseModel):
    """read-only view of a record owned by the user directory"""
    email: str
    username: str
    role: Role = Role.STUDENT

    @property
    def display_name(self) -> str:
        return self.username

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
