from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from urbix.models.base import utc_now
from urbix.models.enums import UserRole


class User(BaseModel):
    username: str
    hashed_password: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: UserRole = UserRole.CITIZEN
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def username_key(self) -> str:
        return self.username.strip().lower()
