"""User models passed explicitly into services that need the current user."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

UserRole = Literal["admin", "trainer", "trainee"]


class SessionUser(BaseModel):
    """The authenticated user making a request."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str = ""
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
