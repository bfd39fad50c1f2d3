"""
Authenticated Principal

Identity resolved from a verified access token and passed explicitly into
every use case that acts on behalf of a user.
"""

from dataclasses import dataclass
from uuid import UUID

from .entities import User, UserRole


@dataclass(frozen=True)
class Principal:
    user_id: UUID
    email: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(user_id=user.id, email=user.email, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
