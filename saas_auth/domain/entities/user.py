"""
User Entity

Represents a person who can sign in and belong to teams.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - the credential record.

    Business Rules:
    - Email and username must be unique across all users
    - Username is derived from the email local-part
    - Password stored as bcrypt hash; null for Google-only accounts
    - totp_secret is persistent and reused for every mailed code
    - Never hard-deleted; suspension and logout are flags
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(default="", max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=1024)

    password_hash: Optional[str] = Field(default=None, max_length=60)
    totp_secret: str = Field(max_length=64)
    google_id: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=255
    )

    role: UserRole = Field(default=UserRole.individual)

    is_email_verified: bool = Field(default=False)
    is_suspended: bool = Field(default=False)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_email_verified", "is_email_verified"),
        Index("idx_user_suspended", "is_suspended"),
    )
