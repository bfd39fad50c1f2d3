"""
Team Entity

A group owned by one user that other users join by invitation.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class Team(SQLModel, table=True):
    """
    Team entity.

    Business Rules:
    - Exactly one owner; only the owner invites, denies and removes
    - The owner is not stored as a TeamMember row
    """

    __tablename__ = "teams"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    owner_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
