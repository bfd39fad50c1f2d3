"""
TeamMember Entity

Links a user to a team they joined through an invitation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import TeamMemberRole


class TeamMember(SQLModel, table=True):
    """
    TeamMember entity.

    Business Rules:
    - (team_id, user_id) is unique
    - Removal is soft: left_at is stamped, the row is kept
    """

    __tablename__ = "team_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    team_id: UUID = Field(foreign_key="teams.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    role: TeamMemberRole = Field(default=TeamMemberRole.member)

    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    left_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_team_member_team_user", "team_id", "user_id", unique=True),
    )
