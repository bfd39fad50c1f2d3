"""
TeamInvitation Entity

Time-boxed invitation for an email address to join a team.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import InvitationStatus

_OPEN_INVITATION = text("status IN ('pending', 'accepted')")


class TeamInvitation(SQLModel, table=True):
    """
    TeamInvitation entity.

    Business Rules:
    - At most one pending or accepted invitation per (team, email)
    - Token is random and unguessable (secrets.token_urlsafe)
    - Expiry is checked at use time; status never auto-transitions
    - Denial stamps expires_at with the denial time
    """

    __tablename__ = "team_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    team_id: UUID = Field(foreign_key="teams.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)
    invited_by_id: UUID = Field(foreign_key="users.id", nullable=False)

    token: str = Field(unique=True, index=True, max_length=64)
    status: InvitationStatus = Field(default=InvitationStatus.pending)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    accepted_by_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_team_invitation_open",
            "team_id",
            "email",
            unique=True,
            sqlite_where=_OPEN_INVITATION,
            postgresql_where=_OPEN_INVITATION,
        ),
        Index("idx_team_invitation_status", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
