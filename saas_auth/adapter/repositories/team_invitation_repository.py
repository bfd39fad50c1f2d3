from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from saas_auth.app.repositories.team_invitation_repository import (
    ITeamInvitationRepository,
)
from saas_auth.domain.entities import InvitationStatus, TeamInvitation


class TeamInvitationRepository(ITeamInvitationRepository):
    """TeamInvitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[TeamInvitation]:
        """Get invitation by ID"""
        stmt = select(TeamInvitation).where(TeamInvitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token(self, token: str) -> Optional[TeamInvitation]:
        """Get invitation by token"""
        stmt = select(TeamInvitation).where(TeamInvitation.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_open_by_team_and_email(
        self, team_id: UUID, email: str
    ) -> Optional[TeamInvitation]:
        """Get the pending or accepted invitation for (team, email)"""
        stmt = select(TeamInvitation).where(
            TeamInvitation.team_id == team_id,
            TeamInvitation.email == email,
            TeamInvitation.status.in_(
                [InvitationStatus.pending, InvitationStatus.accepted]
            ),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_not_accepted_by_team_id(self, team_id: UUID) -> List[TeamInvitation]:
        """Get pending and denied invitations of a team"""
        stmt = (
            select(TeamInvitation)
            .where(
                TeamInvitation.team_id == team_id,
                TeamInvitation.status != InvitationStatus.accepted,
            )
            .order_by(TeamInvitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def mark_accepted(
        self, invitation_id: UUID, user_id: UUID, accepted_at: datetime
    ) -> bool:
        """Flip a pending invitation to accepted; False if it is no longer pending"""
        stmt = (
            update(TeamInvitation)
            .where(
                TeamInvitation.id == invitation_id,
                TeamInvitation.status == InvitationStatus.pending,
            )
            .values(
                status=InvitationStatus.accepted,
                accepted_at=accepted_at,
                accepted_by_id=user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation
