from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from saas_auth.app.repositories.team_member_repository import ITeamMemberRepository
from saas_auth.domain.entities import TeamMember


class TeamMemberRepository(ITeamMemberRepository):
    """TeamMember repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, member_id: UUID) -> Optional[TeamMember]:
        """Get team member by ID"""
        stmt = select(TeamMember).where(TeamMember.id == member_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_team_and_user(
        self, team_id: UUID, user_id: UUID
    ) -> Optional[TeamMember]:
        """Get membership row for a user in a team"""
        stmt = select(TeamMember).where(
            TeamMember.team_id == team_id, TeamMember.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_team_id(self, team_id: UUID) -> List[TeamMember]:
        """Get members of a team that have not left"""
        stmt = (
            select(TeamMember)
            .where(TeamMember.team_id == team_id, TeamMember.left_at.is_(None))
            .order_by(TeamMember.joined_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, member: TeamMember) -> TeamMember:
        """Create a new team member"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def update(self, member: TeamMember) -> TeamMember:
        """Update existing team member"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member
