from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from saas_auth.app.repositories.team_repository import ITeamRepository
from saas_auth.domain.entities import Team, TeamMember


class TeamRepository(ITeamRepository):
    """Team repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, team_id: UUID) -> Optional[Team]:
        """Get team by ID"""
        stmt = select(Team).where(Team.id == team_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_user(self, user_id: UUID) -> List[Team]:
        """Get teams the user owns or is an active member of"""
        member_of = select(TeamMember.team_id).where(
            TeamMember.user_id == user_id,
            TeamMember.left_at.is_(None),
        )
        stmt = (
            select(Team)
            .where(or_(Team.owner_id == user_id, Team.id.in_(member_of)))
            .order_by(Team.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, team: Team) -> Team:
        """Create a new team"""
        self.session.add(team)
        await self.session.flush()
        await self.session.refresh(team)
        return team
