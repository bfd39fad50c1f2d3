from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from saas_auth.domain.entities import TeamMember


class ITeamMemberRepository(ABC):
    """TeamMember repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, member_id: UUID) -> Optional[TeamMember]:
        """Get team member by ID"""
        pass

    @abstractmethod
    async def get_by_team_and_user(
        self, team_id: UUID, user_id: UUID
    ) -> Optional[TeamMember]:
        """Get membership row for a user in a team"""
        pass

    @abstractmethod
    async def get_active_by_team_id(self, team_id: UUID) -> List[TeamMember]:
        """Get members of a team that have not left"""
        pass

    @abstractmethod
    async def create(self, member: TeamMember) -> TeamMember:
        """Create a new team member"""
        pass

    @abstractmethod
    async def update(self, member: TeamMember) -> TeamMember:
        """Update existing team member"""
        pass
