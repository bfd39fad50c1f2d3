from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from saas_auth.domain.entities import Team


class ITeamRepository(ABC):
    """Team repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, team_id: UUID) -> Optional[Team]:
        """Get team by ID"""
        pass

    @abstractmethod
    async def get_for_user(self, user_id: UUID) -> List[Team]:
        """Get teams the user owns or is an active member of"""
        pass

    @abstractmethod
    async def create(self, team: Team) -> Team:
        """Create a new team"""
        pass
