from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from saas_auth.domain.entities import TeamInvitation


class ITeamInvitationRepository(ABC):
    """TeamInvitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[TeamInvitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[TeamInvitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_open_by_team_and_email(
        self, team_id: UUID, email: str
    ) -> Optional[TeamInvitation]:
        """Get the pending or accepted invitation for (team, email)"""
        pass

    @abstractmethod
    async def get_not_accepted_by_team_id(self, team_id: UUID) -> List[TeamInvitation]:
        """Get pending and denied invitations of a team"""
        pass

    @abstractmethod
    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: UUID, user_id: UUID, accepted_at: datetime
    ) -> bool:
        """Flip a pending invitation to accepted; False if it is no longer pending"""
        pass

    @abstractmethod
    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        """Update existing invitation"""
        pass
