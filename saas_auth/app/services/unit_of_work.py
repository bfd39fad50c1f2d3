from abc import ABC, abstractmethod

from saas_auth.app.repositories.audit_event_repository import IAuditEventRepository
from saas_auth.app.repositories.team_invitation_repository import ITeamInvitationRepository
from saas_auth.app.repositories.team_member_repository import ITeamMemberRepository
from saas_auth.app.repositories.team_repository import ITeamRepository
from saas_auth.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    teams: ITeamRepository
    team_members: ITeamMemberRepository
    invitations: ITeamInvitationRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
