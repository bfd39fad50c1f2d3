from sqlmodel.ext.asyncio.session import AsyncSession

from saas_auth.adapter.repositories.audit_event_repository import AuditEventRepository
from saas_auth.adapter.repositories.team_invitation_repository import TeamInvitationRepository
from saas_auth.adapter.repositories.team_member_repository import TeamMemberRepository
from saas_auth.adapter.repositories.team_repository import TeamRepository
from saas_auth.adapter.repositories.user_repository import UserRepository
from saas_auth.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.teams = TeamRepository(self.session)
        self.team_members = TeamMemberRepository(self.session)
        self.invitations = TeamInvitationRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
