from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import utcnow
from saas_auth.domain.entities import AuditEvent
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Use case for the team owner removing a member.

    Business Rules:
    - Owner only (NOT_TEAM_OWNER)
    - Member must belong to the team (MEMBER_NOT_FOUND)
    - Soft removal: left_at is stamped once (MEMBER_ALREADY_REMOVED)
    """

    def __init__(self, uow: UnitOfWork, now: Optional[Callable[[], datetime]] = None):
        self.uow = uow
        self._now = now or utcnow

    async def execute(
        self, requester: Principal, team_id: UUID, member_id: UUID
    ) -> Result[RemoveMemberResponse]:
        async with self.uow:
            team = await self.uow.teams.get_by_id(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))
            if team.owner_id != requester.user_id:
                return Return.err(
                    Error("NOT_TEAM_OWNER", "You are not the owner of this team")
                )

            member = await self.uow.team_members.get_by_id(member_id)
            if member is None or member.team_id != team_id:
                return Return.err(Error("MEMBER_NOT_FOUND", "Member not found"))

            if member.left_at is not None:
                return Return.err(
                    Error("MEMBER_ALREADY_REMOVED", "Member has already been removed")
                )

            member.left_at = self._now()
            member = await self.uow.team_members.update(member)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=requester.user_id,
                    team_id=team_id,
                    action="member_removed",
                    event_metadata={
                        "member_id": str(member.id),
                        "removed_user_id": str(member.user_id),
                    },
                )
            )
            await self.uow.commit()

        return Return.ok(RemoveMemberResponse(member_id=str(member.id), left_at=member.left_at))
