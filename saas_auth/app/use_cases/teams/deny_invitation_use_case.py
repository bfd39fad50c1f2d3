from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import utcnow
from saas_auth.domain.entities import AuditEvent, InvitationStatus
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import InvitationStatusResponse


class DenyInvitationUseCase:
    """
    Use case for the team owner withdrawing a pending invitation.

    Business Rules:
    - INVITATION_NOT_FOUND, then INVITATION_NOT_PENDING, then NOT_TEAM_OWNER
    - Flips status to denied and stamps expires_at with the denial time
    """

    def __init__(self, uow: UnitOfWork, now: Optional[Callable[[], datetime]] = None):
        self.uow = uow
        self._now = now or utcnow

    async def execute(
        self, requester: Principal, invitation_id: UUID
    ) -> Result[InvitationStatusResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if invitation.status != InvitationStatus.pending:
                return Return.err(
                    Error("INVITATION_NOT_PENDING", "Only pending invitations can be denied")
                )

            team = await self.uow.teams.get_by_id(invitation.team_id)
            if team is None or team.owner_id != requester.user_id:
                return Return.err(
                    Error("NOT_TEAM_OWNER", "You are not allowed to deny this invitation")
                )

            invitation.status = InvitationStatus.denied
            invitation.expires_at = self._now()
            invitation = await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=requester.user_id,
                    team_id=team.id,
                    action="invitation_denied",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "invited_email": invitation.email,
                    },
                )
            )
            await self.uow.commit()

        return Return.ok(
            InvitationStatusResponse(
                invitation_id=str(invitation.id),
                status=invitation.status.value,
                expires_at=invitation.expires_at,
            )
        )
