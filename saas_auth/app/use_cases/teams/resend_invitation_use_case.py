from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from saas_auth.app.services.mail_dispatcher import IMailDispatcher, MailTemplates
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import utcnow
from saas_auth.domain.entities import AuditEvent, InvitationStatus
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import InvitationStatusResponse


class ResendInvitationUseCase:
    """
    Use case for re-sending a pending invitation, expired or not.

    Business Rules:
    - Requester must be the original inviter or the team owner
    - expires_at restarts from now; the token is unchanged
    """

    def __init__(
        self,
        uow: UnitOfWork,
        mailer: IMailDispatcher,
        templates: MailTemplates,
        invitation_ttl: timedelta,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.uow = uow
        self.mailer = mailer
        self.templates = templates
        self.invitation_ttl = invitation_ttl
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
                    Error("INVITATION_NOT_PENDING", "Only pending invitations can be resent")
                )

            team = await self.uow.teams.get_by_id(invitation.team_id)
            allowed = invitation.invited_by_id == requester.user_id or (
                team is not None and team.owner_id == requester.user_id
            )
            if not allowed:
                return Return.err(
                    Error("NOT_TEAM_OWNER", "You are not allowed to resend this invitation")
                )

            requester_user = await self.uow.users.get_by_id(requester.user_id)

            invitation.expires_at = self._now() + self.invitation_ttl
            invitation = await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=requester.user_id,
                    team_id=invitation.team_id,
                    action="invitation_resent",
                    event_metadata={"invitation_id": str(invitation.id)},
                )
            )
            await self.uow.commit()

        inviter_name = (
            requester_user.name if requester_user and requester_user.name else requester.email
        )
        team_name = team.name if team is not None else ""
        await self.mailer.send_message(
            invitation.email,
            self.templates.team_invitation(team_name, inviter_name, invitation.token),
        )

        return Return.ok(
            InvitationStatusResponse(
                invitation_id=str(invitation.id),
                status=invitation.status.value,
                expires_at=invitation.expires_at,
            )
        )
