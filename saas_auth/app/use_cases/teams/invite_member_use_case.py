"""
Invite Member Use Case

Creates a pending team invitation and mails its link.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from saas_auth.app.services.mail_dispatcher import IMailDispatcher, MailTemplates
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import normalize_email, utcnow
from saas_auth.domain.entities import AuditEvent, InvitationStatus, TeamInvitation
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import InviteMemberResponse

logger = logging.getLogger(__name__)


class InviteMemberUseCase:
    """
    Use case for inviting an email address to a team.

    Business Rules:
    - Team must exist (TEAM_NOT_FOUND) and be owned by the inviter
      (NOT_TEAM_OWNER)
    - An accepted invitation for the email: ALREADY_MEMBER
    - A pending invitation, expired or not: ALREADY_INVITED (resend it)
    - A concurrent duplicate rejected by the open-invitation unique index:
      INVITE_ALREADY_EXISTS
    - Token from secrets.token_urlsafe(32); expiry is now + invitation_ttl
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
        self, inviter: Principal, team_id: UUID, email: str
    ) -> Result[InviteMemberResponse]:
        """
        Execute invite member use case.

        Args:
            inviter: Authenticated principal sending the invite
            team_id: Target team ID
            email: Email address to invite

        Returns:
            Result with InviteMemberResponse DTO, or Error
        """
        email = normalize_email(email)

        async with self.uow:
            team = await self.uow.teams.get_by_id(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            if team.owner_id != inviter.user_id:
                return Return.err(
                    Error("NOT_TEAM_OWNER", "You are not the owner of this team")
                )

            existing = await self.uow.invitations.get_open_by_team_and_email(team_id, email)
            if existing is not None:
                if existing.status == InvitationStatus.accepted:
                    return Return.err(
                        Error("ALREADY_MEMBER", "User is already a member of this team")
                    )
                return Return.err(
                    Error("ALREADY_INVITED", "User is already invited to this team")
                )

            inviter_user = await self.uow.users.get_by_id(inviter.user_id)

            now = self._now()
            invitation = TeamInvitation(
                team_id=team_id,
                email=email,
                invited_by_id=inviter.user_id,
                token=secrets.token_urlsafe(32),
                status=InvitationStatus.pending,
                expires_at=now + self.invitation_ttl,
                created_at=now,
            )

            try:
                invitation = await self.uow.invitations.create(invitation)
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=inviter.user_id,
                        team_id=team_id,
                        action="invitation_sent",
                        event_metadata={
                            "invitation_id": str(invitation.id),
                            "invited_email": email,
                        },
                    )
                )
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                logger.warning(f"Concurrent invitation for {email} to team {team_id}")
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "An invitation already exists for this email",
                    )
                )

        inviter_name = inviter_user.name if inviter_user and inviter_user.name else inviter.email
        await self.mailer.send_message(
            email, self.templates.team_invitation(team.name, inviter_name, invitation.token)
        )

        return Return.ok(
            InviteMemberResponse(
                invitation_id=str(invitation.id),
                status=invitation.status.value,
                expires_at=invitation.expires_at,
            )
        )
