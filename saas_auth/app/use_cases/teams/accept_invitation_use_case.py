"""
Accept Invitation Use Case

Turns a pending invitation into a team membership.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import utcnow
from saas_auth.domain.entities import (
    AuditEvent,
    InvitationStatus,
    TeamMember,
    TeamMemberRole,
)
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting a team invitation.

    Business Rules:
    - Unknown token: INVITATION_NOT_FOUND
    - Not pending, or expired: INVALID_OR_EXPIRED_INVITATION
    - The team owner, or an active member, cannot accept: ALREADY_MEMBER
    - The invitation is claimed with a conditional pending -> accepted
      update before any member row is written; losing that race gives
      INVALID_OR_EXPIRED_INVITATION and nothing is written
    - A member who left earlier rejoins on the same membership row
    - Existing membership rejected by the (team, user) unique index:
      ALREADY_MEMBER, nothing is written
    """

    def __init__(self, uow: UnitOfWork, now: Optional[Callable[[], datetime]] = None):
        self.uow = uow
        self._now = now or utcnow

    async def execute(self, token: str, user: Principal) -> Result[AcceptInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            invitation_id = invitation.id
            team_id = invitation.team_id
            now = self._now()
            if invitation.status != InvitationStatus.pending or invitation.is_expired(now):
                return Return.err(
                    Error("INVALID_OR_EXPIRED_INVITATION", "Invalid or expired invitation")
                )

            team = await self.uow.teams.get_by_id(team_id)
            if team is not None and team.owner_id == user.user_id:
                return Return.err(Error("ALREADY_MEMBER", "You own this team"))

            existing = await self.uow.team_members.get_by_team_and_user(team_id, user.user_id)
            if existing is not None and existing.left_at is None:
                return Return.err(
                    Error("ALREADY_MEMBER", "You are already a member of this team")
                )

            try:
                claimed = await self.uow.invitations.mark_accepted(
                    invitation_id, user.user_id, now
                )
                if not claimed:
                    await self.uow.rollback()
                    logger.warning(f"Invitation {invitation_id} was accepted concurrently")
                    return Return.err(
                        Error("INVALID_OR_EXPIRED_INVITATION", "Invalid or expired invitation")
                    )

                if existing is not None:
                    existing.left_at = None
                    existing.joined_at = now
                    member = await self.uow.team_members.update(existing)
                else:
                    member = await self.uow.team_members.create(
                        TeamMember(
                            team_id=team_id,
                            user_id=user.user_id,
                            role=TeamMemberRole.member,
                            joined_at=now,
                        )
                    )

                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=user.user_id,
                        team_id=team_id,
                        action="invitation_accepted",
                        event_metadata={"invitation_id": str(invitation_id)},
                    )
                )
                await self.uow.commit()
            except IntegrityError:
                await self.uow.rollback()
                logger.warning(f"User {user.user_id} already belongs to team {team_id}")
                return Return.err(
                    Error("ALREADY_MEMBER", "You are already a member of this team")
                )

        return Return.ok(
            AcceptInvitationResponse(
                team_id=str(member.team_id),
                member_id=str(member.id),
                status=InvitationStatus.accepted.value,
            )
        )
