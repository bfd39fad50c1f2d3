from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from saas_auth.api.error import ClientError, ServerError
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.teams import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateTeamUseCase,
    DenyInvitationUseCase,
    GetTeamUseCase,
    InvitationStatusResponse,
    InviteMemberResponse,
    InviteMemberUseCase,
    ListTeamsUseCase,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    ResendInvitationUseCase,
    TeamDetailResponse,
    TeamResponse,
)
from saas_auth.context import ServiceContext
from saas_auth.depends import get_services, get_unit_of_work, require_team_access
from saas_auth.domain.principal import Principal

router = APIRouter(prefix="/teams", tags=["Teams"])

NOT_FOUND_CODES = ("TEAM_NOT_FOUND", "INVITATION_NOT_FOUND", "MEMBER_NOT_FOUND")
FORBIDDEN_CODES = ("INSUFFICIENT_ROLE", "NOT_TEAM_OWNER", "ALREADY_MEMBER", "ALREADY_INVITED")
BAD_REQUEST_CODES = (
    "INVALID_OR_EXPIRED_INVITATION",
    "INVITATION_NOT_PENDING",
    "MEMBER_ALREADY_REMOVED",
)


def _raise_team_error(error, conflict_codes=()):
    if error.code in conflict_codes:
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    elif error.code in NOT_FOUND_CODES:
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in FORBIDDEN_CODES:
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code in BAD_REQUEST_CODES:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


class CreateTeamRequest(BaseModel):
    """
    Create team HTTP request payload
    """

    name: str = Field(..., min_length=1, max_length=255, description="Team name")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TeamResponse)
async def create_team(
    request: CreateTeamRequest,
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a team owned by the caller.

    Raises:
        - 403 Forbidden: Caller's account role is not team
    """
    use_case = CreateTeamUseCase(uow)
    result = await use_case.execute(principal, request.name)

    if result.is_err():
        _raise_team_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[TeamResponse])
async def list_teams(
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Teams the caller owns or is an active member of.
    """
    use_case = ListTeamsUseCase(uow)
    result = await use_case.execute(principal)

    if result.is_err():
        _raise_team_error(result.error)

    return result.value


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload
    """

    team_id: UUID = Field(..., description="Team to invite into")
    email: EmailStr = Field(..., description="Email address to invite")


@router.post("/invite", status_code=status.HTTP_201_CREATED, response_model=InviteMemberResponse)
async def invite_member(
    request: InviteMemberRequest,
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Invite an email address to a team and mail the invitation link.

    Raises:
        - 403 Forbidden: Not the owner, already a member or already invited
        - 404 Not Found: Unknown team
        - 409 Conflict: Concurrent invitation for the same email
    """
    use_case = InviteMemberUseCase(
        uow, services.mailer, services.templates, services.invitation_ttl
    )
    result = await use_case.execute(principal, request.team_id, request.email)

    if result.is_err():
        _raise_team_error(result.error, conflict_codes=("INVITE_ALREADY_EXISTS",))

    return result.value


@router.post(
    "/accept/{token}", status_code=status.HTTP_200_OK, response_model=AcceptInvitationResponse
)
async def accept_invitation(
    token: str,
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Join a team with an invitation token.

    Raises:
        - 400 Bad Request: Invitation not pending or expired
        - 404 Not Found: Unknown token
        - 409 Conflict: Caller already belongs to the team
    """
    use_case = AcceptInvitationUseCase(uow)
    result = await use_case.execute(token, principal)

    if result.is_err():
        _raise_team_error(result.error, conflict_codes=("ALREADY_MEMBER",))

    return result.value


@router.post(
    "/deny/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=InvitationStatusResponse,
)
async def deny_invitation(
    invitation_id: UUID,
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Withdraw a pending invitation (team owner only).
    """
    use_case = DenyInvitationUseCase(uow)
    result = await use_case.execute(principal, invitation_id)

    if result.is_err():
        _raise_team_error(result.error)

    return result.value


@router.post(
    "/resend/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=InvitationStatusResponse,
)
async def resend_invitation(
    invitation_id: UUID,
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: ServiceContext = Depends(get_services),
):
    """
    Restart the expiry of a pending invitation and mail it again.
    """
    use_case = ResendInvitationUseCase(
        uow, services.mailer, services.templates, services.invitation_ttl
    )
    result = await use_case.execute(principal, invitation_id)

    if result.is_err():
        _raise_team_error(result.error)

    return result.value


@router.get("/{team_id}", status_code=status.HTTP_200_OK, response_model=TeamDetailResponse)
async def get_team(
    team_id: UUID,
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Owner view of a team with its active members and open invitations.
    """
    use_case = GetTeamUseCase(uow)
    result = await use_case.execute(principal, team_id)

    if result.is_err():
        _raise_team_error(result.error)

    return result.value


@router.delete(
    "/{team_id}/members/{member_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    team_id: UUID,
    member_id: UUID,
    principal: Principal = Depends(require_team_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove a member from a team (team owner only).
    """
    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(principal, team_id, member_id)

    if result.is_err():
        _raise_team_error(result.error)

    return result.value
