"""
Team Use Case DTOs (Data Transfer Objects)

Response classes for the team and invitation domain.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from saas_auth.domain.entities import Team, TeamInvitation, TeamMember, User


# ============================================================================
# Response DTOs
# ============================================================================


class TeamResponse(BaseModel):
    """Team summary"""

    id: str
    name: str
    owner_id: str
    created_at: datetime
    is_owner: bool

    @classmethod
    def from_team(cls, team: Team, viewer_id) -> "TeamResponse":
        return cls(
            id=str(team.id),
            name=team.name,
            owner_id=str(team.owner_id),
            created_at=team.created_at,
            is_owner=team.owner_id == viewer_id,
        )


class TeamMemberInfo(BaseModel):
    """Active member of a team"""

    id: str
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    username: Optional[str] = None
    role: str
    joined_at: datetime

    @classmethod
    def from_member(cls, member: TeamMember, user: Optional[User]) -> "TeamMemberInfo":
        return cls(
            id=str(member.id),
            user_id=str(member.user_id),
            email=user.email if user else None,
            name=user.name if user else None,
            username=user.username if user else None,
            role=member.role.value,
            joined_at=member.joined_at,
        )


class InvitationInfo(BaseModel):
    """Pending or denied invitation of a team"""

    id: str
    email: str
    status: str
    expires_at: datetime
    created_at: datetime
    is_expired: bool

    @classmethod
    def from_invitation(cls, invitation: TeamInvitation, now: datetime) -> "InvitationInfo":
        return cls(
            id=str(invitation.id),
            email=invitation.email,
            status=invitation.status.value,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            is_expired=invitation.is_expired(now),
        )


class TeamDetailResponse(BaseModel):
    """Owner view of a team"""

    team: TeamResponse
    members: List[TeamMemberInfo]
    invitations: List[InvitationInfo]


class InviteMemberResponse(BaseModel):
    """Response for invite member use case"""

    invitation_id: str
    status: str
    expires_at: datetime


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    team_id: str
    member_id: str
    status: str


class InvitationStatusResponse(BaseModel):
    """Response for deny and resend invitation use cases"""

    invitation_id: str
    status: str
    expires_at: datetime


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    member_id: str
    left_at: datetime
