"""
Team Use Cases

Team creation and listing, and the invitation lifecycle.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .create_team_use_case import CreateTeamUseCase
from .deny_invitation_use_case import DenyInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    InvitationInfo,
    InvitationStatusResponse,
    InviteMemberResponse,
    RemoveMemberResponse,
    TeamDetailResponse,
    TeamMemberInfo,
    TeamResponse,
)
from .get_team_use_case import GetTeamUseCase
from .invite_member_use_case import InviteMemberUseCase
from .list_teams_use_case import ListTeamsUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .resend_invitation_use_case import ResendInvitationUseCase

__all__ = [
    # Use Cases
    "AcceptInvitationUseCase",
    "CreateTeamUseCase",
    "DenyInvitationUseCase",
    "GetTeamUseCase",
    "InviteMemberUseCase",
    "ListTeamsUseCase",
    "RemoveMemberUseCase",
    "ResendInvitationUseCase",
    # DTOs
    "AcceptInvitationResponse",
    "InvitationInfo",
    "InvitationStatusResponse",
    "InviteMemberResponse",
    "RemoveMemberResponse",
    "TeamDetailResponse",
    "TeamMemberInfo",
    "TeamResponse",
]
