"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    CodePurpose,
    InvitationStatus,
    TeamMemberRole,
    TokenType,
    UserRole,
)

# Export all entities
from .user import User
from .team import Team
from .team_member import TeamMember
from .team_invitation import TeamInvitation
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "CodePurpose",
    "InvitationStatus",
    "TeamMemberRole",
    "TokenType",
    "UserRole",
    # Entities
    "User",
    "Team",
    "TeamMember",
    "TeamInvitation",
    "AuditEvent",
]
