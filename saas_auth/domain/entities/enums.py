"""
Domain Enums

All enumeration types used across domain entities and services.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account-level access role"""

    individual = "individual"
    team = "team"
    admin = "admin"


class TeamMemberRole(str, Enum):
    """Role of a user inside a team"""

    member = "member"


class InvitationStatus(str, Enum):
    """Team invitation status"""

    pending = "pending"
    accepted = "accepted"
    denied = "denied"


class TokenType(str, Enum):
    """Discriminator embedded in every signed token"""

    access = "access"
    refresh = "refresh"
    reset_password = "reset_password"
    verify_email = "verify_email"


class CodePurpose(str, Enum):
    """Flow a mailed verification code is requested for"""

    email_verification = "email-verification"
    forgot_password = "forgot-password"
