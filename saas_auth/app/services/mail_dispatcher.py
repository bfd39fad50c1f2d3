from abc import ABC, abstractmethod
from dataclasses import dataclass


class MailDeliveryError(Exception):
    """Raised when the mail transport fails to accept a message"""


@dataclass(frozen=True)
class MailMessage:
    subject: str
    body: str


class IMailDispatcher(ABC):
    """Outbound mail interface - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> None:
        """
        Deliver a plain-text message.

        Raises:
            MailDeliveryError: transport rejected or could not be reached
        """
        pass

    async def send_message(self, to: str, message: MailMessage) -> None:
        await self.send(to, message.subject, message.body)

    async def close(self) -> None:
        """Release transport resources"""
        return None


class MailTemplates:
    """Plain-text bodies for every mail the service sends"""

    def __init__(self, reset_password_url: str, team_invitation_url: str):
        self.reset_password_url = reset_password_url
        self.team_invitation_url = team_invitation_url

    def verification_code(self, code: str) -> MailMessage:
        return MailMessage(
            subject="Code Verification",
            body=(
                "Dear user,\n"
                f"Your email verification code is: {code}\n"
                "It expires in a few minutes."
            ),
        )

    def reset_password_code(self, code: str) -> MailMessage:
        return MailMessage(
            subject="Reset password",
            body=(
                "Dear user,\n"
                f"Your password reset code is: {code}\n"
                f"Enter it at {self.reset_password_url} to choose a new password.\n"
                "If you did not request a password reset, ignore this email."
            ),
        )

    def team_invitation(self, team_name: str, inviter_name: str, token: str) -> MailMessage:
        return MailMessage(
            subject="Team Invitation",
            body=(
                "Dear user,\n"
                f"{inviter_name} invited you to join the team {team_name}.\n"
                f"To accept, click on this link: {self.team_invitation_url}?token={token}"
            ),
        )
