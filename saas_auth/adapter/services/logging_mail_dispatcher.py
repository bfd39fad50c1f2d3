import logging

from saas_auth.app.services.mail_dispatcher import IMailDispatcher

logger = logging.getLogger(__name__)


class LoggingMailDispatcher(IMailDispatcher):
    """Development dispatcher: writes each message to the log instead of sending it"""

    async def send(self, to: str, subject: str, body: str) -> None:
        logger.info(f"Email '{subject}' to {to}:\n{body}")
