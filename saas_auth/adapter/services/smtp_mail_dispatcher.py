import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from saas_auth.app.services.mail_dispatcher import IMailDispatcher, MailDeliveryError

logger = logging.getLogger(__name__)


class SmtpMailDispatcher(IMailDispatcher):
    """Delivers plain-text mail over SMTP.

    smtplib is blocking, so each message is sent from a worker thread.
    """

    def __init__(
        self,
        host: str,
        port: int,
        from_email: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.from_email = from_email
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _deliver(self, to: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.from_email, [to], msg.as_string())

    async def send(self, to: str, subject: str, body: str) -> None:
        try:
            await asyncio.to_thread(self._deliver, to, subject, body)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{subject}' to {to}: {e}")
            raise MailDeliveryError(f"Failed to send email: {e}") from e
        logger.info(f"Email '{subject}' sent to {to}")
