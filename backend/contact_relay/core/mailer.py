# contact_relay/core/mailer.py
import asyncio
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formatdate, make_msgid, parseaddr
from typing import Optional, Protocol, Union

from contact_relay.core.settings import Settings, resolve_smtp_port

log = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class MailMessage:
    sender: str     # '"Display Name" <addr>'
    to: str
    subject: str
    text: str


class MailDeliveryError(RuntimeError):
    """The server accepted the connection but the message went nowhere."""


class MailTransport(Protocol):
    async def send(self, message: MailMessage) -> None:
        """Deliver one message, raising on any failure."""
        ...


class SmtpTransport:
    """
    Submits messages to an SMTP server with smtplib.

    One instance is shared by every request; each send opens its own
    connection in a worker thread, so there is no state to guard.
    secure=True speaks SSL from the first byte (port 465), otherwise the
    connection starts in plaintext and upgrades with STARTTLS when the
    server offers it (port 587).
    """

    def __init__(
        self,
        host: str,
        port: Union[int, str, None] = None,
        secure: bool = False,
        user: str = "",
        password: str = "",
        timeout: Optional[float] = None,
    ):
        self.host = host
        self.port = port
        self.secure = secure
        self.user = user
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpTransport":
        return cls(
            host=settings.email_host,
            port=settings.email_port,
            secure=settings.secure,
            user=settings.email_user,
            password=settings.email_pass,
        )

    async def send(self, message: MailMessage) -> None:
        await asyncio.to_thread(self._send_sync, message)

    def _connect(self) -> smtplib.SMTP:
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        port = resolve_smtp_port(self.port, self.secure)
        if self.secure:
            return smtplib.SMTP_SSL(
                self.host, port, context=ssl.create_default_context(), **kwargs
            )
        return smtplib.SMTP(self.host, port, **kwargs)

    def _send_sync(self, message: MailMessage) -> None:
        if not message.to:
            raise MailDeliveryError("no recipient configured")

        msg = to_email_message(message)
        with self._connect() as smtp:
            smtp.ehlo()
            if not self.secure and smtp.has_extn("starttls"):
                smtp.starttls(context=ssl.create_default_context())
                smtp.ehlo()
            if self.user:
                smtp.login(self.user, self.password)
            refused = smtp.send_message(msg)

        if refused:
            raise MailDeliveryError(f"recipients refused: {sorted(refused)}")
        log.info(f"[mailer] sent message via {self.host} to {message.to}")


def to_email_message(message: MailMessage) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = message.sender
    msg["To"] = message.to
    msg["Subject"] = message.subject
    msg["Date"] = formatdate(localtime=True)
    domain = parseaddr(message.sender)[1].rpartition("@")[2] or None
    msg["Message-ID"] = make_msgid(domain=domain)
    msg.set_content(message.text, charset="utf-8")
    return msg
