import json
from dataclasses import dataclass
from email.utils import formataddr
from typing import Any

from contact_relay.core.mailer import MailMessage
from contact_relay.core.settings import Settings


@dataclass(frozen=True)
class ContactSubmission:
    name: str = ""
    email: str = ""
    whatsapp: str = ""
    message: str = ""


def field_text(value: Any) -> str:
    """Text form of one JSON value as it lands in the mail body."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def build_contact_message(submission: ContactSubmission, settings: Settings) -> MailMessage:
    """
    Plain-text notification for one submission.

    Sender and recipient always come from configuration; the visitor's
    address only shows up inside the body.
    """
    text = (
        f"Nome: {submission.name}\n"
        f"E-mail: {submission.email}\n"
        f"WhatsApp: {submission.whatsapp}\n"
        f"Mensagem: {submission.message}"
    )
    return MailMessage(
        sender=formataddr((settings.sender_name, settings.email_user)),
        to=settings.receiver_email,
        subject=settings.email_subject,
        text=text,
    )
