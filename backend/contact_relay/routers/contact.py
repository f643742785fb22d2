import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contact_relay.core.mailer import MailTransport
from contact_relay.core.settings import Settings
from contact_relay.dependencies import get_app_settings, get_transport
from contact_relay.lib.compose import ContactSubmission, build_contact_message, field_text

router = APIRouter(tags=["contact"])
log = logging.getLogger("uvicorn.error")

SENT_MESSAGE = "E-mail enviado com sucesso!"
FAILED_MESSAGE = "Erro ao enviar e-mail."


class ContactIn(BaseModel):
    # unvalidated; whatever arrives is relayed as text
    name: Any = None
    email: Any = None
    whatsapp: Any = None
    message: Any = None

    def to_submission(self) -> ContactSubmission:
        return ContactSubmission(
            name=field_text(self.name),
            email=field_text(self.email),
            whatsapp=field_text(self.whatsapp),
            message=field_text(self.message),
        )


class SendOut(BaseModel):
    message: str


@router.post("/send-email", response_model=SendOut, responses={500: {"model": SendOut}})
async def send_email(
    payload: Any = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    transport: MailTransport = Depends(get_transport),
):
    # non-object JSON ([], "x", 3) carries no fields
    fields = payload if isinstance(payload, dict) else {}
    submission = ContactIn.model_validate(fields).to_submission()
    mail = build_contact_message(submission, settings)
    try:
        await transport.send(mail)
    except Exception as e:
        log.exception(f"[contact] send failed: {e!r}")
        return JSONResponse(status_code=500, content={"message": FAILED_MESSAGE})
    log.info(f"[contact] relayed submission to {mail.to}")
    return {"message": SENT_MESSAGE}
