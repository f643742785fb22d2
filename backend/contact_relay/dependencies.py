# backend/contact_relay/dependencies.py
from fastapi import Request

from contact_relay.core.mailer import MailTransport
from contact_relay.core.settings import Settings


# Both objects are built once in create_app and parked on app.state;
# handlers receive them through Depends so tests can swap them per app.
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_transport(request: Request) -> MailTransport:
    return request.app.state.transport
