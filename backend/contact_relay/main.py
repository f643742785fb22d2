# contact_relay/main.py
# run it with uvicorn contact_relay.main:app --reload  (or: contact-relay)
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_relay.core.mailer import MailTransport, SmtpTransport
from contact_relay.core.settings import Settings, get_settings
from contact_relay.routers.contact import router as contact_router
from contact_relay.routers.health import router as health_router

log = logging.getLogger("uvicorn.error")


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[MailTransport] = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.api_title)

    app.state.settings = settings
    app.state.transport = transport or SmtpTransport.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(contact_router)
    app.include_router(health_router)
    return app


app = create_app()


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    log.info(f"[main] listening on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
