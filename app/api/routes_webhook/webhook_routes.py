from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_chart_renderer, get_messenger
from app.db.repository import SensorRepository
from app.db.session import get_db
from app.services.command_service import CommandResponder
from app.utils.message_utils import extract_incoming_text

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Webhook"])

ACK = {"status": "ok"}


async def read_envelope(request: Request) -> Any:
    """Parse the body here so unreadable JSON is acknowledged, not rejected."""
    try:
        return await request.json()
    except ValueError:
        logger.warning("WhatsApp webhook body is not valid JSON")
        return None


@router.post("/whatsapp")
def whatsapp_webhook(
    envelope: Any = Depends(read_envelope),
    db: Session = Depends(get_db),
    messenger=Depends(get_messenger),
    chart_renderer=Depends(get_chart_renderer),
):
    """
    Inbound Evolution API events. Always acknowledged with 200 so the
    platform never retries because of an internal failure.
    """
    try:
        incoming = extract_incoming_text(envelope if isinstance(envelope, dict) else {})
        if incoming is None:
            return ACK

        contact, text = incoming
        responder = CommandResponder(SensorRepository(db), messenger, chart_renderer=chart_renderer)
        responder.respond(contact, text)

    except Exception:
        logger.exception("Error handling WhatsApp webhook")
    return ACK
