# app/utils/message_utils.py
from typing import Optional, Tuple


def normalize_command(text: Optional[str]) -> str:
    """Lowercase and trim incoming chat text."""
    return (text or "").lower().strip()


def contact_from_jid(remote_jid: str) -> str:
    """'5491122334455@s.whatsapp.net' -> '5491122334455'"""
    return (remote_jid or "").split("@")[0]


def extract_incoming_text(envelope: dict) -> Optional[Tuple[str, str]]:
    """
    Pull ``(contact, text)`` out of an Evolution API webhook envelope.

    Returns None for events that carry no message or that the instance
    sent itself.
    """
    data = (envelope or {}).get("data") or {}
    message = data.get("message")
    if not message:
        return None

    key = data.get("key") or {}
    if key.get("fromMe"):
        return None

    contact = contact_from_jid(key.get("remoteJid", ""))
    if not contact:
        return None

    text = message.get("conversation") or (message.get("extendedTextMessage") or {}).get("text") or ""
    return contact, text
