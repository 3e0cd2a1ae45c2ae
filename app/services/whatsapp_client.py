# app/services/whatsapp_client.py
import logging

import requests

from app.core.config import settings
from app.core.exceptions import UpstreamNotifyError

logger = logging.getLogger(__name__)


class WhatsAppClient:
    """Sends text and image messages through an Evolution API instance."""

    def __init__(self, base_url: str = None, instance: str = None, api_key: str = None, timeout: float = None):
        self.base_url = (base_url or settings.EVOLUTION_API_URL).rstrip("/")
        self.instance = instance or settings.EVOLUTION_INSTANCE
        self.api_key = api_key if api_key is not None else settings.EVOLUTION_API_KEY
        self.timeout = timeout or settings.OUTBOUND_TIMEOUT

    def _post(self, action: str, payload: dict) -> None:
        url = f"{self.base_url}/message/{action}/{self.instance}"
        try:
            response = requests.post(
                url,
                json=payload,
                headers={"apikey": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamNotifyError(f"{action} to {payload.get('number')} failed: {e}") from e

        if not response.ok:
            raise UpstreamNotifyError(
                f"{action} to {payload.get('number')} returned HTTP {response.status_code}"
            )
        logger.info(f"{action} delivered to {payload.get('number')}")

    def send_text(self, number: str, text: str) -> None:
        self._post("sendText", {"number": number, "text": text})

    def send_image(self, number: str, image_url: str, caption: str = "") -> None:
        self._post("sendImage", {"number": number, "url": image_url, "caption": caption})
