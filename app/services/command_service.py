"""
Conversational commands received over WhatsApp.

Supported commands (case-insensitive):
  - ``estado``: one status line per enabled sensor of the user.
  - ``historial <name>``: chart of the last readings of the first sensor
    whose name contains ``<name>``.
Anything else is ignored.
"""
import logging
from typing import Callable, List

from app.core.config import settings
from app.core.exceptions import UpstreamNotifyError
from app.db.repository import SensorRepository
from app.services.alert_service import format_temperature
from app.services.chart_service import render_temperature_chart
from app.utils.message_utils import normalize_command
from app.utils.time_utils import format_local_time

logger = logging.getLogger(__name__)

STATUS_COMMAND = "estado"
HISTORY_COMMAND = "historial"
HISTORY_POINTS = 10


class CommandResponder:
    def __init__(
        self,
        repo: SensorRepository,
        messenger,
        chart_renderer: Callable[[List[str], List[float]], str] = render_temperature_chart,
        timezone: str = None,
    ):
        self.repo = repo
        self.messenger = messenger
        self.chart_renderer = chart_renderer
        self.timezone = timezone or settings.TIMEZONE

    def respond(self, from_contact: str, raw_text: str) -> None:
        user = self.repo.find_user_by_contact(from_contact)
        if user is None:
            logger.info(f"Ignoring message from unknown contact {from_contact}")
            return

        text = normalize_command(raw_text)
        logger.info(f"Command received: {text}")

        try:
            if text == STATUS_COMMAND:
                self._send_status(user, from_contact)
            elif text.startswith(HISTORY_COMMAND):
                query = text[len(HISTORY_COMMAND):].strip()
                self._send_history(user, from_contact, query)
        except UpstreamNotifyError as e:
            logger.error(f"Reply to {from_contact} not delivered: {e}")

    def build_status_report(self, user) -> str:
        report = "📋 *REPORTE DE EQUIPOS*\n\n"
        for sensor in self.repo.owned_sensors(user.id):
            last = self.repo.latest_measurement(sensor.hardware_id)
            temp = format_temperature(last.temperature_c) if last else "N/A"
            icon = "🔴" if last and last.temperature_c > sensor.alert_threshold else "🟢"
            report += f"{icon} *{sensor.friendly_name}*: {temp}\n"
        return report

    def _send_status(self, user, contact: str) -> None:
        self.messenger.send_text(contact, self.build_status_report(user))

    def _send_history(self, user, contact: str, query: str) -> None:
        sensor = self.repo.find_owned_sensor_by_name(user.id, query)
        if sensor is None:
            self.messenger.send_text(contact, f'❌ No encontré el equipo "{query}"')
            return

        docs = self.repo.recent_measurements(sensor.hardware_id, HISTORY_POINTS)
        if not docs:
            # TODO: answer with a "no data yet" text once the wording is agreed with users
            logger.info(f"No readings to chart for {sensor.friendly_name}")
            return

        docs = list(reversed(docs))
        labels = [format_local_time(m.timestamp, self.timezone) for m in docs]
        values = [m.temperature_c for m in docs]
        image_url = self.chart_renderer(labels, values)
        self.messenger.send_image(contact, image_url, f"📊 Historial: {sensor.friendly_name}")
