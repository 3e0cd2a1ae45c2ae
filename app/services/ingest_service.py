"""
Telemetry ingestion: store the reading, then run the alert pipeline.

The reading is evaluated for alerts even when storing it failed; the
storage failure is re-raised afterwards so the device still sees an error.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from app.core.exceptions import SensorNotConfigured, StorageError, UpstreamNotifyError
from app.db.repository import SensorRepository
from app.services.alert_service import build_alert_message, should_alert
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    hardware_id: str
    alert_sent: bool


def ingest_reading(
    repo: SensorRepository,
    messenger,
    hardware_id: str,
    temperature_c: float,
    voltage_v: Optional[float],
    cooldown: timedelta,
    now: Optional[datetime] = None,
) -> IngestResult:
    now = now or utcnow()

    sensor = repo.get_sensor_with_owner(hardware_id)
    if sensor is None:
        logger.warning(f"Reading discarded, sensor {hardware_id} not configured")
        raise SensorNotConfigured(hardware_id)

    storage_error = None
    try:
        repo.add_measurement(hardware_id, temperature_c, voltage_v, now)
    except StorageError as e:
        logger.exception("Measurement write failed for %s", hardware_id)
        storage_error = e

    alert_sent = _process_alert(repo, messenger, sensor, temperature_c, cooldown, now)

    if storage_error is not None:
        raise storage_error
    return IngestResult(hardware_id=hardware_id, alert_sent=alert_sent)


def _process_alert(repo, messenger, sensor, temperature_c, cooldown, now) -> bool:
    contact = sensor.owner.whatsapp if sensor.owner else None
    if not contact:
        return False

    previous = sensor.last_alert_sent
    if not should_alert(temperature_c, sensor.alert_threshold, previous, now, cooldown):
        if temperature_c > sensor.alert_threshold:
            logger.info(f"Cooldown active for {sensor.friendly_name}")
        return False

    # Claim the cooldown slot first; a lost race means another request alerts.
    try:
        if not repo.claim_alert_slot(sensor, previous, now):
            logger.info(f"Alert for {sensor.friendly_name} already sent by a concurrent request")
            return False
    except StorageError:
        logger.exception("Could not record alert time for %s, sending anyway", sensor.hardware_id)

    try:
        messenger.send_text(contact, build_alert_message(sensor.friendly_name, temperature_c))
    except UpstreamNotifyError as e:
        logger.error(f"Alert for {sensor.friendly_name} not delivered: {e}")
        return False

    logger.info(f"Alert sent for {sensor.friendly_name} ({temperature_c}°C)")
    return True
