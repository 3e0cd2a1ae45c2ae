# app/services/sensor_service.py
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, StorageError
from app.db.repository import SensorRepository
from app.models.measurement import Measurement
from app.models.sensor import Sensor

logger = logging.getLogger(__name__)


def _iso(value):
    return value.isoformat() if value else None


def sensor_to_dict(sensor: Sensor) -> dict:
    return {
        "hardwareId": sensor.hardware_id,
        "friendlyName": sensor.friendly_name,
        "alertThreshold": sensor.alert_threshold,
        "owner": sensor.owner_id,
        "enabled": sensor.enabled,
        "lastAlertSent": _iso(sensor.last_alert_sent),
    }


def measurement_to_dict(m: Measurement) -> dict:
    return {
        "sensorId": m.sensor_id,
        "temperatureC": m.temperature_c,
        "voltageV": m.voltage_v,
        "timestamp": _iso(m.timestamp),
    }


def get_latest_readings(db: Session, user_id: int) -> List[dict]:
    """Latest reading per enabled sensor of the user (nulls when none yet)."""
    repo = SensorRepository(db)
    rows = []
    for sensor in repo.owned_sensors(user_id):
        last = repo.latest_measurement(sensor.hardware_id)
        rows.append({
            "hardwareId": sensor.hardware_id,
            "friendlyName": sensor.friendly_name,
            "alertThreshold": sensor.alert_threshold,
            "temperatureC": last.temperature_c if last else None,
            "voltageV": last.voltage_v if last else None,
            "timestamp": _iso(last.timestamp) if last else None,
        })
    return rows


def upsert_sensor(db: Session, user_id: int, hardware_id: str, friendly_name: str, alert_threshold: float) -> Sensor:
    """Create or update the sensor keyed by hardware id; the caller becomes its owner."""
    sensor = db.query(Sensor).filter(Sensor.hardware_id == hardware_id).first()
    if sensor is None:
        sensor = Sensor(hardware_id=hardware_id)
        db.add(sensor)
    elif sensor.owner_id != user_id:
        logger.warning(f"Sensor {hardware_id} reassigned from user {sensor.owner_id} to {user_id}")

    sensor.friendly_name = friendly_name
    sensor.alert_threshold = alert_threshold
    sensor.owner_id = user_id
    sensor.enabled = True

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Could not save sensor {hardware_id}") from e
    db.refresh(sensor)
    return sensor


def get_owned_history(db: Session, user_id: int, hardware_id: str, limit: int) -> List[dict]:
    sensor = (
        db.query(Sensor)
        .filter(Sensor.hardware_id == hardware_id, Sensor.owner_id == user_id)
        .first()
    )
    if sensor is None:
        raise NotFound(f"Sensor {hardware_id} not owned by user {user_id}")
    return [measurement_to_dict(m) for m in SensorRepository(db).recent_measurements(hardware_id, limit)]


def delete_sensor(db: Session, user_id: int, hardware_id: str) -> int:
    """Delete an owned sensor and all its readings. Returns the number of readings removed."""
    sensor = (
        db.query(Sensor)
        .filter(Sensor.hardware_id == hardware_id, Sensor.owner_id == user_id)
        .first()
    )
    if sensor is None:
        raise NotFound(f"Sensor {hardware_id} not owned by user {user_id}")

    try:
        db.delete(sensor)
        removed = (
            db.query(Measurement)
            .filter(Measurement.sensor_id == hardware_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError(f"Could not delete sensor {hardware_id}") from e

    logger.info(f"Sensor {hardware_id} deleted with {removed} measurements")
    return removed
