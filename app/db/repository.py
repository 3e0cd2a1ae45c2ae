"""
Data access for the alert and command pipelines.

Services depend on this class instead of querying the session directly,
so the pipelines can be exercised against any SQLAlchemy backend.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import StorageError
from app.models.measurement import Measurement
from app.models.sensor import Sensor
from app.models.user import User

logger = logging.getLogger(__name__)


class SensorRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_sensor_with_owner(self, hardware_id: str) -> Optional[Sensor]:
        return (
            self.db.query(Sensor)
            .options(joinedload(Sensor.owner))
            .filter(Sensor.hardware_id == hardware_id)
            .first()
        )

    def add_measurement(self, hardware_id: str, temperature_c: float, voltage_v: Optional[float],
                        timestamp: datetime) -> Measurement:
        measurement = Measurement(
            sensor_id=hardware_id,
            temperature_c=temperature_c,
            voltage_v=voltage_v,
            timestamp=timestamp,
        )
        try:
            self.db.add(measurement)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Could not store measurement for {hardware_id}") from e
        return measurement

    def claim_alert_slot(self, sensor: Sensor, previous: Optional[datetime], now: datetime) -> bool:
        """
        Compare-and-set ``last_alert_sent`` from ``previous`` to ``now``.

        Returns False when another request already moved the timestamp,
        so only one of two concurrent ingests sends the alert.
        """
        stmt = update(Sensor).where(Sensor.id == sensor.id)
        if previous is None:
            stmt = stmt.where(Sensor.last_alert_sent.is_(None))
        else:
            stmt = stmt.where(Sensor.last_alert_sent == previous)
        stmt = stmt.values(last_alert_sent=now).execution_options(synchronize_session=False)

        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(f"Could not update last alert for {sensor.hardware_id}") from e

        self.db.expire(sensor, ["last_alert_sent"])
        return result.rowcount == 1

    def find_user_by_contact(self, contact: str) -> Optional[User]:
        return self.db.query(User).filter(User.whatsapp == contact).first()

    def owned_sensors(self, user_id: int, enabled_only: bool = True) -> List[Sensor]:
        query = self.db.query(Sensor).filter(Sensor.owner_id == user_id)
        if enabled_only:
            query = query.filter(Sensor.enabled.is_(True))
        return query.order_by(Sensor.id).all()

    def find_owned_sensor_by_name(self, user_id: int, text: str) -> Optional[Sensor]:
        """Case-insensitive substring match on the display name."""
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return (
            self.db.query(Sensor)
            .filter(
                Sensor.owner_id == user_id,
                Sensor.friendly_name.ilike(f"%{escaped}%", escape="\\"),
            )
            .order_by(Sensor.id)
            .first()
        )

    def latest_measurement(self, hardware_id: str) -> Optional[Measurement]:
        return (
            self.db.query(Measurement)
            .filter(Measurement.sensor_id == hardware_id)
            .order_by(Measurement.timestamp.desc(), Measurement.id.desc())
            .first()
        )

    def recent_measurements(self, hardware_id: str, limit: int) -> List[Measurement]:
        """Newest first."""
        return (
            self.db.query(Measurement)
            .filter(Measurement.sensor_id == hardware_id)
            .order_by(Measurement.timestamp.desc(), Measurement.id.desc())
            .limit(limit)
            .all()
        )
