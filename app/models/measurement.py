from sqlalchemy import Column, String, Float, DateTime, Index
from datetime import datetime, timezone
from app.db.base_class import Base, BigIntId


class Measurement(Base):
    __tablename__ = "measurements"

    id = Column(BigIntId, primary_key=True, index=True, autoincrement=True)
    # Hardware id, not a foreign key: readings may outlive their sensor
    sensor_id = Column(String(100), nullable=False, index=True)
    temperature_c = Column(Float, nullable=False)
    voltage_v = Column(Float, nullable=True)
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    __table_args__ = (
        Index("ix_measurements_sensor_timestamp", "sensor_id", "timestamp"),
    )
