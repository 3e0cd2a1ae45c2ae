from sqlalchemy import Column, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db.base_class import Base, BigIntId


class Sensor(Base):
    __tablename__ = "sensors"

    id = Column(BigIntId, primary_key=True, index=True, autoincrement=True)
    hardware_id = Column(String(100), unique=True, index=True, nullable=False)  # E.g.: "HELADERA-01"
    friendly_name = Column(String(100), nullable=False)
    alert_threshold = Column(Float, nullable=False)
    owner_id = Column(BigIntId, ForeignKey("users.id"), nullable=False, index=True)
    enabled = Column(Boolean, default=True, nullable=False)
    last_alert_sent = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("User", back_populates="sensors")
