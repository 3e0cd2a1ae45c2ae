from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from app.db.base_class import Base, BigIntId


class User(Base):
    __tablename__ = "users"

    id = Column(BigIntId, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    whatsapp = Column(String(50), nullable=True, index=True)  # E.g.: "5491122334455"
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    sensors = relationship("Sensor", back_populates="owner", cascade="all, delete-orphan")
