from app.models.user import User
from app.models.sensor import Sensor
from app.models.measurement import Measurement

__all__ = [
    "User",
    "Sensor",
    "Measurement",
]
