from app.db.base_class import Base

# Import all models here for Alembic
from app.models.user import User
from app.models.sensor import Sensor
from app.models.measurement import Measurement
