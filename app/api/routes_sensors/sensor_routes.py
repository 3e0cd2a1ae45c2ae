from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
import logging

from app.core.config import ESP_HARDWARE_IDS
from app.core.exceptions import NotFound
from app.core.security import TokenUser, get_current_user
from app.db.session import get_db
from app.services import sensor_service
from .schemas import SensorConfig

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Sensors"])


@router.get("/latest")
def get_latest(current: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Latest reading of every enabled sensor owned by the caller."""
    try:
        return sensor_service.get_latest_readings(db, current.id)
    except Exception:
        logger.exception(f"Error retrieving latest readings for user {current.id}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/sensors/config")
def configure_sensor(
    config: SensorConfig,
    current: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        sensor = sensor_service.upsert_sensor(
            db, current.id, config.hardware_id, config.friendly_name, config.alert_threshold
        )
        logger.info(f"Sensor {sensor.hardware_id} configured by user {current.id}")
        return sensor_service.sensor_to_dict(sensor)
    except Exception:
        logger.exception(f"Error saving sensor {config.hardware_id}")
        raise HTTPException(status_code=500, detail="Error saving sensor")


@router.get("/history")
def get_history(
    sensor_id: str = Query(..., alias="sensorId"),
    limit: int = Query(100, ge=1),
    current: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Newest-first readings of a sensor owned by the caller."""
    try:
        return sensor_service.get_owned_history(db, current.id, sensor_id, limit)

    except NotFound:
        raise HTTPException(status_code=403, detail="Not authorized")
    except Exception:
        logger.exception(f"Error retrieving history for {sensor_id}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/sensors/{hardware_id}")
def delete_sensor(hardware_id: str, current: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        removed = sensor_service.delete_sensor(db, current.id, hardware_id)
        return {"message": "Deleted", "measurementsRemoved": removed}

    except NotFound:
        raise HTTPException(status_code=404, detail="Sensor not found")
    except Exception:
        logger.exception(f"Error deleting sensor {hardware_id}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/sensors/ids")
def list_hardware_ids(current: TokenUser = Depends(get_current_user)):
    return ESP_HARDWARE_IDS
