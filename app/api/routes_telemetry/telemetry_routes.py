from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_heartbeat_store, get_messenger
from app.core.config import settings
from app.core.exceptions import SensorNotConfigured, StorageError
from app.db.repository import SensorRepository
from app.db.session import get_db
from app.services.alert_service import cooldown_window
from app.services.heartbeat_store import DeviceHeartbeatSnapshot, DeviceHeartbeatStore
from app.services.ingest_service import ingest_reading
from app.utils.time_utils import utcnow
from .schemas import HeartbeatReport, TelemetryReading

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Telemetry"])


@router.post("/data", response_class=PlainTextResponse)
def receive_reading(reading: TelemetryReading, db: Session = Depends(get_db), messenger=Depends(get_messenger)):
    """
    Store a reading from a field unit and alert the owner when the
    temperature is above the sensor threshold.
    """
    try:
        ingest_reading(
            SensorRepository(db),
            messenger,
            hardware_id=reading.sensor_id,
            temperature_c=reading.temp_c,
            voltage_v=reading.voltage_v,
            cooldown=cooldown_window(settings.ALERT_COOLDOWN),
        )
        return "OK"

    except SensorNotConfigured:
        raise HTTPException(status_code=404, detail="Sensor not configured")
    except StorageError:
        raise HTTPException(status_code=500, detail="Internal server error")
    except Exception:
        logger.exception(f"Error ingesting reading from {reading.sensor_id}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/device/heartbeat")
def receive_heartbeat(report: HeartbeatReport, store: DeviceHeartbeatStore = Depends(get_heartbeat_store)):
    """Record the gateway's latest status report."""
    snapshot = DeviceHeartbeatSnapshot(online=True, ip=report.ip, mapping=report.mapping, timestamp=utcnow())
    store.write(snapshot)
    logger.info(f"Heartbeat from {report.ip} ({len(report.mapping)} sensors mapped)")
    return {"success": True}
