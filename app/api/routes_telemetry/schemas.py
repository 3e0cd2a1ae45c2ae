from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class TelemetryReading(BaseModel):
    """
    Reading posted by a field unit.

    Example:
        {"sensorId": "HELADERA-01", "tempC": 4.5, "voltageV": 3.3}
    """
    model_config = ConfigDict(populate_by_name=True)

    sensor_id: str = Field(..., alias="sensorId", min_length=1)
    temp_c: float = Field(..., alias="tempC")
    voltage_v: Optional[float] = Field(None, alias="voltageV")


class HeartbeatReport(BaseModel):
    ip: str = "--"
    mapping: List[Dict[str, Any]] = Field(default_factory=list)
