from pydantic import BaseModel, ConfigDict, Field


class SensorConfig(BaseModel):
    """
    Sensor registration / update sent from the dashboard.

    Example:
        {"hardwareId": "HELADERA-01", "friendlyName": "Freezer cocina", "alertThreshold": -12}
    """
    model_config = ConfigDict(populate_by_name=True)

    hardware_id: str = Field(..., alias="hardwareId", min_length=1, max_length=100)
    friendly_name: str = Field(..., alias="friendlyName", min_length=1, max_length=100)
    alert_threshold: float = Field(..., alias="alertThreshold")
