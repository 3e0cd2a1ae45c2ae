"""Domain errors raised by the service layer and translated by the routes."""


class MonitorError(Exception):
    """Base class for every error raised by the monitoring services."""


class SensorNotConfigured(MonitorError):
    """A reading arrived for a hardware id with no sensor record."""

    def __init__(self, hardware_id: str):
        super().__init__(f"Sensor {hardware_id} is not configured")
        self.hardware_id = hardware_id


class NotFound(MonitorError):
    pass


class StorageError(MonitorError):
    """A database operation failed; details stay in the logs."""


class UpstreamNotifyError(MonitorError):
    """The chat platform or the chart service could not be reached."""


class AuthenticationError(MonitorError):
    pass


class RegistrationError(MonitorError):
    pass
