import threading
from copy import deepcopy
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class DeviceHeartbeatSnapshot:
    online: bool = False
    ip: str = "--"
    mapping: List[Dict[str, Any]] = field(default_factory=list)
    timestamp: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat() if self.timestamp else None
        return data


class DeviceHeartbeatStore:
    """
    Last reported gateway status, kept in memory only.

    Last writer wins. ``online`` is whatever the last heartbeat said: there
    is no timeout that flips it back to offline.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = DeviceHeartbeatSnapshot()

    def read(self) -> DeviceHeartbeatSnapshot:
        with self._lock:
            return deepcopy(self._snapshot)

    def write(self, snapshot: DeviceHeartbeatSnapshot) -> None:
        with self._lock:
            self._snapshot = deepcopy(snapshot)
