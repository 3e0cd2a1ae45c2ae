from fastapi import APIRouter, Depends

from app.api.deps import get_heartbeat_store
from app.core.security import TokenUser, get_current_user
from app.services.heartbeat_store import DeviceHeartbeatStore

router = APIRouter(tags=["Device"])


@router.get("/status")
def device_status(
    current: TokenUser = Depends(get_current_user),
    store: DeviceHeartbeatStore = Depends(get_heartbeat_store),
):
    """Last heartbeat reported by the gateway. Not refreshed by any timeout."""
    return store.read().to_dict()
