from fastapi import APIRouter
from app.api.routes_device.device_routes import router as device_routes

router = APIRouter(prefix="/api/device", tags=["Device"])
router.include_router(device_routes)
