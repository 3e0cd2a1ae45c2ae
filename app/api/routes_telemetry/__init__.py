from fastapi import APIRouter
from app.api.routes_telemetry.telemetry_routes import router as telemetry_routes

router = APIRouter(prefix="/api", tags=["Telemetry"])
router.include_router(telemetry_routes)
