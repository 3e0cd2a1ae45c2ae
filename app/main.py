# app/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
from app.api import routes_auth, routes_device, routes_sensors, routes_telemetry, routes_webhook
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.services.heartbeat_store import DeviceHeartbeatStore
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown events."""
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting application...")
    logger.info("Alert cooldown: %s minutes", settings.ALERT_COOLDOWN)

    # Lives for the whole process; reset only on restart
    app.state.heartbeat_store = DeviceHeartbeatStore()

    yield

    logger.info("Application shutdown complete.")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description="Refrigeration temperature monitoring with WhatsApp alerts",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Bad request bodies are answered with 400 instead of 422."""
    logger.info(f"Rejected request body on {request.url.path}")
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_errors(exc)},
    )


app.include_router(routes_telemetry.router)
app.include_router(routes_webhook.router)
app.include_router(routes_auth.router)
app.include_router(routes_sensors.router)
app.include_router(routes_device.router)

@app.get("/", tags=["Health"])
def health_check():
    """Basic health endpoint for uptime monitoring."""
    return {
        "status": "ok",
        "project": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
