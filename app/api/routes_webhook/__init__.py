from fastapi import APIRouter
from app.api.routes_webhook.webhook_routes import router as webhook_routes

router = APIRouter(prefix="/api/webhook", tags=["Webhook"])
router.include_router(webhook_routes)
