from fastapi import Request

from app.services.chart_service import render_temperature_chart
from app.services.heartbeat_store import DeviceHeartbeatStore
from app.services.whatsapp_client import WhatsAppClient


def get_messenger() -> WhatsAppClient:
    return WhatsAppClient()


def get_chart_renderer():
    return render_temperature_chart


def get_heartbeat_store(request: Request) -> DeviceHeartbeatStore:
    return request.app.state.heartbeat_store
