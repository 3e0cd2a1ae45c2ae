"""
Integration tests for the device-facing endpoints and the WhatsApp webhook.
"""
from fastapi.testclient import TestClient

from app.models.measurement import Measurement

CONTACT = "5491100000001"


def _envelope(text, jid=f"{CONTACT}@s.whatsapp.net", from_me=False):
    return {
        "event": "messages.upsert",
        "data": {
            "key": {"remoteJid": jid, "fromMe": from_me},
            "message": {"conversation": text},
        },
    }


# ============================================================================
# TELEMETRY ENDPOINTS
# ============================================================================

def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_data_from_unknown_sensor_is_rejected(client, db_session):
    response = client.post("/api/data", json={"sensorId": "HELADERA-99", "tempC": 5, "voltageV": 3.3})

    assert response.status_code == 404
    assert db_session.query(Measurement).count() == 0


def test_data_is_stored(client, db_session, messenger, make_user, make_sensor):
    make_sensor(make_user(), threshold=10.0)

    response = client.post("/api/data", json={"sensorId": "HELADERA-01", "tempC": 4.2, "voltageV": 3.3})

    assert response.status_code == 200
    assert response.text == "OK"
    stored = db_session.query(Measurement).one()
    assert stored.sensor_id == "HELADERA-01"
    assert stored.temperature_c == 4.2
    assert stored.voltage_v == 3.3
    assert messenger.texts == []


def test_data_above_threshold_notifies_owner(client, messenger, make_user, make_sensor):
    make_sensor(make_user(whatsapp=CONTACT), threshold=10.0)

    first = client.post("/api/data", json={"sensorId": "HELADERA-01", "tempC": 14, "voltageV": 3.3})
    second = client.post("/api/data", json={"sensorId": "HELADERA-01", "tempC": 15, "voltageV": 3.3})

    assert first.status_code == 200 and second.status_code == 200
    assert len(messenger.texts) == 1
    assert messenger.texts[0][0] == CONTACT


def test_notification_failure_is_not_reported_to_device(client, failing_messenger, make_user, make_sensor):
    from app.api.deps import get_messenger
    from app.main import app

    make_sensor(make_user(whatsapp=CONTACT), threshold=10.0)
    app.dependency_overrides[get_messenger] = lambda: failing_messenger

    response = client.post("/api/data", json={"sensorId": "HELADERA-01", "tempC": 30, "voltageV": 3.3})

    assert response.status_code == 200


def test_malformed_reading_is_a_validation_error(client):
    response = client.post("/api/data", json={"sensorId": "HELADERA-01", "tempC": "hot"})
    assert response.status_code == 400
    assert "detail" in response.json()


# ============================================================================
# DEVICE HEARTBEAT
# ============================================================================

def test_device_status_before_any_heartbeat(client, make_user, auth_headers):
    response = client.get("/api/device/status", headers=auth_headers(make_user()))

    assert response.status_code == 200
    assert response.json() == {"online": False, "ip": "--", "mapping": [], "timestamp": None}


def test_heartbeat_updates_device_status(client, make_user, auth_headers):
    mapping = [{"hardwareId": "HELADERA-01", "rssi": -60}]
    response = client.post("/api/device/heartbeat", json={"ip": "192.168.0.40", "mapping": mapping})
    assert response.status_code == 200

    status = client.get("/api/device/status", headers=auth_headers(make_user())).json()
    assert status["online"] is True
    assert status["ip"] == "192.168.0.40"
    assert status["mapping"] == mapping
    assert status["timestamp"] is not None


def test_device_status_requires_token(client):
    assert client.get("/api/device/status").status_code == 401


# ============================================================================
# WHATSAPP WEBHOOK
# ============================================================================

def test_webhook_status_command_replies(client, messenger, make_user, make_sensor, add_reading):
    make_sensor(make_user(whatsapp=CONTACT), name="S1", threshold=10.0)
    add_reading("HELADERA-01", 5.0)

    response = client.post("/api/webhook/whatsapp", json=_envelope("Estado"))

    assert response.status_code == 200
    assert len(messenger.texts) == 1
    assert "🟢 *S1*: 5°C" in messenger.texts[0][1]


def test_webhook_history_command_sends_chart(client, messenger, chart, make_user, make_sensor, add_reading):
    make_sensor(make_user(whatsapp=CONTACT), name="Freezer cocina")
    add_reading("HELADERA-01", 2.0, minutes=0)
    add_reading("HELADERA-01", 3.0, minutes=1)

    response = client.post("/api/webhook/whatsapp", json=_envelope("historial freezer"))

    assert response.status_code == 200
    assert len(messenger.images) == 1
    assert chart.calls[0][1] == [2.0, 3.0]


def test_webhook_ignores_unknown_sender(client, messenger, make_user):
    make_user(whatsapp=CONTACT)

    response = client.post("/api/webhook/whatsapp", json=_envelope("estado", jid="5490000000000@s.whatsapp.net"))

    assert response.status_code == 200
    assert messenger.texts == []


def test_webhook_ignores_own_messages(client, messenger, make_user):
    make_user(whatsapp=CONTACT)

    response = client.post("/api/webhook/whatsapp", json=_envelope("estado", from_me=True))

    assert response.status_code == 200
    assert messenger.texts == []


def test_webhook_acknowledges_malformed_events(client, messenger):
    assert client.post("/api/webhook/whatsapp", json={"event": "connection.update"}).status_code == 200
    assert client.post("/api/webhook/whatsapp", json={"data": "garbage"}).status_code == 200
    assert client.post("/api/webhook/whatsapp", json=[1, 2, 3]).status_code == 200
    assert messenger.texts == []


def test_webhook_acknowledges_unparseable_body(client, messenger):
    response = client.post(
        "/api/webhook/whatsapp",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert messenger.texts == []


def test_webhook_acknowledges_empty_body(client):
    response = client.post("/api/webhook/whatsapp", content=b"", headers={"Content-Type": "application/json"})
    assert response.status_code == 200


def test_startup_creates_an_offline_heartbeat_store():
    from app.main import app

    with TestClient(app):
        snapshot = app.state.heartbeat_store.read()

    assert snapshot.online is False
    assert snapshot.ip == "--"
