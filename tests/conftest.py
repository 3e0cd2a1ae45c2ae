import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ALERT_COOLDOWN"] = "30"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_chart_renderer, get_messenger
from app.core.exceptions import UpstreamNotifyError
from app.core.security import create_access_token, hash_password
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.measurement import Measurement
from app.models.sensor import Sensor
from app.models.user import User
from app.services.heartbeat_store import DeviceHeartbeatStore

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeMessenger:
    """Records outbound WhatsApp messages instead of calling the API."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.texts = []
        self.images = []

    def send_text(self, number, text):
        if self.fail:
            raise UpstreamNotifyError("sendText failed")
        self.texts.append((number, text))

    def send_image(self, number, image_url, caption=""):
        if self.fail:
            raise UpstreamNotifyError("sendImage failed")
        self.images.append((number, image_url, caption))


class FakeChart:
    def __init__(self):
        self.calls = []

    def __call__(self, labels, values):
        self.calls.append((list(labels), list(values)))
        return f"https://chart.test/{len(self.calls)}"


@pytest.fixture(autouse=True)
def setup_test_database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def chart():
    return FakeChart()


@pytest.fixture
def client(messenger, chart):
    """
    TestClient wired to the in-memory database and the recording fakes.
    """
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_messenger] = lambda: messenger
    app.dependency_overrides[get_chart_renderer] = lambda: chart
    app.state.heartbeat_store = DeviceHeartbeatStore()

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make(username="ana", password="secret123", whatsapp="5491100000001"):
        user = User(username=username, password_hash=hash_password(password), whatsapp=whatsapp)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_sensor(db_session):
    def _make(owner, hardware_id="HELADERA-01", name="Freezer cocina", threshold=10.0,
              enabled=True, last_alert_sent=None):
        sensor = Sensor(
            hardware_id=hardware_id,
            friendly_name=name,
            alert_threshold=threshold,
            owner_id=owner.id,
            enabled=enabled,
            last_alert_sent=last_alert_sent,
        )
        db_session.add(sensor)
        db_session.commit()
        db_session.refresh(sensor)
        return sensor
    return _make


@pytest.fixture
def add_reading(db_session):
    base = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

    def _add(hardware_id, temperature, minutes=0, voltage=3.3):
        m = Measurement(
            sensor_id=hardware_id,
            temperature_c=temperature,
            voltage_v=voltage,
            timestamp=base + timedelta(minutes=minutes),
        )
        db_session.add(m)
        db_session.commit()
        return m
    return _add


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id, user.username)}"}
    return _headers


@pytest.fixture
def failing_messenger():
    return FakeMessenger(fail=True)
