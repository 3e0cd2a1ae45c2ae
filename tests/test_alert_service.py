"""
Unit tests for the alert decision function.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.core.config import DEFAULT_ALERT_COOLDOWN, Settings
from app.services.alert_service import build_alert_message, format_temperature, should_alert

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
WINDOW = timedelta(minutes=30)


class TestShouldAlert:
    """Threshold and cooldown rules."""

    @pytest.mark.parametrize("temp, threshold, expected", [
        (11.0, 10.0, True),
        (10.0, 10.0, False),
        (9.9, 10.0, False),
        (-5.0, -8.0, True),
    ])
    def test_without_previous_alert_only_threshold_matters(self, temp, threshold, expected):
        assert should_alert(temp, threshold, None, NOW, WINDOW) is expected

    @pytest.mark.parametrize("elapsed", [timedelta(0), timedelta(minutes=10), WINDOW])
    def test_inside_cooldown_never_alerts(self, elapsed):
        """Exactly at the window boundary is still inside the cooldown."""
        assert should_alert(50.0, 10.0, NOW - elapsed, NOW, WINDOW) is False

    def test_after_cooldown_alerts_again(self):
        last = NOW - WINDOW - timedelta(seconds=1)
        assert should_alert(50.0, 10.0, last, NOW, WINDOW) is True

    def test_after_cooldown_below_threshold_stays_quiet(self):
        last = NOW - timedelta(hours=5)
        assert should_alert(5.0, 10.0, last, NOW, WINDOW) is False

    def test_naive_last_alert_is_treated_as_utc(self):
        """SQLite hands timestamps back without an offset."""
        last = (NOW - timedelta(minutes=5)).replace(tzinfo=None)
        assert should_alert(50.0, 10.0, last, NOW, WINDOW) is False


def test_alert_message_names_sensor_and_temperature():
    text = build_alert_message("Freezer cocina", 12.5)
    assert "ALERTA DE TEMPERATURA" in text
    assert "Freezer cocina" in text
    assert "12.5°C" in text
    assert "*Estado*" in text


def test_format_temperature_drops_trailing_zero():
    assert format_temperature(5.0) == "5°C"
    assert format_temperature(-3.25) == "-3.25°C"


@pytest.mark.parametrize("raw", ["abc", "-5", "", "nan"])
def test_invalid_cooldown_falls_back_to_default(raw, monkeypatch):
    monkeypatch.setenv("ALERT_COOLDOWN", raw)
    assert Settings().ALERT_COOLDOWN == DEFAULT_ALERT_COOLDOWN


def test_cooldown_read_from_environment(monkeypatch):
    monkeypatch.setenv("ALERT_COOLDOWN", "45")
    assert Settings().ALERT_COOLDOWN == 45.0


@pytest.mark.parametrize("value, expected", [
    (12.345678, "12.345678°C"),
    (-18.0625, "-18.0625°C"),
    (7, "7°C"),
])
def test_format_temperature_keeps_reported_precision(value, expected):
    assert format_temperature(value) == expected
