from datetime import datetime, timedelta
from typing import Optional

from app.utils.time_utils import as_utc


def should_alert(
    current_temp: float,
    threshold: float,
    last_alert_sent: Optional[datetime],
    now: datetime,
    cooldown: timedelta,
) -> bool:
    """
    Decide whether a reading must produce an alert.

    Fires only when the temperature is strictly above the threshold and
    no alert went out during the last ``cooldown`` (strictly longer ago).
    """
    if not current_temp > threshold:
        return False
    if last_alert_sent is None:
        return True
    return as_utc(now) - as_utc(last_alert_sent) > cooldown


def cooldown_window(minutes: float) -> timedelta:
    return timedelta(minutes=minutes)


def format_temperature(value: float) -> str:
    """Whole values without a trailing .0, anything else as received."""
    if float(value).is_integer():
        return f"{int(value)}°C"
    return f"{value!r}°C"


def build_alert_message(sensor_name: str, temperature: float) -> str:
    return (
        "🚨 *ALERTA DE TEMPERATURA*\n\n"
        f"📍 *Equipo:* {sensor_name}\n"
        f"🌡️ *Temperatura:* {format_temperature(temperature)}\n\n"
        "⚠️ _El límite ha sido superado._\n"
        "👉 Escribe *Estado* para ver todos tus equipos."
    )
