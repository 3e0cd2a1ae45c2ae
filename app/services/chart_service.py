from typing import List

from quickchart import QuickChart

from app.core.config import settings


def render_temperature_chart(labels: List[str], values: List[float]) -> str:
    """Return a QuickChart image URL for a temperature line chart."""
    chart = QuickChart()
    chart.host = settings.QUICKCHART_HOST
    chart.width = 600
    chart.height = 300
    chart.config = {
        "type": "line",
        "data": {
            "labels": labels,
            "datasets": [
                {
                    "label": "Temperatura °C",
                    "data": values,
                    "borderColor": "blue",
                    "fill": True,
                    "backgroundColor": "rgba(0,0,255,0.1)",
                }
            ],
        },
    }
    return chart.get_url()
