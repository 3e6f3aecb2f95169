"""River Flood Monitor (rfm) utility package.

Modules:
  series: water-level column extraction from spreadsheet rows
  trends: recent mean per-step change
  forecast: bounded 24-step projection from the last reading
  presentation: chart model + paginated history table
  plots: interactive Plotly figures
  stations: gauge registry & flood status thresholds
  sources: hourly workbook download, RID status service, place search
"""

from . import series, trends, forecast, presentation, stations  # noqa: F401

__all__ = [
    "series",
    "trends",
    "forecast",
    "presentation",
    "stations",
]
