"""
Analytics section state and chart helpers.

No aggregation source is wired in yet: ``fetch_data`` records the chosen
period and leaves the sample list as it is.
"""

from datetime import date
from typing import Iterable, List, Optional, Tuple
import logging

from dayplan.core.models import AnalyticsPeriod, DataPoint

CHART_MIN = 0.0
CHART_MAX = 100.0


def clamp_chart_value(value: float) -> float:
    """Clamp a sample to the chart's 0-100 vertical scale."""
    return max(CHART_MIN, min(CHART_MAX, float(value)))


class AnalyticsModel:
    """Holds the selected period and the DataPoint samples to chart."""

    def __init__(self, period: AnalyticsPeriod = AnalyticsPeriod.WEEK,
                 logger: Optional[logging.Logger] = None):
        self.period = period
        self.data_points: List[DataPoint] = []
        self.logger = logger or logging.getLogger(__name__)

    def fetch_data(self, period: AnalyticsPeriod) -> None:
        self.period = period
        self.logger.debug(f"Analytics period set to {period.label}; no data source configured")

    def load(self, points: Iterable[DataPoint]) -> None:
        """Replace samples, keeping one per identifier (latest wins)."""
        by_id = {}
        for point in points:
            by_id[point.identifier] = point
        self.data_points = list(by_id.values())

    def chart_series(self) -> List[Tuple[date, float]]:
        """(date, value) pairs sorted by date, values clamped to 0-100."""
        points = sorted(self.data_points, key=lambda p: p.timestamp)
        return [(p.day, clamp_chart_value(p.value)) for p in points]


def render_chart(series: List[Tuple[date, float]], width: int = 40,
                 height: int = 8) -> List[str]:
    """
    Draw ``series`` as ASCII rows, top row first.

    Each column holds one sample (the series is resampled to ``width``
    columns when longer). Row labels show the 0-100 scale.
    """
    if not series:
        return ["(no data for this period)"]

    width = max(1, width)
    height = max(2, height)
    if len(series) > width:
        step = len(series) / width
        series = [series[int(i * step)] for i in range(width)]

    levels = [round(value / CHART_MAX * (height - 1)) for _, value in series]
    rows = []
    for row in range(height - 1, -1, -1):
        label = f"{CHART_MAX * row / (height - 1):>5.0f} |"
        cells = "".join("*" if level == row else " " for level in levels)
        rows.append(label + cells)
    rows.append("      +" + "-" * len(levels))
    first, last = series[0][0], series[-1][0]
    rows.append(f"       {first.isoformat()} .. {last.isoformat()}")
    return rows
