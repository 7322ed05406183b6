"""Analytics command - period selector and completion chart."""

import logging
from typing import Optional

from ..analytics.model import AnalyticsModel, render_chart
from ..core.models import AnalyticsPeriod, AppConfig


class AnalyticsCommand:
    """Shows the analytics chart for a period."""

    def __init__(self, config: AppConfig, verbose: bool = False):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def run(self, period_str: Optional[str] = None, width: int = 40) -> bool:
        try:
            period = AnalyticsPeriod.parse(period_str) if period_str else self.config.period
        except ValueError as exc:
            print(str(exc))
            return False

        model = AnalyticsModel(period)
        model.fetch_data(period)

        selector = "  ".join(
            f"[{p.label}]" if p is period else p.label for p in AnalyticsPeriod
        )
        print(selector)
        print("")
        for line in render_chart(model.chart_series(), width=width):
            print(line)
        return True
