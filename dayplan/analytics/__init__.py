"""Analytics section: period selection and charting."""

from .model import AnalyticsModel, clamp_chart_value, render_chart

__all__ = ['AnalyticsModel', 'clamp_chart_value', 'render_chart']
