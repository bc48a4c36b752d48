"""Predefined life metrics and trend request building."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

import msgspec

from sakai.schemas import MetricDefinition, TrendExplanationRequest

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sakai.schemas import MetricEntry

# A trend needs a few points before it means anything.
MIN_TREND_POINTS = 3

PREDEFINED_METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition(id="exercise", name="Exercise", unit="minutes", placeholder="e.g., 30", min=0, step=5),
    MetricDefinition(id="sleep", name="Sleep", unit="hours", placeholder="e.g., 7.5", min=0, max=24, step=0.5),
    MetricDefinition(id="mood", name="Mood", unit="1-5 scale", placeholder="1 (low) to 5 (high)", min=1, max=5, step=1),
    MetricDefinition(id="water", name="Water Intake", unit="glasses", placeholder="e.g., 8", min=0, step=1),
)


class InsufficientTrendDataError(ValueError):
    """Raised when a period holds fewer than ``MIN_TREND_POINTS`` entries."""


def find_metric_definition(
    metric_id: str,
    custom_metrics: Iterable[MetricDefinition] = (),
) -> MetricDefinition | None:
    """Look up a metric, predefined metrics first."""
    for definition in (*PREDEFINED_METRICS, *custom_metrics):
        if definition.id == metric_id:
            return definition
    return None


def _parse_entry_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def build_trend_request(
    definition: MetricDefinition,
    entries: Sequence[MetricEntry],
    period_days: int,
    today: date | None = None,
) -> TrendExplanationRequest:
    """Build the trend explanation input for one metric over the last ``period_days`` days.

    Args:
        definition: Metric being analyzed
        entries: Logged entries of any metric; other metrics and undated entries are ignored
        period_days: Size of the window, ending today
        today: Reference date, defaults to the current date

    Returns:
        The request to send to the trend explanation flow

    Raises:
        InsufficientTrendDataError: If fewer than three entries fall in the window
    """
    today = today or date.today()
    from_date = today - timedelta(days=period_days)
    relevant = []
    for entry in entries:
        entry_date = _parse_entry_date(entry.date)
        if entry.metric_id == definition.id and entry_date is not None and entry_date >= from_date:
            relevant.append({"date": entry.date, "value": entry.value})

    if len(relevant) < MIN_TREND_POINTS:
        msg = (
            f"Not enough data for {definition.name} in the last {period_days} days to analyze a trend. "
            f"At least {MIN_TREND_POINTS} data points are recommended."
        )
        raise InsufficientTrendDataError(msg)

    return TrendExplanationRequest(
        metrics_data=msgspec.json.encode(relevant).decode(),
        trend_description=(
            f"Analyze the trend for {definition.name} ({definition.unit}) over the last {period_days} days. "
            f"Data points: {len(relevant)}. Today is {today.isoformat()}."
        ),
    )
