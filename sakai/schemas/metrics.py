"""Life-metric schemas used by the trend explanation flow."""

from __future__ import annotations

from sakai.schemas.base import CamelizedBaseStruct

__all__ = (
    "MetricDefinition",
    "MetricEntry",
)


class MetricDefinition(CamelizedBaseStruct, omit_defaults=True):
    """A tracked metric, predefined or created by the user."""

    id: str
    name: str
    unit: str
    placeholder: str | None = None
    min: float | None = None
    max: float | None = None
    step: float | None = None


class MetricEntry(CamelizedBaseStruct, omit_defaults=True):
    """One logged value. ``date`` is an ISO date (``2026-10-19``)."""

    metric_id: str
    date: str
    value: float
    notes: str | None = None
