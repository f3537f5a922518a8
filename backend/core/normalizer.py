"""
Payload normalizer — reduce an arbitrary backend response to renderable facets.

Never raises: a missing or malformed field just leaves its facet absent.
"""
import logging
from typing import Any, Optional

from models.payload import ChartSpec, ResponsePayload

logger = logging.getLogger(__name__)

_CHART_KINDS = {"bar", "line", "pie"}


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _coerce_number(v: Any) -> float:
    if isinstance(v, bool):
        raise TypeError("boolean is not a measurement")
    return float(v)


def _normalize_chart(chart: Any) -> Optional[ChartSpec]:
    if not isinstance(chart, dict):
        return None

    kind = str(chart.get("type") or chart.get("kind") or "").lower()
    if kind not in _CHART_KINDS:
        kind = "bar"

    raw_labels = chart.get("labels")
    labels = [str(label) for label in raw_labels] if isinstance(raw_labels, list) else []

    raw_values = chart.get("values")
    try:
        if not isinstance(raw_values, list):
            raise TypeError("values is not a list")
        values = [_coerce_number(v) for v in raw_values]
        series_label = "Value"
    except (TypeError, ValueError) as e:
        # Treat the series as a categorical tally
        logger.debug("Chart values not numeric (%s) — counting labels instead", e)
        values = [1.0] * len(labels)
        series_label = "Count"

    return ChartSpec(
        kind=kind,
        labels=labels,
        values=values,
        series_label=series_label,
        title=_text(chart.get("title")),
    )


def _normalize_rows(data: Any) -> Optional[list[dict]]:
    if not isinstance(data, list) or not data:
        return None
    if not all(isinstance(row, dict) for row in data):
        return None
    return [dict(row) for row in data]


def normalize(raw: Any) -> ResponsePayload:
    """Map a raw backend response to a ResponsePayload."""
    if not isinstance(raw, dict):
        return ResponsePayload()

    return ResponsePayload(
        summary_text=_text(raw.get("summary")) or _text(raw.get("answer")),
        chart_spec=_normalize_chart(raw.get("chart")),
        table_rows=_normalize_rows(raw.get("data")),
        raw_query_text=_text(raw.get("sql")),
        incident_id=_text(raw.get("incident")),
    )
