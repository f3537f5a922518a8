"""Pydantic schemas for normalized backend payloads."""
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict

ChartKind = Literal["bar", "line", "pie"]


class ChartSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ChartKind = "bar"
    labels: list[str] = []
    values: list[float] = []
    series_label: str = "Value"            # "Count" when values were tallied
    title: Optional[str] = None


class ResponsePayload(BaseModel):
    """Renderable facets of a backend response; every facet is optional."""
    model_config = ConfigDict(frozen=True)

    summary_text: Optional[str] = None
    chart_spec: Optional[ChartSpec] = None
    table_rows: Optional[list[dict[str, Any]]] = None
    raw_query_text: Optional[str] = None
    incident_id: Optional[str] = None

    @property
    def table_columns(self) -> list[str]:
        if not self.table_rows:
            return []
        return list(self.table_rows[0].keys())
