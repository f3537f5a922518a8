"""Pydantic schemas for classified user intents."""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ChartHint = Literal["monthly", "products", "quarterly", "auto", "none"]
StaticChart = Literal["monthly", "products", "quarterly"]

STATIC_CHARTS: tuple[str, ...] = ("monthly", "products", "quarterly")


class InstallRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["install_request"] = "install_request"
    query: str


class IncidentStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["incident_status"] = "incident_status"
    incident_id: str = Field(..., pattern=r"^INC\d+$")


class AnalyticsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["analytics_query"] = "analytics_query"
    query: str
    chart_hint: ChartHint = "none"


class GenericTicket(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["generic_ticket"] = "generic_ticket"
    query: str


Intent = Annotated[
    Union[InstallRequest, IncidentStatus, AnalyticsQuery, GenericTicket],
    Field(discriminator="kind"),
]
