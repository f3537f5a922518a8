#!/usr/bin/env python3
"""
Stand-in helpdesk backend for local development of the assistant.
Usage (from the repo root):
    uvicorn scripts.mock_backend:app --port 8000
Serves: /request_install, /create_ticket, /show_status/{id}, /chat
"""
import itertools
import random
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

app = FastAPI(title="Mock Helpdesk Backend")

CATALOG = {
    "vscode":  ["1.85", "1.86", "1.87"],
    "python":  ["3.11", "3.12"],
    "zoom":    ["5.17"],
    "slack":   ["4.36", "4.37"],
}
STATUSES = ["New", "In Progress", "On Hold", "Resolved", "Closed"]

_counter = itertools.count(10001)
_incidents: dict[str, str] = {}


def _new_incident() -> str:
    inc = f"INC{next(_counter):07d}"
    _incidents[inc] = "New"
    return inc


class InstallRequest(BaseModel):
    user_query: str
    chosen_version: Optional[str] = None


class TicketRequest(BaseModel):
    short_description: str
    description: str = ""
    impact: str = "2"
    category: str = "Software"


class AnalyticsRequest(BaseModel):
    prompt: str
    chart_hint: str = "auto"


@app.post("/request_install")
def request_install(req: InstallRequest):
    q = req.user_query.lower()
    software = next((name for name in CATALOG if name in q), None)

    if software is None:
        inc = _new_incident()
        return {"incident": inc, "message": "No catalog match, ticket raised for manual review"}

    versions = CATALOG[software]
    if req.chosen_version:
        if req.chosen_version not in versions:
            raise HTTPException(400, detail=f"Version {req.chosen_version} not available for {software}")
        inc = _new_incident()
        return {"incident": inc, "message": f"Install request for {software} {req.chosen_version} created"}

    if len(versions) > 1:
        return {"options": versions, "message": f"Multiple versions of {software} found. Please choose one."}

    inc = _new_incident()
    return {"incident": inc, "message": f"Install request for {software} {versions[0]} created"}


@app.post("/create_ticket")
def create_ticket(req: TicketRequest):
    return {"incident": _new_incident(), "short_description": req.short_description}


@app.get("/show_status/{incident_id}")
def show_status(incident_id: str):
    if incident_id not in _incidents:
        raise HTTPException(404, detail=f"Incident {incident_id} not found")
    _incidents[incident_id] = random.choice(STATUSES)
    return {"incident_status": _incidents[incident_id]}


@app.post("/chat")
def analytics(req: AnalyticsRequest):
    rows = [
        {"CompanyName": "Ernst Handel", "Revenue": 104874.98},
        {"CompanyName": "QUICK-Stop", "Revenue": 104361.95},
        {"CompanyName": "Save-a-lot Markets", "Revenue": 93230.33},
    ]
    resp = {
        "summary": f"Top customers by revenue for: {req.prompt}",
        "data": rows,
        "sql": (
            "SELECT c.CompanyName, SUM(od.UnitPrice * od.Quantity) AS Revenue "
            "FROM Customers c JOIN Orders o ON o.CustomerID = c.CustomerID "
            "JOIN [Order Details] od ON od.OrderID = o.OrderID "
            "GROUP BY c.CompanyName ORDER BY Revenue DESC LIMIT 3"
        ),
    }
    if req.chart_hint in ("monthly", "products", "quarterly"):
        resp["chart_type"] = req.chart_hint
    else:
        resp["chart"] = {
            "type": "bar",
            "labels": [r["CompanyName"] for r in rows],
            "values": [r["Revenue"] for r in rows],
            "title": "Top customers by revenue",
        }
    return resp
