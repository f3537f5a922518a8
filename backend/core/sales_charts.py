"""
Static sales charts shown when the analytics backend does not supply its own.
Figures are Northwind-style demo data.
"""
from typing import Optional

from models.payload import ChartSpec

SALES_DATA = {
    "monthlySales": [
        {"month": "Jan", "sales": 42500},
        {"month": "Feb", "sales": 38900},
        {"month": "Mar", "sales": 51200},
        {"month": "Apr", "sales": 47800},
        {"month": "May", "sales": 55300},
        {"month": "Jun", "sales": 61700},
    ],
    "products": [
        {"name": "Chai", "sales": 18200},
        {"name": "Chang", "sales": 16400},
        {"name": "Aniseed Syrup", "sales": 9800},
        {"name": "Ikura", "sales": 21300},
        {"name": "Tofu", "sales": 12600},
    ],
    "quarterlyPerformance": [
        {"quarter": "Q1", "revenue": 132600, "target": 125000},
        {"quarter": "Q2", "revenue": 164800, "target": 150000},
        {"quarter": "Q3", "revenue": 149300, "target": 160000},
        {"quarter": "Q4", "revenue": 188100, "target": 175000},
    ],
}


def _monthly() -> ChartSpec:
    rows = SALES_DATA["monthlySales"]
    return ChartSpec(
        kind="bar",
        labels=[r["month"] for r in rows],
        values=[r["sales"] for r in rows],
        series_label="Monthly Sales ($)",
        title="Monthly Sales Performance",
    )


def _products() -> ChartSpec:
    rows = SALES_DATA["products"]
    return ChartSpec(
        kind="pie",
        labels=[r["name"] for r in rows],
        values=[r["sales"] for r in rows],
        series_label="Product Sales ($)",
    )


def _quarterly() -> ChartSpec:
    # single series: actual revenue, targets are not plotted
    rows = SALES_DATA["quarterlyPerformance"]
    return ChartSpec(
        kind="bar",
        labels=[r["quarter"] for r in rows],
        values=[r["revenue"] for r in rows],
        series_label="Actual Revenue",
        title="Quarterly Performance",
    )


_BUILDERS = {
    "monthly": _monthly,
    "products": _products,
    "quarterly": _quarterly,
}


def build_static_chart(name: Optional[str]) -> Optional[ChartSpec]:
    builder = _BUILDERS.get(name or "")
    return builder() if builder else None
