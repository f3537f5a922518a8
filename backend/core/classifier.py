"""
Utterance classifier — maps raw chat text to exactly one Intent.

Rules are evaluated in CLASSIFICATION_ORDER and the first match wins; an
incident id always beats install vocabulary. Unmatched text falls through to
a generic ticket, so classification never raises.
"""
import logging
import re
from typing import Callable, Optional

from models.intent import (
    AnalyticsQuery,
    ChartHint,
    GenericTicket,
    IncidentStatus,
    InstallRequest,
    Intent,
)

logger = logging.getLogger(__name__)

Classifier = Callable[[str], Intent]

# ASCII only: ids are "INC" plus ASCII digits, never a case-folded look-alike
_INCIDENT_RE = re.compile(r"\bINC(\d+)\b", re.IGNORECASE | re.ASCII)
_METRICS_RE = re.compile(r"sales|revenue", re.IGNORECASE)
_INSTALL_RE = re.compile(r"\b(install|setup|set up)\b", re.IGNORECASE)

# Checked top to bottom; generic chart words default to the monthly chart
_CHART_CUES: list[tuple[re.Pattern, ChartHint]] = [
    (re.compile(r"month", re.IGNORECASE), "monthly"),
    (re.compile(r"product|item", re.IGNORECASE), "products"),
    (re.compile(r"quarter|\bq[1-4]\b", re.IGNORECASE), "quarterly"),
    (re.compile(r"chart|graph|visual", re.IGNORECASE), "monthly"),
]


def infer_chart_hint(text: str) -> Optional[ChartHint]:
    """Chart hint for sales/revenue questions that mention a chart cue, else None."""
    if not _METRICS_RE.search(text):
        return None
    return next((hint for pattern, hint in _CHART_CUES if pattern.search(text)), None)


def _match_incident(text: str) -> Optional[Intent]:
    m = _INCIDENT_RE.search(text)
    if m:
        return IncidentStatus(incident_id="INC" + m.group(1))
    return None


def _match_analytics(text: str) -> Optional[Intent]:
    hint = infer_chart_hint(text)
    if hint:
        return AnalyticsQuery(query=text, chart_hint=hint)
    return None


def _match_install(text: str) -> Optional[Intent]:
    if _INSTALL_RE.search(text):
        return InstallRequest(query=text)
    return None


RULES: list[tuple[str, Callable[[str], Optional[Intent]]]] = [
    ("incident_status", _match_incident),
    ("analytics_query", _match_analytics),
    ("install_request", _match_install),
]

CLASSIFICATION_ORDER: tuple[str, ...] = tuple(name for name, _ in RULES)


def classify(text: str) -> Intent:
    """Client-side classification: incident → analytics → install → generic ticket."""
    for name, matcher in RULES:
        intent = matcher(text)
        if intent is not None:
            logger.debug("Rule %s matched", name)
            return intent
    return GenericTicket(query=text)


def classify_backend_driven(text: str) -> Intent:
    """
    Delegate everything except incident lookups to the analytics endpoint.
    The local chart cue is still forwarded as a hint ('auto' when there is none).
    """
    intent = _match_incident(text)
    if intent is not None:
        return intent
    return AnalyticsQuery(query=text, chart_hint=infer_chart_hint(text) or "auto")


def get_classifier(mode: str) -> Classifier:
    if mode == "backend":
        return classify_backend_driven
    return classify
