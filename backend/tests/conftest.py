import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from fastapi.testclient import TestClient

from api import chat as chat_api
from core.dispatcher import DispatchEngine
from core.transcript_store import TranscriptStore
from main import app


class FakeBackend:
    """In-memory stand-in for HelpdeskClient; records every call."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.install_responses: list = []     # consumed in order; Exception → raised
        self.ticket_response = {"incident": "INC0010001"}
        self.status_response = {"incident_status": "In Progress"}
        self.analytics_response = {"summary": "Sales are up."}

    def _answer(self, value):
        if isinstance(value, Exception):
            raise value
        return value

    async def lookup_install(self, query, chosen_version=None):
        self.calls.append(("lookup_install", query, chosen_version))
        return self._answer(self.install_responses.pop(0))

    async def create_ticket(self, query):
        self.calls.append(("create_ticket", query))
        return self._answer(self.ticket_response)

    async def get_incident_status(self, incident_id):
        self.calls.append(("get_incident_status", incident_id))
        return self._answer(self.status_response)

    async def query_analytics(self, prompt, chart_hint):
        self.calls.append(("query_analytics", prompt, chart_hint))
        return self._answer(self.analytics_response)

    async def aclose(self):
        pass


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def engine(backend):
    return DispatchEngine(backend)


@pytest.fixture
def store(tmp_path):
    s = TranscriptStore(f"sqlite:///{tmp_path / 'history.db'}")
    yield s
    s.close()


@pytest.fixture
def client(engine, store):
    app.dependency_overrides[chat_api.get_engine] = lambda: engine
    app.dependency_overrides[chat_api.get_store] = lambda: store
    chat_api._sessions.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    chat_api._sessions.clear()
