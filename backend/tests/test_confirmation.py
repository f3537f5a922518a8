import asyncio

import pytest
from pydantic import ValidationError

from core.confirmation import confirm_selection
from integrations.helpdesk_client import BackendError
from models.dispatch import PendingConfirmation

PENDING = PendingConfirmation(original_query="install vscode", options=("1.85", "1.86"))


def test_pending_needs_two_options():
    with pytest.raises(ValidationError):
        PendingConfirmation(original_query="install zoom", options=("5.17",))


@pytest.mark.parametrize("choice", ["", "   ", None])
def test_empty_choice_is_noop(backend, choice):
    outcome = asyncio.run(confirm_selection(backend, PENDING, choice))
    assert outcome.is_noop
    assert outcome.pending == PENDING
    assert backend.calls == []


def test_success_clears_pending(backend):
    backend.install_responses = [{"incident": "INC0010002", "message": "Install request created"}]
    outcome = asyncio.run(confirm_selection(backend, PENDING, "1.85"))
    assert backend.calls == [("lookup_install", "install vscode", "1.85")]
    assert outcome.pending is None
    assert outcome.reply_text == "✅ Install request created • Incident: INC0010002"


def test_success_without_fields_uses_defaults(backend):
    backend.install_responses = [{}]
    outcome = asyncio.run(confirm_selection(backend, PENDING, "1.86"))
    assert outcome.reply_text == "✅ Ticket created • Incident: N/A"


def test_failure_clears_pending(backend):
    backend.install_responses = [BackendError("version withdrawn")]
    outcome = asyncio.run(confirm_selection(backend, PENDING, "1.86"))
    assert outcome.pending is None
    assert outcome.reply_text == "❌ Failed: version withdrawn"
