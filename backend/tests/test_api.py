from unittest.mock import patch


def test_health_check(client):
    with patch("api.health._check_backend", return_value={"status": "up", "url": "http://backend.test"}):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "classifier_mode": "client",
            "services": {
                "helpdesk_backend": {"status": "up", "url": "http://backend.test"},
            },
        }


def test_health_degraded(client):
    with patch("api.health._check_backend", return_value={"status": "down", "error": "refused"}):
        assert client.get("/api/health").json()["status"] == "degraded"


def test_new_session_shows_greeting_only(client):
    body = client.get("/api/chat/s1").json()
    assert [m["role"] for m in body["messages"]] == ["assistant"]
    assert body["pending"] is None
    assert body["thinking"] is False


def test_install_confirm_flow(client, backend):
    backend.install_responses = [
        {"options": ["1.85", "1.86"], "message": "Multiple versions of vscode found. Please choose one."},
        {"incident": "INC0010005", "message": "Install request for vscode 1.85 created"},
    ]
    body = client.post("/api/chat/s1/messages", json={"text": "install vscode"}).json()
    assert body["pending"] == {"original_query": "install vscode", "options": ["1.85", "1.86"]}
    assert body["messages"][-1]["content"] == "Multiple versions of vscode found. Please choose one."

    body = client.post("/api/chat/s1/confirm", json={"choice": "1.85"}).json()
    assert body["pending"] is None
    assert "INC0010005" in body["messages"][-1]["content"]


def test_confirm_unknown_choice_is_400(client, backend):
    backend.install_responses = [{"options": ["1.85", "1.86"]}]
    client.post("/api/chat/s1/messages", json={"text": "install vscode"})
    resp = client.post("/api/chat/s1/confirm", json={"choice": "2.0"})
    assert resp.status_code == 400
    assert client.get("/api/chat/s1").json()["pending"] is not None


def test_empty_text_rejected(client):
    assert client.post("/api/chat/s1/messages", json={"text": ""}).status_code == 422


def test_busy_session_is_409(client):
    from api import chat as chat_api

    client.get("/api/chat/s1")
    chat_api._sessions["s1"].thinking = True
    resp = client.post("/api/chat/s1/messages", json={"text": "hello"})
    assert resp.status_code == 409


def test_analytics_view_has_table_and_chart(client, backend):
    backend.analytics_response = {
        "summary": "Top customers",
        "data": [{"CompanyName": "Acme", "Revenue": 10.0}],
        "sql": "SELECT CompanyName, Revenue FROM t",
        "chart_type": "quarterly",
    }
    body = client.post("/api/chat/s1/messages", json={"text": "quarterly revenue"}).json()
    assert body["messages"][-1]["content"] == "Top customers"
    assert body["payload"]["table_rows"] == [{"CompanyName": "Acme", "Revenue": 10.0}]
    assert body["payload"]["raw_query_text"] == "SELECT CompanyName, Revenue FROM t"
    assert body["chart"]["labels"] == ["Q1", "Q2", "Q3", "Q4"]


def test_clear_session(client, backend):
    client.post("/api/chat/s1/messages", json={"text": "my printer is jammed"})
    body = client.post("/api/chat/s1/clear").json()
    assert [m["role"] for m in body["messages"]] == ["assistant"]
    assert body["payload"] is None
    assert body["chart"] is None


def test_clear_while_thinking_is_409(client):
    from api import chat as chat_api

    client.get("/api/chat/s1")
    chat_api._sessions["s1"].thinking = True
    assert client.post("/api/chat/s1/clear").status_code == 409


def test_clear_drops_session_from_registry(client):
    from api import chat as chat_api

    client.post("/api/chat/s1/messages", json={"text": "my printer is jammed"})
    assert "s1" in chat_api._sessions
    client.post("/api/chat/s1/clear")
    assert "s1" not in chat_api._sessions
    body = client.get("/api/chat/s1").json()
    assert [m["role"] for m in body["messages"]] == ["assistant"]


def test_view_exposes_table_column_order(client, backend):
    backend.analytics_response = {"data": [{"CompanyName": "Acme", "Revenue": 10.0}]}
    body = client.post("/api/chat/s1/messages", json={"text": "revenue by product"}).json()
    assert body["table_columns"] == ["CompanyName", "Revenue"]
