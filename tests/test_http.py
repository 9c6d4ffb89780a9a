import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from finance_mcp.core.config import Settings
from finance_mcp.web.app import create_app


@pytest.fixture
def client(database_url):
    app = create_app(Settings(DATABASE_URL=database_url, LOG_TO_FILE=False))
    with TestClient(app) as test_client:
        yield test_client


def _payload(response):
    assert response.status_code == 200
    body = response.json()
    return body["isError"], json.loads(body["content"][0]["text"])


def test_health_reports_store_and_journal_mode(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok", "journal_mode": "wal"}


def test_health_degrades_when_store_fails(client, monkeypatch):
    database = client.app.state.database

    async def failing_ping():
        raise OperationalError("PRAGMA journal_mode", {}, Exception("disk I/O error"))

    monkeypatch.setattr(database, "ping", failing_ping)

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "database": "error"}


def test_list_tools(client):
    tools = client.get("/tools").json()["tools"]

    assert len(tools) == 7
    assert {"name", "description", "inputSchema"} <= set(tools[0])


def test_call_tools_over_http(client):
    is_error, added = _payload(client.post("/tools/add_user", json={"owner_id": "o1", "name": "Alice"}))
    assert not is_error

    is_error, created = _payload(
        client.post(
            "/tools/add_transaction",
            json={"owner_id": "o1", "category_id": added["id"], "amount": 25, "type": "credit"},
        )
    )
    assert not is_error and created["id"] == 1

    is_error, summary = _payload(client.post("/tools/summary", json={"owner_id": "o1"}))
    assert not is_error
    assert summary["biggest_lender"]["total"] == 25


def test_tool_errors_are_payloads(client):
    is_error, body = _payload(client.post("/tools/add_user", json={"owner_id": "o1"}))

    assert is_error
    assert body["error"]["type"] == "validation"

    is_error, body = _payload(client.post("/tools/nope", json={}))
    assert is_error and body["error"]["message"] == "Unknown tool: nope"


def test_request_id_is_echoed(client):
    response = client.post("/tools/list_users", json={"owner_id": "o1"}, headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
    assert response.json()["requestId"] == "abc123"


MCP_HEADERS = {"Accept": "application/json, text/event-stream"}


def _rpc(client, request_id, method, params=None):
    response = client.post(
        "/mcp",
        json={"jsonrpc": "2.0", "id": request_id, "method": method, "params": params or {}},
        headers=MCP_HEADERS,
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["id"] == request_id
    return body["result"]


def test_mcp_streamable_http_endpoint(client):
    tools = _rpc(client, 1, "tools/list")["tools"]
    assert [tool["name"] for tool in tools][:2] == ["list_users", "add_user"]
    assert len(tools) == 7

    added = _rpc(client, 2, "tools/call", {"name": "add_user", "arguments": {"ownerid": "o1", "name": "Alice"}})
    assert added["isError"] is False
    assert json.loads(added["content"][0]["text"])["id"] == 1

    failed = _rpc(client, 3, "tools/call", {"name": "add_user", "arguments": {"owner_id": "o1"}})
    assert failed["isError"] is True
    assert json.loads(failed["content"][0]["text"])["error"]["type"] == "validation"

    # The REST view shares the same store.
    is_error, users = _payload(client.post("/tools/list_users", json={"owner_id": "o1"}))
    assert not is_error and users == [{"id": 1, "username": "Alice"}]
