import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest
import redis

from chronosnap.visits.store import VisitLogEntry, VisitLogStore, get_visit_store


def _entry(ip):
    return VisitLogEntry(ip=ip, timestamp="2025-01-01T00:00:00.000Z", user_agent=f"ua-{ip}")


def test_log_visit_prefers_forwarded_header(client, fake_redis):
    r = client.post("/api/log-visit", headers={"x-forwarded-for": "203.0.113.9", "user-agent": "pytest-ua"})

    assert r.status_code == 200
    assert r.json() == {"success": True}
    stored = json.loads(fake_redis.lindex("access_logs", 0))
    assert stored["ip"] == "203.0.113.9"
    assert stored["userAgent"] == "pytest-ua"
    datetime.fromisoformat(stored["timestamp"].replace("Z", "+00:00"))
    assert stored["timestamp"].endswith("Z")


def test_log_visit_falls_back_to_socket_address(client, fake_redis):
    client.post("/api/log-visit")
    stored = json.loads(fake_redis.lindex("access_logs", 0))
    assert stored["ip"] == "testclient"


def test_fetch_is_most_recent_first(client, visit_store):
    for ip in ("A", "B", "C"):
        visit_store.append(_entry(ip))

    r = client.get("/api/get-stats")

    assert r.status_code == 200
    assert [e["ip"] for e in r.json()["logs"]] == ["C", "B", "A"]


def test_fetch_caps_at_100(client, visit_store):
    for i in range(120):
        visit_store.append(_entry(str(i)))

    logs = client.get("/api/get-stats").json()["logs"]

    assert len(logs) == 100
    assert logs[0]["ip"] == "119"
    assert logs[-1]["ip"] == "20"


@pytest.mark.parametrize("garbage", ["{not json", "[1, 2]", '{"ip": "x"}', "42"])
def test_malformed_entry_becomes_sentinel(client, visit_store, fake_redis, garbage):
    visit_store.append(_entry("old"))
    fake_redis.lpush("access_logs", garbage)
    visit_store.append(_entry("new"))

    r = client.get("/api/get-stats")

    assert r.status_code == 200
    logs = r.json()["logs"]
    assert [e["ip"] for e in logs] == ["new", "error", "old"]
    assert logs[1]["userAgent"] == "Parse Error"
    assert logs[1]["timestamp"]


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_log_visit_rejects_other_verbs(app, client, method):
    store = MagicMock()
    app.dependency_overrides[get_visit_store] = lambda: store

    r = client.request(method, "/api/log-visit")

    assert r.status_code == 405
    assert r.json() == {"error": "Method not allowed"}
    assert store.method_calls == []


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
def test_get_stats_rejects_other_verbs(app, client, method):
    store = MagicMock()
    app.dependency_overrides[get_visit_store] = lambda: store

    r = client.request(method, "/api/get-stats")

    assert r.status_code == 405
    assert r.json() == {"error": "Method not allowed"}
    assert store.method_calls == []


def test_store_failures_map_to_500(app, client):
    broken = MagicMock(spec=redis.Redis)
    broken.lpush.side_effect = redis.ConnectionError("down")
    broken.lrange.side_effect = redis.ConnectionError("down")
    app.dependency_overrides[get_visit_store] = lambda: VisitLogStore(broken, key="access_logs", fetch_limit=100)

    w = client.post("/api/log-visit")
    assert w.status_code == 500
    assert w.json() == {"error": "Failed to log visit"}

    rd = client.get("/api/get-stats")
    assert rd.status_code == 500
    assert rd.json() == {"error": "Failed to fetch stats"}
