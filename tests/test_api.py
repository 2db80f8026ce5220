import pytest
from fastapi.testclient import TestClient

from stickman.config import Settings
from web_app import api


@pytest.fixture
def client(monkeypatch, tmp_path):
    monkeypatch.setattr(api, "settings", Settings(output_dir=str(tmp_path)))
    return TestClient(api.app)


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_generate(client, document):
    r = client.post("/scenes/generate", json={"text": "A throws a vase at B", "seed": 0})
    assert r.status_code == 200
    body = r.json()
    assert body["seed"] == 0
    assert body["scene"] == document


def test_validate_ok(client, document):
    r = client.post("/scenes/validate", json=document)
    assert r.status_code == 200
    assert r.json()["frames"] == 36
    assert "vase01" in r.json()["catalog"]


def test_validate_reports_problems(client, document):
    document["fps"] = 24
    document["frames"][2]["objects"][0]["id"] = "missing"
    r = client.post("/scenes/validate", json=document)
    assert r.status_code == 422
    errors = r.json()["detail"]["errors"]
    assert any("fps" in e for e in errors)
    assert any("missing" in e for e in errors)


def test_generate_upstream_failure(client, monkeypatch):
    monkeypatch.setattr(api, "settings", Settings(scene_url="http://127.0.0.1:9/none", request_timeout=0.5))
    r = client.post("/scenes/generate", json={"text": "x"})
    assert r.status_code == 502
