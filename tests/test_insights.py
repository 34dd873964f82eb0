"""Tests for the AI insights client and endpoint."""

from __future__ import annotations

import pytest
import requests

from wellnest.services import insights as insights_module
from wellnest.services.insights import FALLBACK_MESSAGE, InsightsClient


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.json_error:
            raise ValueError("not json")
        return self.payload


def test_no_endpoint_returns_fallback(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("should not post")

    monkeypatch.setattr(insights_module.requests, "post", fail)
    assert InsightsClient(None).suggest({}) == FALLBACK_MESSAGE


def test_success_sends_summary_and_key(monkeypatch):
    calls = {}

    def fake_post(url, json, headers, timeout):
        calls.update(url=url, json=json, headers=headers, timeout=timeout)
        return FakeResponse({"suggestion": "  Try an earlier bedtime.  "})

    monkeypatch.setattr(insights_module.requests, "post", fake_post)
    client = InsightsClient("https://insights.example/api", api_key="k", timeout=2.5)

    assert client.suggest({"recent_moods": []}) == "Try an earlier bedtime."
    assert calls["headers"]["Authorization"] == "Bearer k"
    assert calls["timeout"] == 2.5
    assert calls["json"] == {"recent_moods": []}


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({"suggestion": "x"}, status_code=500),
        FakeResponse(json_error=True),
        FakeResponse({"other": "x"}),
        FakeResponse(["not", "a", "dict"]),
        FakeResponse({"suggestion": ""}),
    ],
)
def test_bad_responses_fall_back(monkeypatch, response):
    monkeypatch.setattr(insights_module.requests, "post", lambda *a, **k: response)
    assert InsightsClient("https://insights.example/api").suggest({}) == FALLBACK_MESSAGE


def test_network_error_falls_back(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(insights_module.requests, "post", boom)
    assert InsightsClient("https://insights.example/api").suggest({}) == FALLBACK_MESSAGE


def test_endpoint_requires_login(client, json_headers):
    response = client.post("/api/ai-insights", headers=json_headers)
    assert response.status_code == 401


def test_endpoint_returns_suggestion(auth_client, ctx, monkeypatch, json_headers):
    captured = {}

    def fake_suggest(summary):
        captured["summary"] = summary
        return "Keep it up!"

    monkeypatch.setattr(ctx.insights, "suggest", fake_suggest)
    auth_client.post("/tracker/", json={"mood_score": 7}, headers=json_headers)

    response = auth_client.post("/api/ai-insights", headers=json_headers)

    assert response.get_json() == {"suggestion": "Keep it up!"}
    assert captured["summary"]["recent_moods"][0]["mood_score"] == 7


def test_endpoint_without_configuration(auth_client, json_headers):
    response = auth_client.post("/api/ai-insights", headers=json_headers)
    assert response.get_json() == {"suggestion": FALLBACK_MESSAGE}
