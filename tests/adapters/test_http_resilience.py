from __future__ import annotations

import httpx

from modcatalog.adapters.http_resilience import ResilientClient, http_get_resilient
from modcatalog.config import ResilienceConfig, RetryPolicy


def _config(total: int) -> ResilienceConfig:
    return ResilienceConfig(
        name="test",
        base_url="https://catalog.example",
        default_headers={"User-Agent": "modcatalog-tests"},
        retry=RetryPolicy(total=total, backoff_factor=0.0, backoff_jitter=0.0),
    )


def test_client_retries_transient_status() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json={"version": 3})

    with ResilientClient(_config(total=2), transport=httpx.MockTransport(handler)) as client:
        response = client.get("/catalog.json")

    assert response.status_code == 200
    assert response.json() == {"version": 3}
    assert len(calls) == 2
    assert str(calls[0].url) == "https://catalog.example/catalog.json"
    assert calls[0].headers["User-Agent"] == "modcatalog-tests"


def test_helper_returns_error_response_without_retries() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500)

    response = http_get_resilient(
        _config(total=0), "/catalog.json", transport=httpx.MockTransport(handler)
    )

    assert response.status_code == 500
    assert len(calls) == 1
