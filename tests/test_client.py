from fastapi.testclient import TestClient

from api_headline_svg import client as headline_client
from api_headline_svg.cache_store import MemoryCacheStore
from api_headline_svg.main import create_app
from headline_generator.config import LayoutSettings
from headline_generator.generator import generate


def test_fetch_uses_service_binding(monkeypatch):
    app_client = TestClient(create_app(MemoryCacheStore(), layout_settings=LayoutSettings()))
    calls = []

    def fake_post(url, json, headers, timeout):
        calls.append((url, json, headers, timeout))
        return app_client.post("/", json=json, headers=headers)

    monkeypatch.setattr(headline_client.requests, "post", fake_post)

    first = headline_client.fetch_headline_svg("Hello World", base_url="http://svg.internal/")
    second = headline_client.fetch_headline_svg("Hello World", base_url="http://svg.internal/")

    assert calls[0] == (
        "http://svg.internal/",
        {"headline": "Hello World"},
        {"x-service-binding": "true"},
        30,
    )
    assert first.html == generate("Hello World")
    assert first.cache_status == "miss"
    assert second.cache_status == "hit"


def test_fetch_defaults_to_configured_url(monkeypatch):
    app_client = TestClient(create_app(MemoryCacheStore(), layout_settings=LayoutSettings()))
    urls = []

    def fake_post(url, json, headers, timeout):
        urls.append(url)
        return app_client.post("/", json=json, headers=headers)

    monkeypatch.setattr(headline_client.requests, "post", fake_post)

    result = headline_client.fetch_headline_svg("Hello World")

    assert urls == [headline_client.HEADLINE_SVG_URL]
    assert result.cache_status == "miss"
