import json

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app

from fakes import (
    FORM_SERVICE,
    HTML_SERVICE,
    INSTAGRAM_URL,
    JSON_SERVICE,
    FakeResponse,
)


@pytest.fixture
def client_for(make_resolver):
    """TestClient over an app whose resolver answers from a FakeSession."""
    clients = []

    def _client(responses=None, **kwargs):
        resolver, session = make_resolver(responses, **kwargs)
        client = TestClient(create_app(resolver), raise_server_exceptions=False)
        clients.append(client)
        return client, session

    yield _client
    for client in clients:
        client.close()


@pytest.mark.parametrize("body", [
    {},
    {"instagramUrl": ""},
    {"instagramUrl": "https://www.youtube.com/watch?v=abc"},
    {"instagramUrl": 123},
    {"url": INSTAGRAM_URL},
])
def test_fetch_video_rejects_bad_input(client_for, body) -> None:
    client, session = client_for({JSON_SERVICE.url: FakeResponse(200, '{"downloadUrl": "https://x/y.mp4"}')})

    response = client.post("/fetch-video", json=body)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"]
    assert session.calls == []


def test_fetch_video_rejects_non_json_body(client_for) -> None:
    client, _ = client_for()

    response = client.post(
        "/fetch-video",
        content="instagramUrl=https://www.instagram.com/p/ABC/",
        headers={"Content-Type": "text/plain"},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_FAILED"


def test_fetch_video_invalid_domain_message(client_for) -> None:
    client, _ = client_for()

    response = client.post("/fetch-video", json={"instagramUrl": "https://example.com/p/ABC/"})

    body = response.json()
    assert body["error_code"] == "VALIDATION_INVALID_URL"
    assert body["error"] == "Please provide a valid Instagram URL"
    assert body["details"]["example"].startswith("https://www.instagram.com/")


def test_fetch_video_success_from_first_service(client_for) -> None:
    client, session = client_for({
        JSON_SERVICE.url: FakeResponse(200, json.dumps({"downloadUrl": "https://x/y.mp4"})),
    })

    response = client.post("/fetch-video", json={"instagramUrl": INSTAGRAM_URL})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "videoUrl": "https://x/y.mp4",
        "source": "QuickSave",
        "message": "Video fetched via QuickSave",
    }
    assert len(session.calls) == 1


def test_fetch_video_exhaustion_payload(client_for) -> None:
    client, session = client_for({
        JSON_SERVICE.url: FakeResponse(500, "error"),
        HTML_SERVICE.url: FakeResponse(200, "<p>nothing</p>"),
        FORM_SERVICE.url: FakeResponse(403, "forbidden"),
    })

    response = client.post("/fetch-video", json={"instagramUrl": INSTAGRAM_URL})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "All download services failed. Try a different link."
    assert body["tried"] == ["QuickSave", "ScrapeGram", "FormSaver"]
    assert body["failures"] == [
        {"service": "QuickSave", "error": "Request failed with status code 500"},
        {"service": "ScrapeGram", "error": "Download link not found"},
        {"service": "FormSaver", "error": "Request failed with status code 403"},
    ]
    assert body["url"] == INSTAGRAM_URL
    assert body["shortcode"] == "ABC"
    assert [m["service"] for m in body["download_methods"]] == [
        "SaveTube",
        "Instagram Video Downloader",
        "SSYoutube (works for Instagram)",
    ]
    assert body["download_methods"][0]["link"] == (
        "https://savetube.app/instagram?url=https%3A%2F%2Fwww.instagram.com%2Fp%2FABC%2F"
    )
    assert "timestamp" in body
    assert len(session.calls) == 3


def test_fetch_video_exhaustion_is_deterministic(client_for) -> None:
    client, _ = client_for()

    first = client.post("/fetch-video", json={"instagramUrl": INSTAGRAM_URL}).json()
    second = client.post("/fetch-video", json={"instagramUrl": INSTAGRAM_URL}).json()

    first.pop("timestamp")
    second.pop("timestamp")
    assert first == second


def test_unhandled_exception_returns_500(client_for) -> None:
    client, _ = client_for()

    async def explode(url, request_id=None):
        raise RuntimeError("resolver exploded")

    client.app.state.resolver.resolve = explode

    response = client.post("/fetch-video", json={"instagramUrl": INSTAGRAM_URL})

    assert response.status_code == 500
    assert response.json()["error_code"] == "SERVER_ERROR"
    assert response.json()["details"] == {"error": "resolver exploded"}


def test_services_lists_registry_in_order(client_for) -> None:
    client, _ = client_for()

    response = client.get("/services")

    assert response.status_code == 200
    assert response.json() == {
        "count": 3,
        "services": [
            {
                "name": "QuickSave",
                "method": "POST",
                "url": JSON_SERVICE.url,
                "extraction": "field_path",
                "extraction_rule": "downloadUrl",
            },
            {
                "name": "ScrapeGram",
                "method": "GET",
                "url": HTML_SERVICE.url,
                "extraction": "selector",
                "extraction_rule": "a.download[href]",
            },
            {
                "name": "FormSaver",
                "method": "POST",
                "url": FORM_SERVICE.url,
                "extraction": "selector",
                "extraction_rule": "a.download-link[href]",
            },
        ],
    }


def test_manual_test_endpoint(client_for) -> None:
    client, _ = client_for()

    body = client.get("/test").json()

    assert body["testUrl"].startswith("https://www.instagram.com/p/")
    assert "/fetch-video" in body["curlCommand"]
    assert body["testUrl"] in body["curlCommand"]
    assert "timestamp" in body


def test_health_and_root(client_for) -> None:
    client, _ = client_for()

    health = client.get("/health")
    root = client.get("/")

    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert "timestamp" in health.json()
    assert root.status_code == 200
    assert root.json()["services"] == 3
    assert root.json()["endpoints"]["fetchVideo"] == "POST /fetch-video"
    assert "timestamp" in root.json()


def test_unknown_route_lists_endpoints(client_for) -> None:
    client, _ = client_for()

    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"] == "Endpoint not found"
    assert "POST /fetch-video" in response.json()["details"]["available_endpoints"]


def test_cors_allows_configured_origin_only(client_for) -> None:
    client, _ = client_for()

    allowed = client.get("/health", headers={"Origin": "http://localhost:5173"})
    blocked = client.get("/health", headers={"Origin": "https://evil.test"})

    assert allowed.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "access-control-allow-origin" not in blocked.headers


def test_lifespan_closes_resolver_session(make_resolver) -> None:
    resolver, _ = make_resolver()

    with TestClient(create_app(resolver)) as client:
        assert client.get("/health").status_code == 200

    assert resolver._http.closed is True


def test_request_id_header(client_for) -> None:
    client, _ = client_for()

    response = client.get("/services")

    assert len(response.headers["x-request-id"]) == 8


def test_fetch_video_request_id_reaches_resolver(client_for) -> None:
    client, _ = client_for({
        JSON_SERVICE.url: FakeResponse(200, json.dumps({"downloadUrl": "https://x/y.mp4"})),
    })
    resolver = client.app.state.resolver
    original = resolver.resolve
    seen = []

    async def tracking_resolve(url, request_id=None):
        seen.append(request_id)
        return await original(url, request_id=request_id)

    resolver.resolve = tracking_resolve

    response = client.post("/fetch-video", json={"instagramUrl": INSTAGRAM_URL})

    assert response.status_code == 200
    assert response.json()["source"] == "QuickSave"
    assert seen == [response.headers["x-request-id"]]
