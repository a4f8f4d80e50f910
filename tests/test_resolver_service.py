import asyncio
import json

import pytest

from src.services.resolver import InvalidURLError

from fakes import (
    FORM_SERVICE,
    HTML_SERVICE,
    INSTAGRAM_URL,
    JSON_SERVICE,
    FakeResponse,
)


SUCCESS_JSON = FakeResponse(200, json.dumps({"downloadUrl": "https://x/y.mp4"}))


@pytest.mark.parametrize("bad", [None, "", "   ", 42, "https://www.tiktok.com/@a/video/1"])
def test_validate_url_rejects(make_resolver, bad) -> None:
    resolver, _ = make_resolver()

    with pytest.raises(InvalidURLError):
        resolver.validate_url(bad)


def test_validate_url_trims(make_resolver) -> None:
    resolver, _ = make_resolver()

    assert resolver.validate_url(f"  {INSTAGRAM_URL}\n") == INSTAGRAM_URL


def test_invalid_url_never_contacts_services(make_resolver) -> None:
    resolver, session = make_resolver({JSON_SERVICE.url: SUCCESS_JSON})

    with pytest.raises(InvalidURLError):
        asyncio.run(resolver.resolve("https://example.com/video"))

    assert session.calls == []


def test_first_success_stops_rotation(make_resolver) -> None:
    resolver, session = make_resolver({JSON_SERVICE.url: SUCCESS_JSON})

    outcome = asyncio.run(resolver.resolve(INSTAGRAM_URL))

    assert outcome.success is True
    assert outcome.result.source == "QuickSave"
    assert outcome.result.video_url == "https://x/y.mp4"
    assert outcome.fallback == []
    assert len(session.calls) == 1


def test_falls_through_to_later_service(make_resolver) -> None:
    resolver, session = make_resolver({
        JSON_SERVICE.url: FakeResponse(500, "oops"),
        HTML_SERVICE.url: FakeResponse(200, "<p>no link here</p>"),
        FORM_SERVICE.url: FakeResponse(200, '<a class="download-link" href="/v/clip.mp4">go</a>'),
    })

    outcome = asyncio.run(resolver.resolve(INSTAGRAM_URL))

    assert outcome.success is True
    assert outcome.result.source == "FormSaver"
    assert outcome.result.video_url == "https://formsaver.test/v/clip.mp4"
    assert outcome.tried == ["QuickSave", "ScrapeGram", "FormSaver"]
    assert session.called_urls == [JSON_SERVICE.url, HTML_SERVICE.url, FORM_SERVICE.url]


def test_exhaustion_returns_fallback_links(make_resolver) -> None:
    resolver, session = make_resolver({
        HTML_SERVICE.url: asyncio.TimeoutError(),
    })

    outcome = asyncio.run(resolver.resolve(INSTAGRAM_URL))

    assert outcome.success is False
    assert outcome.result is None
    assert outcome.tried == ["QuickSave", "ScrapeGram", "FormSaver"]
    assert [a.error for a in outcome.attempts] == [
        "Request failed with status code 404",
        "Timed out after 10s",
        "Request failed with status code 404",
    ]
    assert [link.service for link in outcome.fallback] == [
        "SaveTube",
        "Instagram Video Downloader",
        "SSYoutube (works for Instagram)",
    ]
    assert len(session.calls) == 3


def test_delay_between_services_but_not_after_last(make_resolver, monkeypatch) -> None:
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    resolver, _ = make_resolver(RETRY_DELAY=0.3)

    asyncio.run(resolver.resolve(INSTAGRAM_URL))

    assert sleeps == [0.3, 0.3]


def test_empty_registry_goes_straight_to_fallback(make_resolver) -> None:
    resolver, session = make_resolver(services=())

    outcome = asyncio.run(resolver.resolve(INSTAGRAM_URL))

    assert outcome.success is False
    assert outcome.tried == []
    assert len(outcome.fallback) == 3
    assert session.calls == []


def test_close_closes_http_session(make_resolver) -> None:
    resolver, _ = make_resolver()

    asyncio.run(resolver.close())

    assert resolver._http.closed is True


def test_malformed_json_falls_through_to_next_service(make_resolver) -> None:
    resolver, _ = make_resolver({
        JSON_SERVICE.url: FakeResponse(200, "[" * 200000 + "]" * 200000),
        HTML_SERVICE.url: FakeResponse(200, '<a class="download" href="/v.mp4">Save</a>'),
    })

    outcome = asyncio.run(resolver.resolve(INSTAGRAM_URL))

    assert outcome.success is True
    assert outcome.result.source == "ScrapeGram"
    assert outcome.result.video_url == "https://scrapegram.test/v.mp4"
    assert outcome.attempts[0].error == "Download URL missing from response"


def test_placeholder_link_falls_through_to_next_service(make_resolver) -> None:
    resolver, _ = make_resolver({
        HTML_SERVICE.url: FakeResponse(200, '<a class="download" href="javascript:void(0)">Save</a>'),
        FORM_SERVICE.url: FakeResponse(200, '<a class="download-link" href="#">Save</a>'),
    })

    outcome = asyncio.run(resolver.resolve(INSTAGRAM_URL))

    assert outcome.success is False
    assert [a.error for a in outcome.attempts] == [
        "Request failed with status code 404",
        "Download link not found",
        "Download link not found",
    ]
    assert len(outcome.fallback) == 3


def test_accepted_domains_are_case_insensitive(make_resolver) -> None:
    resolver, _ = make_resolver(ACCEPTED_DOMAINS=(" Instagram.COM ", "instagr.am"))

    assert resolver.accepted_domains == ("instagram.com", "instagr.am")
    assert resolver.validate_url("https://WWW.INSTAGRAM.COM/p/ABC/") == "https://WWW.INSTAGRAM.COM/p/ABC/"
    assert resolver.validate_url("https://instagr.am/p/ABC/") == "https://instagr.am/p/ABC/"


def test_empty_accepted_domains_fall_back_to_instagram(make_resolver) -> None:
    resolver, _ = make_resolver(ACCEPTED_DOMAINS=())

    assert resolver.accepted_domains == ("instagram.com",)
    assert resolver.validate_url(INSTAGRAM_URL) == INSTAGRAM_URL


def test_resolve_accepts_request_id(make_resolver) -> None:
    resolver, _ = make_resolver({JSON_SERVICE.url: SUCCESS_JSON})

    outcome = asyncio.run(resolver.resolve(INSTAGRAM_URL, request_id="abcd1234"))

    assert outcome.success is True
