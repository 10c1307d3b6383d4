"""Tests for the Discogs API adapter."""

import asyncio
import json

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from vinyl_catalog.exceptions import (
    ConfigurationError,
    LookupHttpError,
    LookupResponseError,
    LookupTransportError,
)
from vinyl_catalog.infrastructure.external.discogs_adapter import DiscogsAdapter
from vinyl_catalog.infrastructure.external.discogs_models import (
    DiscogsMasterRelease,
    DiscogsReleaseDetails,
    SearchType,
)
from vinyl_catalog.models.config import DiscogsConfig


class MockAsyncContextManager:
    """Helper class for mocking async context managers."""
    def __init__(self, return_value):
        self.return_value = return_value

    async def __aenter__(self):
        return self.return_value

    async def __aexit__(self, *args):
        pass


def make_response(status=200, payload=None, reason="OK", invalid_json=False):
    """Build a fake aiohttp response."""
    response = MagicMock()
    response.status = status
    response.reason = reason
    if invalid_json:
        response.json = AsyncMock(side_effect=json.JSONDecodeError("Expecting value", "<html>", 0))
    else:
        response.json = AsyncMock(return_value=payload)
    return response


def make_session(response):
    """Build a fake session whose get() yields the given response."""
    session = MagicMock()
    session.get = MagicMock(return_value=MockAsyncContextManager(response))
    return session


SEARCH_PAYLOAD = {
    "pagination": {"page": 1, "pages": 3, "per_page": 20, "items": 55, "urls": {"next": "https://api/next"}},
    "results": [
        {
            "id": 1401531,
            "type": "release",
            "title": "Miles Davis - Kind of Blue",
            "thumb": "https://img/thumb.jpg",
            "cover_image": "https://img/cover.jpg",
            "year": "1959",
            "country": "US",
            "format": ["Vinyl", "LP", "Album", "Mono"],
            "label": ["Columbia"],
            "genre": ["Jazz"],
            "style": ["Modal"],
            "catno": "CL 1355",
            "barcode": [],
            "resource_url": "https://api.discogs.com/releases/1401531",
        }
    ],
}

RELEASE_PAYLOAD = {
    "id": 1401531,
    "title": "Kind of Blue",
    "artists": [{"name": "Miles Davis", "anv": "", "id": 23755}],
    "year": 1959,
    "released": "1959-08-17",
    "country": "US",
    "labels": [{"name": "Columbia", "catno": "CL 1355", "id": 1866}],
    "formats": [{"name": "Vinyl", "qty": "1", "descriptions": ["LP", "Album", "Mono"]}],
    "genres": ["Jazz"],
    "styles": ["Modal"],
    "tracklist": [{"position": "A1", "title": "So What", "duration": "9:22"}],
    "images": [{"type": "primary", "uri": "https://img/full.jpg", "uri150": "https://img/150.jpg",
                "width": 600, "height": 600}],
    "identifiers": [
        {"type": "Barcode", "value": "none"},
        {"type": "Matrix / Runout", "value": "XLP 47324-1A", "description": "Side A"},
        {"type": "Matrix / Runout", "value": "XLP 47325-1A", "description": "Side B"},
    ],
    "notes": "Original mono pressing.",
    "uri": "https://www.discogs.com/release/1401531-Miles-Davis-Kind-Of-Blue",
    "resource_url": "https://api.discogs.com/releases/1401531",
    "lowest_price": 120.5,
}


@pytest.fixture
def search_session():
    return make_session(make_response(payload=SEARCH_PAYLOAD))


@pytest.fixture
def adapter(search_session):
    return DiscogsAdapter(token="secret-token", session=search_session)


def sent_params(session):
    return session.get.call_args.kwargs["params"]


class TestConfiguration:
    """Tests for the not-configured gate."""

    def test_token_presence(self):
        assert not DiscogsAdapter().is_configured()
        assert not DiscogsAdapter(token="").is_configured()
        assert DiscogsAdapter(token="abc").is_configured()

    def test_set_token(self):
        adapter = DiscogsAdapter()
        adapter.set_token("abc")
        assert adapter.is_configured()
        adapter.set_token(None)
        assert not adapter.is_configured()

    def test_from_config(self):
        adapter = DiscogsAdapter.from_config(DiscogsConfig(
            token="t", base_url="https://example.test/", user_agent="Tester/2.0", timeout=5,
        ))
        assert adapter.token == "t"
        assert adapter.base_url == "https://example.test"
        assert adapter.user_agent == "Tester/2.0"
        assert adapter.timeout == 5

    @pytest.mark.asyncio
    async def test_every_operation_fails_without_network(self):
        session = make_session(make_response(payload=SEARCH_PAYLOAD))
        adapter = DiscogsAdapter(session=session)

        calls = [
            lambda: adapter.search("Kind of Blue"),
            lambda: adapter.search_by_artist_and_album("Miles Davis", "Kind of Blue"),
            lambda: adapter.get_release_details(1401531),
            lambda: adapter.get_master_release(5460),
            lambda: adapter.search_by_barcode("074646493520"),
            lambda: adapter.search_by_catalog_number("CL 1355"),
        ]
        with patch("aiohttp.ClientSession") as client_session:
            for call in calls:
                with pytest.raises(ConfigurationError):
                    await call()
            client_session.assert_not_called()

        assert session.get.call_count == 0

    @pytest.mark.asyncio
    async def test_unconfigured_client_checks_token_before_arguments(self):
        session = make_session(make_response(payload=SEARCH_PAYLOAD))
        adapter = DiscogsAdapter(session=session)

        calls = [
            lambda: adapter.search("x", page=0),
            lambda: adapter.search("x", "cassette"),
            lambda: adapter.search("x", per_page=True),
            lambda: adapter.get_release_details("abc"),
            lambda: adapter.get_master_release("abc"),
            lambda: adapter.search_by_catalog_number("x", page=0),
        ]
        for call in calls:
            with pytest.raises(ConfigurationError):
                await call()

        assert session.get.call_count == 0


class TestRequests:
    """Tests for request construction."""

    @pytest.mark.asyncio
    async def test_headers(self, adapter, search_session):
        await adapter.search("Kind of Blue")

        headers = search_session.get.call_args.kwargs["headers"]
        assert headers == {
            "Content-Type": "application/json",
            "User-Agent": "VinylCollectionApp/1.0",
            "Authorization": "Discogs token=secret-token",
        }

    @pytest.mark.asyncio
    async def test_search_defaults(self, adapter, search_session):
        response = await adapter.search("Kind of Blue")

        assert search_session.get.call_args.args[0] == "https://api.discogs.com/database/search"
        assert sent_params(search_session) == {"q": "Kind of Blue", "page": "1", "per_page": "20"}
        assert len(response) == 1
        result = response.results[0]
        assert result.id == 1401531
        assert result.title == "Miles Davis - Kind of Blue"
        assert result.year == "1959"
        assert result.label == ["Columbia"]
        assert response.pagination.items == 55
        assert response.pagination.has_next

    @pytest.mark.asyncio
    async def test_search_with_type_and_paging(self, adapter, search_session):
        await adapter.search("Coltrane", "artist", page=2, per_page=50)
        assert sent_params(search_session) == {
            "q": "Coltrane", "page": "2", "per_page": "50", "type": "artist",
        }

        await adapter.search("Coltrane", SearchType.MASTER)
        assert sent_params(search_session)["type"] == "master"

    @pytest.mark.asyncio
    async def test_search_rejects_unknown_type(self, adapter, search_session):
        with pytest.raises(ValueError):
            await adapter.search("x", "cassette")
        assert search_session.get.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", [0, -1, True])
    async def test_search_rejects_bad_page(self, adapter, page):
        with pytest.raises(ValueError):
            await adapter.search("x", page=page)

    @pytest.mark.asyncio
    async def test_search_by_artist_and_album(self, adapter, search_session):
        await adapter.search_by_artist_and_album("Miles Davis", "Kind of Blue", page=3)
        assert sent_params(search_session) == {
            "q": "Miles Davis Kind of Blue", "page": "3", "per_page": "20", "type": "release",
        }

    @pytest.mark.asyncio
    async def test_search_by_barcode(self, adapter, search_session):
        response = await adapter.search_by_barcode("074646493520")
        assert sent_params(search_session) == {"barcode": "074646493520", "type": "release"}
        assert response.results[0].catno == "CL 1355"

    @pytest.mark.asyncio
    async def test_search_by_catalog_number(self, adapter, search_session):
        await adapter.search_by_catalog_number("CL 1355", page=2)
        assert sent_params(search_session) == {"catno": "CL 1355", "type": "release", "page": "2"}

    @pytest.mark.asyncio
    async def test_get_release_details(self):
        session = make_session(make_response(payload=RELEASE_PAYLOAD))
        adapter = DiscogsAdapter(token="t", session=session)

        release = await adapter.get_release_details(1401531)

        assert session.get.call_args.args[0] == "https://api.discogs.com/releases/1401531"
        assert isinstance(release, DiscogsReleaseDetails)
        assert release.artists[0].name == "Miles Davis"
        assert release.labels[0].catno == "CL 1355"
        assert release.formats[0].descriptions == ["LP", "Album", "Mono"]
        assert release.tracklist[0].title == "So What"
        assert release.images[0].uri150 == "https://img/150.jpg"
        assert release.find_identifier("Matrix / Runout").value == "XLP 47324-1A"
        assert release.notes == "Original mono pressing."
        assert release.raw["lowest_price"] == 120.5

    @pytest.mark.asyncio
    async def test_get_master_release(self):
        payload = {"id": 5460, "title": "Kind of Blue", "main_release": 1401531, "year": 1959,
                   "genres": ["Jazz"], "artists": [{"name": "Miles Davis", "id": 23755}]}
        session = make_session(make_response(payload=payload))
        adapter = DiscogsAdapter(token="t", session=session)

        master = await adapter.get_master_release(5460)

        assert session.get.call_args.args[0] == "https://api.discogs.com/masters/5460"
        assert isinstance(master, DiscogsMasterRelease)
        assert master.main_release == 1401531
        assert master.artists[0].name == "Miles Davis"

    @pytest.mark.asyncio
    async def test_opens_session_per_call_without_injected_session(self):
        session = make_session(make_response(payload=SEARCH_PAYLOAD))
        adapter = DiscogsAdapter(token="t", timeout=12)

        with patch(
            "aiohttp.ClientSession",
            side_effect=lambda **kwargs: MockAsyncContextManager(session),
        ) as client_session:
            await adapter.search("one")
            await adapter.search("two")

        assert client_session.call_count == 2
        assert client_session.call_args.kwargs["timeout"].total == 12
        assert session.get.call_count == 2


class TestErrors:
    """Tests for error conversion."""

    @pytest.mark.asyncio
    async def test_http_error_with_server_message(self):
        session = make_session(make_response(404, {"message": "Release not found."}, reason="Not Found"))
        adapter = DiscogsAdapter(token="t", session=session)

        with pytest.raises(LookupHttpError) as exc_info:
            await adapter.get_release_details(999)

        error = exc_info.value
        assert error.status == 404
        assert error.status_text == "Not Found"
        assert error.message == "Release not found."
        assert "404" in str(error)

    @pytest.mark.asyncio
    async def test_http_error_with_unparseable_body(self):
        session = make_session(make_response(502, reason="Bad Gateway", invalid_json=True))
        adapter = DiscogsAdapter(token="t", session=session)

        with pytest.raises(LookupHttpError) as exc_info:
            await adapter.search("x")

        assert exc_info.value.status == 502
        assert exc_info.value.message == ""

    @pytest.mark.asyncio
    async def test_http_error_when_body_read_times_out(self):
        response = make_response(503, reason="Service Unavailable")
        response.json = AsyncMock(side_effect=asyncio.TimeoutError())
        adapter = DiscogsAdapter(token="t", session=make_session(response))

        with pytest.raises(LookupHttpError) as exc_info:
            await adapter.get_release_details(1401531)

        assert exc_info.value.status == 503
        assert exc_info.value.status_text == "Service Unavailable"
        assert exc_info.value.message == ""

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        session = make_session(make_response(401, {"message": "You must authenticate."}, reason="Unauthorized"))
        adapter = DiscogsAdapter(token="wrong", session=session)

        with pytest.raises(LookupHttpError) as exc_info:
            await adapter.search("x")
        assert exc_info.value.status == 401

    @pytest.mark.asyncio
    async def test_invalid_json_on_success(self):
        session = make_session(make_response(200, invalid_json=True))
        adapter = DiscogsAdapter(token="t", session=session)

        with pytest.raises(LookupResponseError):
            await adapter.search("x")

    @pytest.mark.asyncio
    async def test_non_object_body_on_success(self):
        session = make_session(make_response(200, payload=["not", "an", "object"]))
        adapter = DiscogsAdapter(token="t", session=session)

        with pytest.raises(LookupResponseError):
            await adapter.get_release_details(1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failure", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ])
    async def test_transport_errors(self, failure):
        session = MagicMock()
        session.get = MagicMock(side_effect=failure)
        adapter = DiscogsAdapter(token="t", session=session)

        with pytest.raises(LookupTransportError) as exc_info:
            await adapter.search("x")
        assert exc_info.value.__cause__ is failure
