import httpx
import pytest

from api_showcase.api import endpoints
from api_showcase.api.errors import DecodeFailure, FetchFailure, StatusFailure, TransportFailure
from api_showcase.api.fetcher import DataFetcher, build_async_client
from api_showcase.config import AppConfig

POSTS = [{"userId": 1, "id": 1, "title": "sunt aut facere", "body": "quia et suscipit"}]


def make_fetcher(handler, **config_overrides):
    config = AppConfig(**config_overrides)
    client = build_async_client(config, transport=httpx.MockTransport(handler))
    return DataFetcher(config, client=client), client


@pytest.mark.asyncio
async def test_fetch_returns_payload_unchanged():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=POSTS)

    fetcher, client = make_fetcher(handler)
    async with client:
        payload = await fetcher.fetch("/posts")

    assert payload == POSTS
    assert str(seen[0].url) == "https://jsonplaceholder.typicode.com/posts"
    assert seen[0].method == "GET"
    assert seen[0].headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_fetch_sends_query_parameters():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    fetcher, client = make_fetcher(handler, api_base_url="http://api.test")
    async with client:
        assert await fetcher.fetch(endpoints.posts_by_user(3)) == []

    assert seen[0].url.path == "/posts"
    assert seen[0].url.params["userId"] == "3"


@pytest.mark.asyncio
@pytest.mark.parametrize("code", [403, 404, 500, 503])
async def test_non_success_status_raises_status_failure(code):
    fetcher, client = make_fetcher(lambda request: httpx.Response(code, json={}))
    async with client:
        with pytest.raises(StatusFailure) as excinfo:
            await fetcher.fetch("/users/999")

    assert excinfo.value.code == code
    assert excinfo.value.status_code == code
    assert excinfo.value.endpoint == "/users/999"


@pytest.mark.asyncio
async def test_malformed_body_raises_decode_failure():
    fetcher, client = make_fetcher(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    async with client:
        with pytest.raises(DecodeFailure) as excinfo:
            await fetcher.fetch("/posts")

    assert not isinstance(excinfo.value, TransportFailure)
    assert excinfo.value.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout])
async def test_transport_errors_raise_transport_failure(error):
    def handler(request):
        raise error("boom", request=request)

    fetcher, client = make_fetcher(handler)
    async with client:
        with pytest.raises(TransportFailure) as excinfo:
            await fetcher.fetch("/posts")

    assert isinstance(excinfo.value.__cause__, error)
    assert isinstance(excinfo.value, FetchFailure)


@pytest.mark.asyncio
async def test_empty_endpoint_is_rejected_before_any_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=[])

    fetcher, client = make_fetcher(handler)
    async with client:
        with pytest.raises(ValueError):
            await fetcher.fetch("")
    assert calls == []


@pytest.mark.asyncio
async def test_fetcher_waits_on_rate_limiter():
    class CountingLimiter:
        def __init__(self):
            self.waits = 0

        async def wait(self):
            self.waits += 1

    limiter = CountingLimiter()
    config = AppConfig()
    client = build_async_client(config, transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))
    fetcher = DataFetcher(config, client=client, rate_limiter=limiter)
    async with client:
        await fetcher.fetch("/posts")
        await fetcher.fetch("/users")
    assert limiter.waits == 2


@pytest.mark.asyncio
async def test_injected_client_is_not_closed_by_fetcher():
    config = AppConfig()
    client = build_async_client(config, transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))
    async with DataFetcher(config, client=client):
        pass
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_broken_content_encoding_raises_decode_failure():
    def handler(request):
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip", "Content-Type": "application/json"},
            stream=httpx.ByteStream(b"[1, 2, 3] is not gzip"),
        )

    fetcher, client = make_fetcher(handler)
    async with client:
        with pytest.raises(DecodeFailure) as excinfo:
            await fetcher.fetch("/posts")

    assert not isinstance(excinfo.value, TransportFailure)
    assert isinstance(excinfo.value.__cause__, httpx.DecodingError)
