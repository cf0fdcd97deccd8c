import pytest
import requests

from h5p_translator import rest_client
from h5p_translator.errors import ProviderUnavailable
from h5p_translator.rest_client import RestClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = b"" if payload is None else b"{}"

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def routes(monkeypatch):
    table = {}
    calls = []

    def fake_request(method, url, headers=None, timeout=None, **kwargs):
        calls.append((method, url, kwargs))
        key = (method, url.replace("https://host.test/api", ""))
        result = table.get(key, FakeResponse(404))
        if isinstance(result, Exception):
            raise result
        return result

    def fake_get(url, headers=None, timeout=None):
        return fake_request("GET", url, headers=headers, timeout=timeout)

    monkeypatch.setattr(rest_client.requests, "request", fake_request)
    monkeypatch.setattr(rest_client.requests, "get", fake_get)
    table["calls"] = calls
    return table


@pytest.fixture
def client():
    return RestClient("https://host.test/api/", timeout=2, api_key="secret")


def test_is_available(routes, client):
    assert not client.is_available()
    routes[("GET", "/status")] = FakeResponse(200, {})
    assert client.is_available()
    routes[("GET", "/status")] = requests.ConnectionError("refused")
    assert not client.is_available()


def test_register_and_translate(routes, client):
    routes[("POST", "/strings")] = FakeResponse(200, {})
    routes[("GET", "/strings/translation")] = FakeResponse(200, {"value": "Bonjour"})

    client.register("H5P Content 1", "H5P.Test 1.0.text", "Hello", False)
    assert client.translate("Hello", "H5P Content 1", "H5P.Test 1.0.text", "fr") == "Bonjour"

    method, _, kwargs = routes["calls"][-1]
    assert kwargs["params"]["language"] == "fr"


def test_translate_missing_returns_input(routes, client):
    assert client.translate("Hello", "c", "n", "fr") == "Hello"


def test_network_failure_raises_unavailable(routes, client):
    routes[("GET", "/strings/translation")] = requests.Timeout("slow")
    with pytest.raises(ProviderUnavailable):
        client.translate("Hello", "c", "n", "fr")


def test_asset_resolution(routes, client):
    routes[("GET", "/media/lookup")] = FakeResponse(200, {"id": 10})
    routes[("GET", "/media/10/translations/fr")] = FakeResponse(200, {"id": 11})
    routes[("GET", "/media/11")] = FakeResponse(
        200, {"url": "https://host.test/cat-fr.png", "width": 64, "height": 48, "mime": ""})

    assert client.lookup_by_url("https://host.test/cat.png") == "10"
    assert client.translated_variant("10", "fr") == "11"
    assert client.url_of("11") == "https://host.test/cat-fr.png"
    assert client.metadata_of("11") == {"width": 64, "height": 48}
    media_calls = [c for c in routes["calls"] if c[1].endswith("/media/11")]
    assert len(media_calls) == 1


def test_languages(routes, client):
    routes[("GET", "/languages")] = FakeResponse(200, {"current": "", "default": "en"})
    assert client.current_language() is None
    assert client.default_language() == "en"
