"""Shared fakes for the translator tests."""

import pytest

from h5p_translator.config import Settings
from h5p_translator.providers import StaticLanguageContext
from h5p_translator.semantics import DictSchemaProvider
from h5p_translator.translator import H5PTranslator


class RecordingProvider:
    """Translation provider that records calls and serves a fixed table."""

    def __init__(self, table=None, available=True):
        self.table = table or {}     # value -> translation
        self.available = available
        self.registered = []         # (context, name, value, allow_html)
        self.translated = []         # (value, context, name, language)

    def is_available(self):
        return self.available

    def register(self, context, name, value, allow_html):
        self.registered.append((context, name, value, allow_html))

    def translate(self, value, context, name, language=None):
        self.translated.append((value, context, name, language))
        return self.table.get(value, value)

    def names(self):
        return [r[1] for r in self.registered]


class FakeAssets:
    """Asset resolver over plain dicts."""

    def __init__(self, by_url=None, variants=None, urls=None, meta=None):
        self.by_url = by_url or {}       # url -> asset id
        self.variants = variants or {}   # (asset id, language) -> asset id
        self.urls = urls or {}           # asset id -> url
        self.meta = meta or {}           # asset id -> metadata
        self.lookups = []
        self.registrations = []

    def lookup_by_url(self, url):
        self.lookups.append(url)
        return self.by_url.get(url)

    def ensure_registered(self, url):
        self.registrations.append(url)
        return None

    def translated_variant(self, asset_id, language=None):
        return self.variants.get((asset_id, language))

    def url_of(self, asset_id):
        return self.urls.get(asset_id)

    def metadata_of(self, asset_id):
        return self.meta.get(asset_id, {})


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def settings():
    return Settings(site_url="https://example.com",
                    content_base_url="https://example.com/wp-content/uploads/h5p")


@pytest.fixture
def make_translator(provider, settings):
    def _make(semantics=None, assets=None, language="fr", **overrides):
        for key, value in overrides.items():
            setattr(settings, key, value)
        return H5PTranslator(
            DictSchemaProvider(semantics or {}),
            provider,
            assets,
            StaticLanguageContext(language, "en"),
            settings,
        )
    return _make
