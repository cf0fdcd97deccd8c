"""Entry point — translate one H5P content document in place."""

import logging
from typing import Optional

from .config import Settings
from .errors import ProviderUnavailable
from .fallback import FallbackMediaScanner, FallbackTextScanner
from .media import MediaTranslator
from .paths import library_key, root_paths
from .providers import AssetResolver, LanguageContext, SchemaProvider, TranslationProvider
from .semantics import SemanticsCache
from .traversal import StringTranslator, Traversal
from .walker import SchemaWalker

log = logging.getLogger(__name__)

CONTEXT_PREFIX = "H5P Content"


def content_context(content_id: Optional[int]) -> str:
    """Translation context for a content item: ``H5P Content 42``."""
    if content_id is None or content_id == "":
        return CONTEXT_PREFIX
    return f"{CONTEXT_PREFIX} {content_id}"


class H5PTranslator:
    """Runs the schema walker and fallback scanners over content parameters.

    One instance can serve many requests: the semantics cache is the only
    state it keeps between calls.
    """

    def __init__(self, schema_provider: SchemaProvider,
                 translation_provider: TranslationProvider,
                 asset_resolver: Optional[AssetResolver] = None,
                 language_context: Optional[LanguageContext] = None,
                 settings: Optional[Settings] = None,
                 semantics_cache: Optional[SemanticsCache] = None):
        self.settings = settings or Settings()
        self.translation_provider = translation_provider
        self.language_context = language_context
        self.semantics = semantics_cache or SemanticsCache(schema_provider)

        self.strings = StringTranslator(translation_provider, self.settings.max_slot_length)
        self.media = MediaTranslator(asset_resolver, self.settings)
        self.walker = SchemaWalker(self.semantics, self.strings, self.media)
        self.text_scanner = FallbackTextScanner(self.strings, self.settings.max_scan_depth)
        self.media_scanner = FallbackMediaScanner(self.media, self.settings.max_scan_depth)

    def resolve_language(self) -> Optional[str]:
        """Active language: current, then default, then the configured one."""
        if self.language_context is not None:
            try:
                lang = (self.language_context.current_language()
                        or self.language_context.default_language())
            except ProviderUnavailable as exc:
                log.warning("Language context unavailable: %s", exc)
                lang = None
            if lang:
                return lang
        return self.settings.default_language or None

    def is_available(self) -> bool:
        """True if the translation backend can take strings.

        Providers without an ``is_available`` method are assumed ready.
        """
        check = getattr(self.translation_provider, "is_available", None)
        if check is None:
            return True
        try:
            return bool(check())
        except ProviderUnavailable:
            return False

    def translate_parameters(self, document, library_name: str,
                             major_version: int, minor_version: int,
                             content_id: Optional[int] = None):
        """Translate `document` in place and return it.

        Args:
            document: Parsed content parameters (dict, or list for odd content).
            library_name: Machine name, e.g. "H5P.MultiChoice".
            major_version: Library major version.
            minor_version: Library minor version.
            content_id: Owning content identity; used for the translation
                context and to resolve content-relative media paths.
        """
        if not isinstance(document, (dict, list)):
            return document
        key = library_key(library_name, major_version, minor_version)
        traversal = Traversal(
            context=content_context(content_id),
            language=self.resolve_language(),
            content_id=content_id,
            strings_enabled=self.is_available(),
        )
        if not traversal.strings_enabled:
            log.info("Translation provider unavailable, translating media only for %s", key)
        paths = root_paths(document, key)

        fields = self.semantics.get(library_name, major_version, minor_version)
        if fields:
            self.walker.translate_fields(document, fields, paths, traversal)
        else:
            log.info("No semantics for %s — using fallback scan only", key)

        if traversal.strings_enabled and self.settings.fallback_enabled_for(library_name):
            document = self.text_scanner.scan(document, paths, traversal)
        self.media_scanner.scan(document, traversal)

        log.info("Translated %s (%s): %d strings, %d media",
                 key, traversal.context, traversal.registered, traversal.media_replaced)
        return document
