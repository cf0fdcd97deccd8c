"""Ports the core talks to.  Hosts plug in their own implementations.

Implementations signal an unreachable backend by raising
:class:`~h5p_translator.errors.ProviderUnavailable` (or by returning None);
the core never treats either as fatal.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


class SchemaProvider(Protocol):
    def resolve(self, name: str, major: int, minor: int) -> Optional[list]:
        """SchemaField list for the library, or None if unknown."""


class TranslationProvider(Protocol):
    """``is_available()`` is optional; without it the provider is assumed ready."""

    def register(self, context: str, name: str, value: str, allow_html: bool): ...

    def translate(self, value: str, context: str, name: str,
                  language: Optional[str] = None) -> str:
        """Translated value, or `value` unchanged when none exists."""


class AssetResolver(Protocol):
    def lookup_by_url(self, url: str) -> Optional[str]: ...

    def ensure_registered(self, url: str) -> Optional[str]: ...

    def translated_variant(self, asset_id: str,
                           language: Optional[str] = None) -> Optional[str]: ...

    def url_of(self, asset_id: str) -> Optional[str]: ...

    def metadata_of(self, asset_id: str) -> dict:
        """``{"width": int, "height": int, "mime": str}`` — keys optional."""


class LanguageContext(Protocol):
    def current_language(self) -> Optional[str]: ...

    def default_language(self) -> Optional[str]: ...


@dataclass
class StaticLanguageContext:
    """Fixed languages — for the CLI and for hosts that know them upfront."""
    current: Optional[str] = None
    default: Optional[str] = None

    def current_language(self) -> Optional[str]:
        return self.current or None

    def default_language(self) -> Optional[str]:
        return self.default or None
