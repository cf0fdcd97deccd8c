"""Media field translation — swap an image reference for its translated asset.

Pipeline: content path → absolute URL → asset id → translated asset id →
translated URL (+ mime / dimensions).  Every step may come up empty, in which
case the node is left untouched.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from . import TEMP_FILE_MARKER
from .errors import ProviderUnavailable

log = logging.getLogger(__name__)


def strip_query(url: str) -> str:
    """Drop ``?query`` and ``#fragment``."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def site_origin(site_url: str) -> str:
    parts = urlsplit(site_url)
    if not parts.scheme or not parts.netloc:
        return site_url.rstrip("/")
    return f"{parts.scheme}://{parts.netloc}"


class MediaTranslator:
    """Resolves media paths against the host and applies translated assets."""

    def __init__(self, resolver, settings):
        """
        Args:
            resolver: An AssetResolver, or None to disable media translation.
            settings: Settings with site_url, content_base_url, content_prefixes.
        """
        self.resolver = resolver
        self.settings = settings

    # ── URL resolution ────────────────────────────────────────────

    def resolve_url(self, path: str, content_id: Optional[int] = None) -> str:
        """Turn a content-relative media path into an absolute URL."""
        path = path.strip()
        if "://" in path.split("?", 1)[0] or path.startswith("//"):
            return path
        if path.startswith("/"):
            return site_origin(self.settings.site_url) + path

        base = self.settings.content_base_url.rstrip("/")
        if any(path.startswith(p) for p in self.settings.content_prefixes):
            return f"{base}/{path}"
        if content_id is not None:
            return f"{base}/content/{content_id}/{path}"
        return f"{base}/{path}"

    def _asset_for_url(self, url: str) -> Optional[str]:
        """Read-only lookup first, then best-effort registration."""
        asset_id = self.resolver.lookup_by_url(url)
        if asset_id:
            return asset_id
        try:
            return self.resolver.ensure_registered(url)
        except ProviderUnavailable as exc:
            log.debug("Could not register asset %s: %s", url, exc)
            return None

    # ── Node translation ─────────────────────────────────────────

    def translate(self, node, traversal) -> bool:
        """Replace the node's media fields with the translated asset's.

        Returns True if the node was changed.
        """
        if self.resolver is None or not isinstance(node, dict):
            return False
        path = node.get("path")
        if not isinstance(path, str) or not path.strip():
            return False
        if TEMP_FILE_MARKER in path:
            return False  # editor upload not saved yet

        url = strip_query(self.resolve_url(path, traversal.content_id))
        try:
            asset_id = self._asset_for_url(url)
            if not asset_id:
                log.debug("No asset for %s", url)
                return False
            variant = self.resolver.translated_variant(asset_id, traversal.language)
            if not variant or variant == asset_id:
                return False
            new_url = self.resolver.url_of(variant)
            if not new_url:
                return False
            meta = self.resolver.metadata_of(variant) or {}
        except ProviderUnavailable as exc:
            log.warning("Asset resolver unavailable for %s: %s", url, exc)
            return False

        node["path"] = new_url
        for key in ("mime", "width", "height"):
            if key in node and meta.get(key):
                node[key] = meta[key]
        traversal.media_replaced += 1
        log.debug("Media %s -> %s", path, new_url)
        return True
