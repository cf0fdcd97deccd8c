"""REST host adapter — Translation Provider, Asset Resolver and Language
Context over a small JSON HTTP API exposed by the host site.

Endpoints (relative to ``base_url``):

    GET  /status                              -> 200 when ready
    POST /strings                             {context, name, value, allow_html}
    GET  /strings/translation                 ?context&name&value&language -> {"value"}
    GET  /media/lookup                        ?url -> {"id"} | 404
    POST /media                               {url} -> {"id"}
    GET  /media/<id>                          -> {"url", "mime", "width", "height"}
    GET  /media/<id>/translations/<language>  -> {"id"} | 404
    GET  /languages                           -> {"current", "default"}

Calls use short timeouts and are never retried: a backend that does not
answer promptly is reported as unavailable.
"""

import logging
from typing import Optional

import requests

from .errors import ProviderUnavailable

log = logging.getLogger(__name__)


class RestClient:
    """Client for the host site's translation REST API."""

    def __init__(self, base_url: str, timeout: int = 5, api_key: str = ""):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key
        self._media_cache: dict[str, dict] = {}  # asset id -> /media/<id> payload

    def _headers(self) -> dict:
        if self.api_key:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> Optional[dict]:
        """Send a request; None on 404, ProviderUnavailable on any failure."""
        try:
            r = requests.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
            if r.status_code == 404:
                return None
            r.raise_for_status()
            return r.json() if r.content else {}
        except (requests.RequestException, ValueError) as exc:
            raise ProviderUnavailable(f"{method} {path} failed: {exc}") from exc

    def is_available(self) -> bool:
        """Check if the host API is reachable."""
        try:
            r = requests.get(f"{self.base_url}/status", headers=self._headers(), timeout=self.timeout)
            return r.status_code == 200
        except (requests.RequestException, ValueError, OSError):
            return False

    # ── Translation Provider ─────────────────────────────────────

    def register(self, context: str, name: str, value: str, allow_html: bool):
        self._request("POST", "/strings", json={
            "context": context,
            "name": name,
            "value": value,
            "allow_html": allow_html,
        })

    def translate(self, value: str, context: str, name: str,
                  language: Optional[str] = None) -> str:
        params = {"context": context, "name": name, "value": value}
        if language:
            params["language"] = language
        data = self._request("GET", "/strings/translation", params=params)
        if not data:
            return value
        translated = data.get("value")
        return translated if isinstance(translated, str) and translated else value

    # ── Asset Resolver ───────────────────────────────────────────

    def lookup_by_url(self, url: str) -> Optional[str]:
        data = self._request("GET", "/media/lookup", params={"url": url})
        return str(data["id"]) if data and data.get("id") else None

    def ensure_registered(self, url: str) -> Optional[str]:
        data = self._request("POST", "/media", json={"url": url})
        return str(data["id"]) if data and data.get("id") else None

    def translated_variant(self, asset_id: str,
                           language: Optional[str] = None) -> Optional[str]:
        if not language:
            return None
        data = self._request("GET", f"/media/{asset_id}/translations/{language}")
        return str(data["id"]) if data and data.get("id") else None

    def _media(self, asset_id: str) -> dict:
        if asset_id not in self._media_cache:
            self._media_cache[asset_id] = self._request("GET", f"/media/{asset_id}") or {}
        return self._media_cache[asset_id]

    def url_of(self, asset_id: str) -> Optional[str]:
        return self._media(asset_id).get("url") or None

    def metadata_of(self, asset_id: str) -> dict:
        data = self._media(asset_id)
        return {k: data[k] for k in ("width", "height", "mime") if data.get(k)}

    # ── Language Context ─────────────────────────────────────────

    def _languages(self) -> dict:
        return self._request("GET", "/languages") or {}

    def current_language(self) -> Optional[str]:
        return self._languages().get("current") or None

    def default_language(self) -> Optional[str]:
        return self._languages().get("default") or None
