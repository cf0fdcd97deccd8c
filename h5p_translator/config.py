"""Persistent settings — loaded from and saved to a JSON file."""

import json
import logging
import os
from dataclasses import dataclass, field, asdict, fields
from typing import Optional

log = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "h5p_translator_settings.json"


@dataclass
class Settings:
    """Host and traversal settings shared by the translator and adapters."""
    site_url: str = "http://localhost"               # Origin for root-relative media paths
    content_base_url: str = "http://localhost/wp-content/uploads/h5p"
    content_prefixes: list = field(default_factory=lambda: [
        "content/", "editor/", "libraries/", "cachedassets/",
    ])                                               # Paths already relative to content_base_url
    libraries_dir: str = ""                          # H5P libraries folder (semantics.json lookup)
    fallback_libraries: Optional[list] = None        # None = fallback scan for every library
    max_slot_length: int = 160
    max_scan_depth: int = 20
    default_language: str = ""
    custom_css: str = ""
    upload_dir: str = ""                             # Filesystem root for the custom stylesheet
    upload_url: str = ""                             # Public URL of upload_dir
    api_url: str = ""                                # REST host adapter base URL
    api_timeout: int = 5
    log_level: str = "INFO"

    def fallback_enabled_for(self, library_name: str) -> bool:
        """True if the fallback text scanner may run for this library."""
        if self.fallback_libraries is None:
            return True
        return library_name in self.fallback_libraries


def load_settings(path: str = DEFAULT_SETTINGS_FILE) -> Settings:
    """Load settings from a JSON file, falling back to defaults.

    Unknown keys are ignored so older/newer settings files keep working.
    """
    settings = Settings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return settings  # No saved settings — use defaults

    if not isinstance(cfg, dict):
        log.warning("Ignoring settings file %s: top level is not an object", path)
        return settings

    known = {f.name for f in fields(Settings)}
    for key, value in cfg.items():
        if key in known:
            setattr(settings, key, value)
        else:
            log.debug("Ignoring unknown setting %r", key)
    return settings


def save_settings(settings: Settings, path: str = DEFAULT_SETTINGS_FILE):
    """Persist settings to a JSON file."""
    os.makedirs(os.path.dirname(path) if os.path.dirname(path) else ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, ensure_ascii=False, indent=2)
