"""Custom stylesheet for H5P embeds — stored as a file under the uploads dir."""

import hashlib
import logging
import os
from typing import Optional

log = logging.getLogger(__name__)

SUBDIR = "h5p-translator"
FILE_NAME = "h5p-custom.css"


def sanitize_css(value) -> str:
    """Normalize user-provided CSS: strings only, LF line endings, trimmed."""
    if not isinstance(value, str):
        return ""
    value = value.replace("\r\n", "\n").replace("\r", "\n")
    return value.strip()


class CustomCss:
    """Writes the configured CSS to disk and appends it to H5P style lists."""

    def __init__(self, settings):
        self.settings = settings

    @property
    def css(self) -> str:
        return sanitize_css(self.settings.custom_css)

    def get_paths(self) -> Optional[dict]:
        """Return {"dir", "path", "url"} for the stylesheet, or None if
        uploads are not configured."""
        if not self.settings.upload_dir or not self.settings.upload_url:
            return None
        directory = os.path.join(self.settings.upload_dir, SUBDIR)
        return {
            "dir": directory,
            "path": os.path.join(directory, FILE_NAME),
            "url": f"{self.settings.upload_url.rstrip('/')}/{SUBDIR}/{FILE_NAME}",
        }

    def write_css_file(self, css: str) -> Optional[str]:
        """Write the stylesheet (or remove it if `css` is empty).

        Only rewrites when the content changed.  Returns the public URL, or
        None when there is nothing to serve.
        """
        paths = self.get_paths()
        if not paths:
            return None

        if css == "":
            if os.path.exists(paths["path"]):
                try:
                    os.remove(paths["path"])
                except OSError as exc:
                    log.warning("Could not remove %s: %s", paths["path"], exc)
            return None

        try:
            os.makedirs(paths["dir"], exist_ok=True)
            existing = ""
            if os.path.exists(paths["path"]):
                with open(paths["path"], "r", encoding="utf-8") as f:
                    existing = f.read()
            if existing != css:
                with open(paths["path"], "w", encoding="utf-8") as f:
                    f.write(css)
        except OSError as exc:
            log.warning("Could not write custom CSS to %s: %s", paths["path"], exc)
            return None

        return paths["url"]

    def apply_custom_style_asset(self, styles: list, libraries=None,
                                 embed_type: str = "") -> list:
        """Append the custom stylesheet to an H5P style list.

        Adds at most one ``{"path": url, "version": "?ver=<hash>"}`` entry,
        and nothing when no CSS is configured.  `libraries` and `embed_type`
        are accepted for parity with the H5P styles hook.
        """
        css = self.css
        if not css:
            return styles
        url = self.write_css_file(css)
        if not url:
            return styles
        if any(isinstance(s, dict) and s.get("path") == url for s in styles):
            return styles

        version = hashlib.md5(css.encode("utf-8")).hexdigest()[:8]
        styles.append({"path": url, "version": f"?ver={version}"})
        log.debug("Added custom stylesheet for %s embed", embed_type or "default")
        return styles
