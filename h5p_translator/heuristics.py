"""Value heuristics — is this string prose?  Is this mapping an image?

Used by the fallback scanners, which see values without a schema and must
avoid translating URLs, colors, numbers, identifiers and JSON blobs.
"""

import re

# Keys whose values are never display text (compared case-insensitively)
SKIP_KEYS = frozenset(k.lower() for k in (
    # identity / structure
    "path", "mime", "library", "contentId", "subContentId", "id", "uuid",
    "file", "files", "source", "src", "url", "href", "action", "machineName",
    "contentType", "license", "licenseVersion", "codec", "quality",
    # coordinates and dimensions
    "x", "y", "top", "left", "right", "bottom", "width", "height",
    "offsetX", "offsetY", "scale", "zoom", "rotation", "duration",
    "startTime", "endTime",
    # colors
    "color", "backgroundColor", "textColor", "borderColor", "fontColor",
    "fillColor", "strokeColor", "colorScheme",
    # telemetry
    "xAPI", "xapiId", "trackingId", "analyticsId", "eventName", "verb",
))

# Absolute (scheme://) or protocol-relative (//) URL, plus mailto:, tel: and
# data: URIs that carry an actual address, number or media type
_URL_RE = re.compile(
    r'^(?:[a-zA-Z][a-zA-Z0-9+.\-]*:)?//'
    r'|^mailto:\S+@\S+$'
    r'|^tel:\+?[\d\s\-().]+$'
    r'|^data:[\w.+-]+/[\w.+-]+[;,]',
    re.IGNORECASE)

_MEDIA_EXTS = (
    "png", "jpe?g", "gif", "webp", "svg", "bmp", "avif", "ico", "tiff?",
    "mp4", "webm", "ogv", "mov", "m4v", "mp3", "ogg", "oga", "wav", "m4a", "aac",
    "pdf", "docx?", "xlsx?", "pptx?", "odt", "csv", "txt", "zip", "vtt", "srt",
    "json", "h5p",
)
# A filename with a known media/document extension, optional query string
_MEDIA_FILE_RE = re.compile(
    r'^\S+\.(?:' + "|".join(_MEDIA_EXTS) + r')(?:\?\S*)?$', re.IGNORECASE)

_IMAGE_EXT_RE = re.compile(
    r'\.(?:png|jpe?g|gif|webp|svg|bmp|avif)(?:[?#]\S*)?$', re.IGNORECASE)

# CSS colors: #fff, #ff000080, rgb()/rgba()/hsl()/hsla()
_HEX_COLOR_RE = re.compile(r'^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
_FUNC_COLOR_RE = re.compile(r'^(?:rgba?|hsla?)\([^()]*\)$', re.IGNORECASE)

_NUMERIC_RE = re.compile(r'^[-+]?(?:\d+(?:[.,]\d+)*|[.,]\d+)%?$')

_TAG_RE = re.compile(r'<[^>]*>')
_NBSP_RE = re.compile(r'&nbsp;|&#160;|&#xa0;|\u00a0', re.IGNORECASE)


def is_skip_key(key) -> bool:
    return isinstance(key, str) and key.lower() in SKIP_KEYS


def is_url(text: str) -> bool:
    return bool(_URL_RE.match(text.strip()))


def is_media_filename(text: str) -> bool:
    return bool(_MEDIA_FILE_RE.match(text.strip()))


def is_color(text: str) -> bool:
    stripped = text.strip()
    return bool(_HEX_COLOR_RE.match(stripped) or _FUNC_COLOR_RE.match(stripped))


def is_numeric(text: str) -> bool:
    return bool(_NUMERIC_RE.match(text.strip()))


def strip_html(text: str) -> str:
    """Remove tags and non-breaking spaces; what a reader would actually see."""
    return _NBSP_RE.sub(" ", _TAG_RE.sub("", text)).strip()


def is_json_literal(text: str) -> bool:
    """Whole value is a single JSON-looking object or array."""
    stripped = text.strip()
    if len(stripped) < 2:
        return False
    return ((stripped[0] == "{" and stripped[-1] == "}")
            or (stripped[0] == "[" and stripped[-1] == "]"))


def is_translatable_text(value: str, key=None) -> bool:
    """Decide if a string found without schema is human-readable prose."""
    if not isinstance(value, str) or not value.strip():
        return False
    if is_skip_key(key):
        return False
    if is_url(value):
        return False
    if is_media_filename(value):
        return False
    if is_color(value):
        return False
    if is_numeric(value):
        return False
    if not strip_html(value):
        return False
    if is_json_literal(value):
        return False
    return True


# ── Media predicates ──────────────────────────────────────────────

def looks_like_image(node) -> bool:
    """A mapping with a usable ``path`` that is an image by mime or extension."""
    if not isinstance(node, dict):
        return False
    path = node.get("path")
    if not isinstance(path, str) or not path.strip():
        return False
    mime = node.get("mime")
    if isinstance(mime, str) and mime.lower().startswith("image/"):
        return True
    return bool(_IMAGE_EXT_RE.search(path.strip()))
