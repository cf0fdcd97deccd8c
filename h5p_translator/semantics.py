"""H5P semantics — field schema model, library strings and schema lookup.

Semantics come from a library's ``semantics.json``: a list of field objects
(``name``, ``type``, optional ``fields``/``field``/``tags``/``widget``).
Only the parts the walkers need are modelled; everything else is ignored.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .errors import ProviderUnavailable, SemanticsError
from .paths import library_key

log = logging.getLogger(__name__)


class FieldKind(Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    HTML = "html"
    IMAGE = "image"
    FILE = "file"
    GROUP = "group"
    LIST = "list"
    LIBRARY = "library"
    OTHER = "other"

    @classmethod
    def from_type(cls, type_name) -> "FieldKind":
        try:
            return cls(type_name)
        except ValueError:
            return cls.OTHER


TEXT_KINDS = (FieldKind.TEXT, FieldKind.TEXTAREA, FieldKind.HTML)


@dataclass
class SchemaField:
    """One field of a library's semantics."""
    name: str
    kind: FieldKind = FieldKind.OTHER
    fields: list = field(default_factory=list)   # children (group / other)
    field: Optional["SchemaField"] = None        # item schema (list)
    tags: Optional[list] = None                  # HTML tag allowlist
    widget: str = ""
    raw_type: str = ""

    @property
    def allows_html(self) -> bool:
        return (self.kind is FieldKind.HTML
                or self.tags is not None
                or self.widget == "html")

    @classmethod
    def from_dict(cls, data: dict) -> Optional["SchemaField"]:
        """Build a field from a semantics JSON object.

        List item schemas may be unnamed in H5P, so a missing name becomes
        ''; callers that walk named children skip those.
        """
        if not isinstance(data, dict):
            return None
        raw_type = data.get("type", "")
        if not isinstance(raw_type, str):
            raw_type = ""
        name = data.get("name", "")
        tags = data.get("tags")
        return cls(
            name=name if isinstance(name, str) else "",
            kind=FieldKind.from_type(raw_type),
            fields=parse_semantics(data.get("fields")) if "fields" in data else [],
            field=cls.from_dict(data.get("field")),
            tags=list(tags) if isinstance(tags, list) else None,
            widget=data.get("widget", "") if isinstance(data.get("widget"), str) else "",
            raw_type=raw_type,
        )


def parse_semantics(raw) -> list:
    """Convert a semantics JSON list into SchemaField objects."""
    if not isinstance(raw, list):
        return []
    parsed = []
    for item in raw:
        f = SchemaField.from_dict(item)
        if f is not None:
            parsed.append(f)
    return parsed


# ── Library strings ───────────────────────────────────────────────

# "H5P.MultiChoice 1.16" — extra suffix (patch version etc.) is ignored
_LIBRARY_RE = re.compile(r'^(\S+)\s+(\d+)\.(\d+)')


@dataclass(frozen=True)
class LibraryRef:
    name: str
    major: int
    minor: int

    @property
    def key(self) -> str:
        return library_key(self.name, self.major, self.minor)


def parse_library_string(value) -> Optional[LibraryRef]:
    """Parse ``"<name> <major>.<minor>"``; None if it does not match."""
    if not isinstance(value, str):
        return None
    m = _LIBRARY_RE.match(value)
    if not m:
        return None
    return LibraryRef(m.group(1), int(m.group(2)), int(m.group(3)))


# ── Schema lookup ─────────────────────────────────────────────────

class SemanticsCache:
    """Memoizes schema lookups by ``name:major.minor``.

    Misses are cached too.  Safe to share between invocations: values are
    never mutated after insertion, and repeated writes store the same value.
    """

    def __init__(self, provider):
        self.provider = provider
        self._cache: dict[str, Optional[list]] = {}

    def get(self, name: str, major: int, minor: int) -> Optional[list]:
        key = f"{name}:{major}.{minor}"
        if key in self._cache:
            return self._cache[key]
        try:
            fields = self.provider.resolve(name, major, minor)
        except ProviderUnavailable as exc:
            log.warning("Semantics for %s unavailable: %s", key, exc)
            return None  # not cached — a later call may succeed
        except SemanticsError as exc:
            log.warning("%s", exc)
            fields = None
        if fields is not None and not fields:
            fields = None
        self._cache[key] = fields
        return fields

    def clear(self):
        """Forget every cached schema, e.g. after libraries were upgraded."""
        self._cache.clear()


class LibraryDirSchemaProvider:
    """Reads semantics from an H5P libraries folder.

    Layout: ``<libraries_dir>/<name>-<major>.<minor>/semantics.json``.
    """

    def __init__(self, libraries_dir: str):
        self.libraries_dir = libraries_dir

    def _semantics_path(self, name: str, major: int, minor: int) -> str:
        return os.path.join(self.libraries_dir, f"{name}-{major}.{minor}", "semantics.json")

    def resolve(self, name: str, major: int, minor: int) -> Optional[list]:
        if not self.libraries_dir:
            return None
        path = self._semantics_path(name, major, minor)
        if not os.path.isfile(path):
            log.debug("No semantics.json for %s %d.%d", name, major, minor)
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise SemanticsError(f"Invalid semantics in {path}: {exc}") from exc
        except OSError as exc:
            raise ProviderUnavailable(f"Cannot read {path}: {exc}") from exc
        return parse_semantics(raw)


class DictSchemaProvider:
    """Schema provider over an in-memory ``{"Name major.minor": semantics}`` map."""

    def __init__(self, semantics: dict):
        self.semantics = semantics

    def resolve(self, name: str, major: int, minor: int) -> Optional[list]:
        raw = self.semantics.get(library_key(name, major, minor))
        if raw is None:
            return None
        return parse_semantics(raw)
