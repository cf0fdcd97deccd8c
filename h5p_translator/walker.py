"""Schema-driven traversal of H5P parameters.

Walks the content tree alongside its semantics, dispatching on field kind.
String leaves are replaced with their translations, image fields go through
the media translator, and polymorphic ``library`` slots are followed into
their own semantics.  Anything the schema does not cover is left for the
fallback scanners.
"""

import logging

from . import HTML_TAG_RE
from .heuristics import looks_like_image
from .semantics import FieldKind, TEXT_KINDS, parse_library_string

log = logging.getLogger(__name__)


class SchemaWalker:
    """Walks content with semantics.  Holds no per-request state: the
    Traversal is passed through every call."""

    def __init__(self, semantics_cache, strings, media):
        """
        Args:
            semantics_cache: SemanticsCache for nested library lookups.
            strings: StringTranslator shared with the fallback scanner.
            media: MediaTranslator shared with the fallback media scanner.
        """
        self.semantics = semantics_cache
        self.strings = strings
        self.media = media

    def translate_fields(self, params, fields: list, paths, traversal):
        """Translate every schema field present in a mapping, in place."""
        if not isinstance(params, dict):
            return
        for f in fields:
            if not f.name or f.name not in params:
                continue
            value = params[f.name]
            child = paths.child(f.name, value)
            params[f.name] = self.translate_field(value, f, child, traversal)

    def translate_field(self, value, field, paths, traversal):
        """Translate one value according to its field; returns the new value."""
        kind = field.kind

        if kind in TEXT_KINDS:
            if not isinstance(value, str) or value == "":
                return value
            allow_html = (field.allows_html
                          or bool(HTML_TAG_RE.search(value)))
            return self.strings.register_and_translate(
                value, paths, traversal, allow_html)

        if kind is FieldKind.IMAGE:
            self.media.translate(value, traversal)
            return value

        if kind is FieldKind.FILE:
            if looks_like_image(value):
                self.media.translate(value, traversal)
            return value

        if kind is FieldKind.GROUP:
            if field.fields and isinstance(value, dict):
                self.translate_fields(value, field.fields, paths, traversal)
            return value

        if kind is FieldKind.LIST:
            if field.field is None or not isinstance(value, list):
                return value
            for index, item in enumerate(value):
                value[index] = self.translate_field(
                    item, field.field, paths.indexed(index, item), traversal)
            return value

        if kind is FieldKind.LIBRARY:
            self._translate_library(value, paths, traversal)
            return value

        # Unknown kinds still get walked if they declare children
        if field.fields and isinstance(value, dict):
            log.debug("Walking children of %r field at %s", field.raw_type, paths.raw)
            self.translate_fields(value, field.fields, paths, traversal)
        return value

    def _translate_library(self, value, paths, traversal):
        """Follow a polymorphic slot into the chosen library's semantics."""
        if not isinstance(value, dict) or "params" not in value:
            return
        library = parse_library_string(value.get("library"))
        if library is None:
            log.debug("Unparseable library at %s: %r", paths.raw, value.get("library"))
            return

        nested = self.semantics.get(library.name, library.major, library.minor)
        if not nested:
            log.debug("No semantics for %s at %s — left to fallback", library.key, paths.raw)
            return

        self.translate_fields(value["params"], nested,
                              paths.library(value, library.key), traversal)
