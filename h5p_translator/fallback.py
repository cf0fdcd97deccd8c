"""Schema-independent scanners for text and media the schema walker missed.

Both scanners walk the raw tree with a depth bound.  The text scanner builds
paths exactly like the schema walker does, so a value the walker already
translated produces the same slot name and is skipped.
"""

import logging

from .heuristics import is_translatable_text, looks_like_image
from .semantics import parse_library_string

log = logging.getLogger(__name__)

MAX_SCAN_DEPTH = 20


def _child_paths(node: dict, key: str, child, paths):
    """Paths for ``node[key]`` as the schema walker would build them."""
    if key == "params":
        library = parse_library_string(node.get("library"))
        if library is not None:
            return paths.library(node, library.key)
    return paths.child(key, child)


class FallbackTextScanner:
    """Finds prose strings anywhere in the tree and translates them."""

    def __init__(self, strings, max_depth: int = MAX_SCAN_DEPTH):
        self.strings = strings
        self.max_depth = max_depth

    def scan(self, node, paths, traversal, key=None, depth: int = 0):
        """Scan `node`; returns the (possibly replaced) node."""
        if depth > self.max_depth:
            log.debug("Depth bound reached at %s", paths.raw)
            return node

        if isinstance(node, str):
            return self._scan_string(node, paths, traversal, key)

        if isinstance(node, dict):
            for k, child in node.items():
                if not isinstance(child, (str, dict, list)):
                    continue
                child_paths = _child_paths(node, k, child, paths)
                node[k] = self.scan(child, child_paths, traversal, k, depth + 1)
        elif isinstance(node, list):
            for index, item in enumerate(node):
                if not isinstance(item, (str, dict, list)):
                    continue
                node[index] = self.scan(item, paths.indexed(index, item),
                                        traversal, key, depth + 1)
        return node

    def _scan_string(self, value: str, paths, traversal, key) -> str:
        if not value.strip():
            return value
        name = self.strings.slot_name(paths)
        if name in traversal.translated:
            return value
        if not is_translatable_text(value, key):
            log.debug("Skipping non-text %s = %r", paths.raw, value[:40])
            return value
        allow_html = "<" in value and ">" in value
        return self.strings.register_and_translate(
            value, paths, traversal, allow_html, name=name)


class FallbackMediaScanner:
    """Finds image references anywhere in the tree."""

    def __init__(self, media, max_depth: int = MAX_SCAN_DEPTH):
        self.media = media
        self.max_depth = max_depth

    def scan(self, node, traversal, depth: int = 0):
        if depth > self.max_depth:
            return
        if isinstance(node, dict):
            if looks_like_image(node):
                self.media.translate(node, traversal)
                return
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            return
        for child in children:
            if isinstance(child, (dict, list)):
                self.scan(child, traversal, depth + 1)
