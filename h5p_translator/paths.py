"""Raw and stable path construction for content nodes.

Every visited node gets two paths:

* raw — positional, schema-field-name based (``H5P.Foo 1.0.items[2].text``),
  used only in logs.
* stable — anchored at the innermost ``subContentId`` found on the way down
  (``subContentId:abc.text``), used as the translation key.  Once an anchor
  is found the ancestor prefix is dropped, so moving a sub-content item
  around does not change its key.
"""

from dataclasses import dataclass

from . import SUB_CONTENT_ID_KEY


def get_sub_content_id(node) -> str:
    """Return the node's non-empty stable identifier, or ''."""
    if not isinstance(node, dict):
        return ""
    value = node.get(SUB_CONTENT_ID_KEY)
    if value is None or isinstance(value, (bool, dict, list)):
        return ""
    return str(value).strip()


def anchor(sub_content_id: str) -> str:
    return f"{SUB_CONTENT_ID_KEY}:{sub_content_id}"


def library_key(name: str, major: int, minor: int) -> str:
    """``H5P.Foo 1.2`` — the literal library-version key."""
    return f"{name} {major}.{minor}"


# ── Path segment builders ─────────────────────────────────────────

def raw_child(base: str, name: str) -> str:
    return f"{base}.{name}" if base else name


def raw_indexed(base: str, index: int, node) -> str:
    sub_id = get_sub_content_id(node)
    suffix = anchor(sub_id) if sub_id else index
    return f"{base}[{suffix}]"


def stable_child(base: str, name: str, node) -> str:
    sub_id = get_sub_content_id(node)
    if sub_id:
        return anchor(sub_id)
    return f"{base}.{name}" if base else name


def stable_indexed(base: str, index: int, node) -> str:
    sub_id = get_sub_content_id(node)
    if sub_id:
        return anchor(sub_id)
    return f"{base}[{index}]"


@dataclass(frozen=True)
class NodePath:
    """Raw + stable path pair for one node."""
    raw: str
    stable: str

    def child(self, name: str, node) -> "NodePath":
        return NodePath(raw_child(self.raw, name), stable_child(self.stable, name, node))

    def indexed(self, index: int, node) -> "NodePath":
        return NodePath(raw_indexed(self.raw, index, node),
                        stable_indexed(self.stable, index, node))

    def library(self, value, key: str) -> "NodePath":
        """Paths for the ``params`` of a polymorphic library slot.

        The stable path anchors on the slot value's own identifier, then on
        the params node's identifier, else appends ``.library[<key>]``.
        """
        segment = f".library[{key}]"
        sub_id = get_sub_content_id(value)
        if not sub_id and isinstance(value, dict):
            sub_id = get_sub_content_id(value.get("params"))
        stable = anchor(sub_id) if sub_id else self.stable + segment
        return NodePath(self.raw + segment, stable)


def root_paths(document, key: str) -> NodePath:
    """Root paths: raw is always the library key; stable prefers the
    document's own identifier."""
    sub_id = get_sub_content_id(document)
    return NodePath(key, anchor(sub_id) if sub_id else key)
