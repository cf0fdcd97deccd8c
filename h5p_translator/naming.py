"""Slot-name codec — turns a stable path into a bounded translation key.

Long paths are truncated and suffixed with a hash of the *full* path, so two
paths that share a long prefix still get distinct names.
"""

import hashlib

MAX_SLOT_NAME_LENGTH = 160
HASH_LENGTH = 12


def _path_hash(path: str) -> str:
    return hashlib.sha1(path.encode("utf-8")).hexdigest()[:HASH_LENGTH]


def encode_slot_name(path: str, max_length: int = MAX_SLOT_NAME_LENGTH) -> str:
    """Return `path` itself if it fits, else ``prefix#hash``.

    Deterministic: the same path always yields the same name.
    """
    if len(path) <= max_length:
        return path

    digest = _path_hash(path)
    keep = max_length - HASH_LENGTH - 1
    if keep < 1:
        return "#" + digest
    return path[:keep] + "#" + digest


def slot_name_for(paths, max_length: int = MAX_SLOT_NAME_LENGTH) -> str:
    """Slot name for a NodePath: stable path first, raw path if that is empty."""
    return encode_slot_name(paths.stable or paths.raw, max_length)
