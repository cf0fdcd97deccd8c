from h5p_translator.naming import HASH_LENGTH, MAX_SLOT_NAME_LENGTH, encode_slot_name, slot_name_for
from h5p_translator.paths import NodePath


def test_short_path_unchanged():
    assert encode_slot_name("H5P.Test 1.0.text") == "H5P.Test 1.0.text"


def test_exact_limit_unchanged():
    path = "a" * MAX_SLOT_NAME_LENGTH
    assert encode_slot_name(path) == path


def test_long_path_is_bounded_and_deterministic():
    path = "H5P.Course 1.0." + "section." * 40 + "text"
    first = encode_slot_name(path)
    assert first == encode_slot_name(path)
    assert len(first) == MAX_SLOT_NAME_LENGTH
    prefix, digest = first.rsplit("#", 1)
    assert path.startswith(prefix)
    assert len(digest) == HASH_LENGTH


def test_shared_prefix_does_not_collide():
    common = "x" * 148
    a = common + "." + "a" * 40
    b = common + "." + "b" * 40
    assert encode_slot_name(a) != encode_slot_name(b)
    assert encode_slot_name(a)[:147] == encode_slot_name(b)[:147]


def test_tiny_limit_returns_hash_only():
    name = encode_slot_name("some.long.path", max_length=10)
    assert name.startswith("#")
    assert len(name) == HASH_LENGTH + 1


def test_slot_name_prefers_stable_path():
    assert slot_name_for(NodePath("raw.path", "subContentId:1.text")) == "subContentId:1.text"
    assert slot_name_for(NodePath("raw.path", "")) == "raw.path"
