from h5p_translator.string_store import StringEntry, StringStore


def test_register_and_translate_flow():
    store = StringStore()
    store.register("H5P Content 1", "H5P.Test 1.0.text", "Hello", False)
    assert store.translate("Hello", "H5P Content 1", "H5P.Test 1.0.text", "fr") == "Hello"

    assert store.set_translation("H5P Content 1", "H5P.Test 1.0.text", "fr", "Bonjour")
    assert store.translate("Hello", "H5P Content 1", "H5P.Test 1.0.text", "fr") == "Bonjour"
    assert store.translate("Hello", "H5P Content 1", "H5P.Test 1.0.text", "de") == "Hello"
    assert store.translate("Hello", "H5P Content 1", "H5P.Test 1.0.text", None) == "Hello"


def test_changed_source_needs_update():
    store = StringStore()
    store.register("c", "n", "Hello", False)
    store.set_translation("c", "n", "fr", "Bonjour")
    store.register("c", "n", "Hello there", False)

    entry = store.get("c", "n")
    assert entry.status == "needs_update"
    assert store.translate("Hello there", "c", "n", "fr") == "Hello there"
    assert store.total == 1


def test_set_translation_unknown_string():
    assert not StringStore().set_translation("c", "missing", "fr", "x")


def test_save_and_load_roundtrip(tmp_path):
    store = StringStore()
    store.register("c", "n", "<p>Hi</p>", True)
    store.set_translation("c", "n", "fr", "<p>Salut</p>", status="reviewed")
    path = tmp_path / "strings.json"
    store.save_state(str(path))

    loaded = StringStore.load_state(str(path))
    assert loaded.get("c", "n").translations == {"fr": "<p>Salut</p>"}
    assert loaded.get("c", "n").allow_html
    assert loaded.translated_count == 1


def test_import_translations_by_key_then_text():
    old = StringStore(entries=[
        StringEntry("c", "a", "Yes", translations={"fr": "Oui"}, status="translated"),
        StringEntry("c", "moved", "No", translations={"fr": "Non"}, status="translated"),
        StringEntry("c", "draft", "Maybe"),
    ])
    new = StringStore(entries=[
        StringEntry("c", "a", "Yes"),
        StringEntry("c", "b", "No"),
        StringEntry("c", "draft", "Maybe"),
        StringEntry("c", "done", "Done", translations={"fr": "Fini"}, status="reviewed"),
    ])

    stats = new.import_translations(old)

    assert stats == {"by_key": 1, "by_text": 1, "skipped": 1, "new": 1}
    assert new.translate("No", "c", "b", "fr") == "Non"


def test_search_and_contexts():
    store = StringStore()
    store.register("H5P Content 2", "x", "Capital of France", False)
    store.register("H5P Content 1", "y", "Paris", False)
    store.set_translation("H5P Content 1", "y", "de", "Paris (Stadt)")
    assert [e.name for e in store.search("stadt")] == ["y"]
    assert store.get_contexts() == ["H5P Content 1", "H5P Content 2"]
