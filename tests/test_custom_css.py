import os

from h5p_translator.config import Settings
from h5p_translator.custom_css import CustomCss, FILE_NAME, SUBDIR, sanitize_css


def make(tmp_path, css=""):
    return CustomCss(Settings(custom_css=css, upload_dir=str(tmp_path),
                              upload_url="https://example.com/uploads/"))


def test_sanitize_css():
    assert sanitize_css("  a{}\r\nb{}\r  ") == "a{}\nb{}"
    assert sanitize_css(None) == ""
    assert sanitize_css(12) == ""


def test_appends_single_stylesheet(tmp_path):
    css = make(tmp_path, ".h5p-content { color: red; }")
    styles = [{"path": "/h5p/core.css", "version": "?ver=1"}]

    css.apply_custom_style_asset(styles, [], "iframe")
    css.apply_custom_style_asset(styles, [], "iframe")

    assert len(styles) == 2
    assert styles[1]["path"] == f"https://example.com/uploads/{SUBDIR}/{FILE_NAME}"
    assert styles[1]["version"].startswith("?ver=")
    with open(os.path.join(tmp_path, SUBDIR, FILE_NAME), encoding="utf-8") as f:
        assert f.read() == ".h5p-content { color: red; }"


def test_empty_css_adds_nothing(tmp_path):
    styles = []
    assert make(tmp_path).apply_custom_style_asset(styles, [], "div") == []


def test_empty_css_removes_file(tmp_path):
    css = make(tmp_path, "a{}")
    assert css.write_css_file("a{}")
    assert css.write_css_file("") is None
    assert not os.path.exists(os.path.join(tmp_path, SUBDIR, FILE_NAME))


def test_without_upload_settings(tmp_path):
    css = CustomCss(Settings(custom_css="a{}"))
    assert css.get_paths() is None
    assert css.apply_custom_style_asset([], [], "div") == []
