"""H5P Translator — translate an H5P content.json offline.

Launch with: python main.py content.json --library "H5P.MultiChoice 1.16" --language fr
"""

import argparse
import json
import logging
import os
import sys

from h5p_translator.assets import LocalAssetLibrary
from h5p_translator.config import DEFAULT_SETTINGS_FILE, load_settings
from h5p_translator.custom_css import CustomCss
from h5p_translator.providers import StaticLanguageContext
from h5p_translator.rest_client import RestClient
from h5p_translator.semantics import LibraryDirSchemaProvider, parse_library_string
from h5p_translator.string_store import StringStore
from h5p_translator.translator import H5PTranslator

log = logging.getLogger("h5p_translator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate H5P content parameters.")
    parser.add_argument("content", help="Path to content.json (H5P parameters)")
    parser.add_argument("--library", required=True,
                        help='Main library, e.g. "H5P.MultiChoice 1.16"')
    parser.add_argument("--content-id", type=int, default=None)
    parser.add_argument("--language", default="", help="Target language code")
    parser.add_argument("--settings", default=DEFAULT_SETTINGS_FILE)
    parser.add_argument("--libraries-dir", default="",
                        help="H5P libraries folder (overrides settings)")
    parser.add_argument("--strings", default="",
                        help="String store JSON (created/updated)")
    parser.add_argument("--assets", default="", help="Asset manifest JSON")
    parser.add_argument("--remote", action="store_true",
                        help="Use the host REST API from settings.api_url")
    parser.add_argument("--styles", default="",
                        help="JSON list of H5P styles to append the custom stylesheet to")
    parser.add_argument("-o", "--output", default="", help="Output file (default: stdout)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def apply_styles(path: str, settings):
    """Append the custom stylesheet to the style list stored at `path`."""
    styles = []
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                styles = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            log.warning("Could not read styles from %s: %s", path, exc)
        if not isinstance(styles, list):
            styles = []
    styles = CustomCss(settings).apply_custom_style_asset(styles, embed_type="iframe")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(styles, f, indent=2)
    log.info("Styles: %d entries in %s", len(styles), path)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.settings)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, str(settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    library = parse_library_string(args.library)
    if library is None:
        log.error("Invalid library %r — expected '<name> <major>.<minor>'", args.library)
        return 2

    with open(args.content, "r", encoding="utf-8") as f:
        document = json.load(f)

    schema_provider = LibraryDirSchemaProvider(args.libraries_dir or settings.libraries_dir)
    language = StaticLanguageContext(args.language or None, settings.default_language or None)

    store = None
    assets = None
    if args.remote:
        if not settings.api_url:
            log.error("--remote needs api_url in %s", args.settings)
            return 2
        client = RestClient(settings.api_url, timeout=settings.api_timeout)
        translator = H5PTranslator(schema_provider, client, client, language, settings)
    else:
        if args.strings and os.path.exists(args.strings):
            store = StringStore.load_state(args.strings)
        else:
            store = StringStore()
        if args.assets:
            assets = LocalAssetLibrary.load(args.assets)
        translator = H5PTranslator(schema_provider, store, assets, language, settings)

    document = translator.translate_parameters(
        document, library.name, library.major, library.minor, args.content_id)

    if store is not None and args.strings:
        store.save_state(args.strings)
        log.info("String store: %d strings, %d translated", store.total, store.translated_count)
    if assets is not None:
        assets.save(args.assets)
    if args.styles:
        apply_styles(args.styles, settings)

    text = json.dumps(document, ensure_ascii=False, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
