"""JSON-backed string store — a Translation Provider that keeps its own data.

Strings are registered under ``(context, slot name)`` with their source
text; translations are stored per language code.
"""

import json
import logging
import os
from collections import defaultdict
from dataclasses import dataclass, field, asdict
from typing import Optional

log = logging.getLogger(__name__)

DONE_STATUSES = ("translated", "reviewed")


@dataclass
class StringEntry:
    """A single registered string."""
    context: str           # e.g. "H5P Content 42"
    name: str              # Slot name e.g. "H5P.Test 1.0.text", "subContentId:7.question"
    original: str          # Source-language text
    allow_html: bool = False
    translations: dict = field(default_factory=dict)  # language code -> text
    status: str = "untranslated"  # "untranslated" | "translated" | "reviewed" | "needs_update"

    @property
    def key(self) -> tuple:
        return (self.context, self.name)


@dataclass
class StringStore:
    """Holds every string registered by the walkers."""
    entries: list = field(default_factory=list)

    def __post_init__(self):
        self._build_index()

    def _build_index(self):
        self._by_key = {e.key: e for e in self.entries}

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def translated_count(self) -> int:
        return sum(1 for e in self.entries if e.status in DONE_STATUSES)

    @property
    def untranslated_count(self) -> int:
        return sum(1 for e in self.entries if e.status not in DONE_STATUSES)

    def get(self, context: str, name: str) -> Optional[StringEntry]:
        return self._by_key.get((context, name))

    def get_contexts(self) -> list:
        """Return sorted unique contexts."""
        return sorted({e.context for e in self.entries})

    def search(self, query: str) -> list:
        """Search entries by original or any translation text."""
        q = query.lower()
        return [
            e for e in self.entries
            if q in e.original.lower()
            or any(q in t.lower() for t in e.translations.values())
        ]

    # ── Translation Provider port ───────────────────────────────

    def is_available(self) -> bool:
        return True

    def register(self, context: str, name: str, value: str, allow_html: bool):
        """Add a string, or refresh it if its source text changed."""
        entry = self._by_key.get((context, name))
        if entry is None:
            entry = StringEntry(context=context, name=name, original=value,
                                allow_html=allow_html)
            self.entries.append(entry)
            self._by_key[entry.key] = entry
            log.debug("Registered %s / %s", context, name)
            return
        if entry.original != value:
            entry.original = value
            if entry.status in DONE_STATUSES:
                entry.status = "needs_update"
        entry.allow_html = entry.allow_html or allow_html

    def translate(self, value: str, context: str, name: str,
                  language: Optional[str] = None) -> str:
        """Stored translation for `language`, or `value` unchanged."""
        if not language:
            return value
        entry = self._by_key.get((context, name))
        if entry is None or entry.status not in DONE_STATUSES:
            return value
        if entry.original != value:
            return value
        return entry.translations.get(language) or value

    def set_translation(self, context: str, name: str, language: str,
                        text: str, status: str = "translated") -> bool:
        """Store a translation.  Returns False if the string is unknown."""
        entry = self._by_key.get((context, name))
        if entry is None:
            return False
        entry.translations[language] = text
        entry.status = status
        return True

    # ── Persistence ─────────────────────────────────────────────

    def save_state(self, path: str):
        """Save all entries to a JSON file."""
        data = {"entries": [asdict(e) for e in self.entries]}
        os.makedirs(os.path.dirname(path) if os.path.dirname(path) else ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    @classmethod
    def load_state(cls, path: str) -> "StringStore":
        """Load entries from a saved JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        entries = []
        for raw in data.get("entries", []):
            try:
                entries.append(StringEntry(**raw))
            except TypeError:
                log.warning("Skipping malformed string entry: %r", raw)
        return cls(entries=entries)

    def import_translations(self, old_store: "StringStore") -> dict:
        """Carry translations over from an older store.

        Matching strategy:
        1. Exact key match — same context and slot name, same source text
        2. Original text match — catches strings whose slot moved

        Only entries still untranslated in this store are filled.

        Returns:
            Dict with stats: {"by_key": int, "by_text": int, "skipped": int, "new": int}
        """
        old_by_key = {}
        old_by_text = defaultdict(list)
        for e in old_store.entries:
            if e.translations and e.status in DONE_STATUSES:
                old_by_key[e.key] = e
                old_by_text[e.original].append(e)

        stats = {"by_key": 0, "by_text": 0, "skipped": 0, "new": 0}

        for entry in self.entries:
            if entry.status in DONE_STATUSES:
                stats["skipped"] += 1
                continue

            old = old_by_key.get(entry.key)
            if old and old.original == entry.original:
                entry.translations = dict(old.translations)
                entry.status = old.status
                stats["by_key"] += 1
                continue

            candidates = old_by_text.get(entry.original, [])
            if candidates:
                entry.translations = dict(candidates[0].translations)
                entry.status = candidates[0].status
                stats["by_text"] += 1
                continue

            stats["new"] += 1

        return stats
