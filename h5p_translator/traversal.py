"""Per-invocation traversal state and the shared register+translate step."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .errors import ProviderUnavailable
from .naming import MAX_SLOT_NAME_LENGTH, slot_name_for

log = logging.getLogger(__name__)


@dataclass
class Traversal:
    """State owned by one ``translate_parameters`` call.

    ``translated`` holds the slot names the schema walker already handled;
    the fallback text scanner consults it so nothing is registered twice.
    ``strings_enabled`` is cleared when the Translation Provider is down;
    media is still translated in that case.
    """
    context: str
    language: Optional[str] = None
    content_id: Optional[int] = None
    translated: set = field(default_factory=set)
    registered: int = 0
    media_replaced: int = 0
    strings_enabled: bool = True


class StringTranslator:
    """Registers a string with the Translation Provider and returns its
    translation, marking the slot as handled for this traversal."""

    def __init__(self, provider, max_slot_length: int = MAX_SLOT_NAME_LENGTH):
        self.provider = provider
        self.max_slot_length = max_slot_length

    def slot_name(self, paths) -> str:
        return slot_name_for(paths, self.max_slot_length)

    def register_and_translate(self, value: str, paths, traversal: Traversal,
                               allow_html: bool, name: str = "") -> str:
        name = name or self.slot_name(paths)
        traversal.translated.add(name)
        if not traversal.strings_enabled:
            return value
        try:
            self.provider.register(traversal.context, name, value, allow_html)
            translated = self.provider.translate(
                value, traversal.context, name, traversal.language)
        except ProviderUnavailable as exc:
            log.warning("Translation provider unavailable for %s: %s", paths.raw, exc)
            return value
        traversal.registered += 1
        log.debug("Translated %s as %r", paths.raw, name)
        return translated if isinstance(translated, str) else value
