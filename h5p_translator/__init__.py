"""H5P content translation — schema-driven string and media lookup.

Shared constants live here so every walker agrees on them.
"""

import re

__version__ = "1.2.3"

# Stable identifier embedded in sub-content nodes (survives reordering)
SUB_CONTENT_ID_KEY = "subContentId"

# Any <tag ...> — used to upgrade plain text fields to HTML
HTML_TAG_RE = re.compile(r'<[^<>]+>')

# Marker the H5P editor appends to not-yet-saved uploads
TEMP_FILE_MARKER = "#tmp"
