"""Local asset library — an Asset Resolver over a JSON manifest.

Each asset has a durable id, a public URL, an optional local file, a language
and a translation group.  Assets in the same group are language variants of
each other.  Image dimensions come from the manifest, or from the file itself
via Pillow.
"""

import json
import logging
import mimetypes
import os
from dataclasses import dataclass, asdict, field
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .media import strip_query

log = logging.getLogger(__name__)


@dataclass
class AssetRecord:
    """One media asset."""
    id: str
    url: str
    file: str = ""         # Local path, absolute or relative to the library root
    language: str = ""
    group: str = ""        # Translation group — same group = same logical asset
    mime: str = ""
    width: int = 0
    height: int = 0


@dataclass
class LocalAssetLibrary:
    assets: list = field(default_factory=list)
    root_dir: str = ""      # Local directory that base_url is served from
    base_url: str = ""
    default_language: str = ""

    def __post_init__(self):
        self._build_index()

    def _build_index(self):
        self._by_id = {a.id: a for a in self.assets}
        self._by_url = {strip_query(a.url): a for a in self.assets}

    def _next_id(self) -> str:
        numeric = [int(a.id) for a in self.assets if a.id.isdigit()]
        return str(max(numeric, default=0) + 1)

    def _local_file(self, record: AssetRecord) -> str:
        if not record.file:
            return ""
        if os.path.isabs(record.file) or not self.root_dir:
            return record.file
        return os.path.join(self.root_dir, record.file)

    def _file_for_url(self, url: str) -> str:
        """Map a URL under base_url to a file under root_dir ('' if outside)."""
        if not self.base_url or not self.root_dir:
            return ""
        base = self.base_url.rstrip("/") + "/"
        if not url.startswith(base):
            return ""
        rel = url[len(base):]
        return os.path.join(self.root_dir, *rel.split("/"))

    # ── Asset Resolver port ──────────────────────────────────────

    def lookup_by_url(self, url: str) -> Optional[str]:
        record = self._by_url.get(strip_query(url))
        return record.id if record else None

    def ensure_registered(self, url: str) -> Optional[str]:
        """Register a URL that points at an existing local file."""
        existing = self.lookup_by_url(url)
        if existing:
            return existing
        local = self._file_for_url(strip_query(url))
        if not local or not os.path.isfile(local):
            return None
        asset_id = self._next_id()
        record = AssetRecord(
            id=asset_id,
            url=strip_query(url),
            file=os.path.relpath(local, self.root_dir),
            language=self.default_language,
            group=asset_id,
            mime=mimetypes.guess_type(local)[0] or "",
        )
        self.assets.append(record)
        self._by_id[record.id] = record
        self._by_url[record.url] = record
        log.info("Registered asset %s for %s", asset_id, record.url)
        return asset_id

    def translated_variant(self, asset_id: str,
                           language: Optional[str] = None) -> Optional[str]:
        source = self._by_id.get(asset_id)
        if source is None or not language:
            return None
        if source.language == language:
            return source.id
        group = source.group or source.id
        for a in self.assets:
            if (a.group or a.id) == group and a.language == language:
                return a.id
        return None

    def url_of(self, asset_id: str) -> Optional[str]:
        record = self._by_id.get(asset_id)
        return record.url if record else None

    def metadata_of(self, asset_id: str) -> dict:
        record = self._by_id.get(asset_id)
        if record is None:
            return {}
        if not (record.width and record.height):
            self._read_dimensions(record)
        meta = {}
        if record.width and record.height:
            meta["width"] = record.width
            meta["height"] = record.height
        if record.mime:
            meta["mime"] = record.mime
        return meta

    def _read_dimensions(self, record: AssetRecord):
        """Fill width/height (and mime) from the image file."""
        path = self._local_file(record)
        if not path or not os.path.isfile(path):
            return
        try:
            with Image.open(path) as img:
                record.width, record.height = img.size
                if not record.mime and img.format:
                    record.mime = Image.MIME.get(img.format, "")
        except (UnidentifiedImageError, OSError) as exc:
            log.debug("Cannot read image size for %s: %s", path, exc)

    # ── Persistence ─────────────────────────────────────────────

    def save(self, path: str):
        data = {
            "root_dir": self.root_dir,
            "base_url": self.base_url,
            "default_language": self.default_language,
            "assets": [asdict(a) for a in self.assets],
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    @classmethod
    def load(cls, path: str) -> "LocalAssetLibrary":
        """Load a manifest; relative root_dir is taken relative to the file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        assets = []
        for raw in data.get("assets", []):
            if not isinstance(raw, dict):
                continue
            try:
                raw = dict(raw, id=str(raw.get("id", "")))
                assets.append(AssetRecord(**raw))
            except TypeError:
                log.warning("Skipping malformed asset record: %r", raw)
        root_dir = data.get("root_dir", "")
        if root_dir and not os.path.isabs(root_dir):
            root_dir = os.path.join(os.path.dirname(os.path.abspath(path)), root_dir)
        return cls(
            assets=assets,
            root_dir=root_dir,
            base_url=data.get("base_url", ""),
            default_language=data.get("default_language", ""),
        )
