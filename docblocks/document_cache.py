"""Caches for parsed documents, keyed by source filename (case-insensitive)."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Protocol

from docblocks.models import ParsedDocument

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1


class DocumentCache(Protocol):
    """Storage the loader consults before parsing a file."""

    def get(self, key: str) -> ParsedDocument | None:
        """Return the document stored for ``key``, if any."""
        ...

    def put(self, key: str, document: ParsedDocument) -> None:
        """Store the document for ``key``."""
        ...


class SingleSlotCache:
    """Remembers the most recent document only.

    Asking for any other filename empties the slot, so a hit is only possible
    when the same file is requested twice in a row.
    """

    def __init__(self) -> None:
        """Initialize an empty slot."""
        self._key: str | None = None
        self._document: ParsedDocument | None = None
        self._lock = threading.Lock()

    def get(self, key: str) -> ParsedDocument | None:
        """Return the cached document for ``key``, invalidating on a miss."""
        with self._lock:
            if self._key is not None and self._key == key.lower():
                return self._document
            self._key = None
            self._document = None
            return None

    def put(self, key: str, document: ParsedDocument) -> None:
        """Replace the slot."""
        with self._lock:
            self._key = key.lower()
            self._document = document

    def clear(self) -> None:
        """Empty the slot."""
        with self._lock:
            self._key = None
            self._document = None


def _mtime(filename: str) -> float | None:
    try:
        return Path(filename).stat().st_mtime
    except OSError:
        return None


class JsonDocumentCache:
    """Persistent cache of parsed documents stored as one JSON file.

    Entries are dropped when the source file's modification time changes.
    The whole cache is ignored when it was written with another schema
    version or another parse configuration.
    """

    def __init__(self, path: str, current_config_hash: str) -> None:
        """Initialize the cache with a storage path and configuration hash."""
        self.path = Path(path)
        self.current_config_hash = current_config_hash
        self.entries: dict[str, dict[str, Any]] = {}  # lower(filename) -> entry
        self.dirty = False

    def load(self) -> None:
        """Load entries from disk; an unreadable cache is treated as empty."""
        if not self.path.exists():
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))

            meta = data.get("meta", {})
            schema_ver = meta.get("schema_version", 0)
            if schema_ver != CURRENT_SCHEMA_VERSION:
                logger.warning(
                    "Schema version mismatch (%s != %s). Ignoring cache.",
                    schema_ver,
                    CURRENT_SCHEMA_VERSION,
                )
                return
            if meta.get("config_hash") != self.current_config_hash:
                logger.warning(
                    "Configuration changed since cache was written. Ignoring."
                )
                return

            entries = {
                key: entry
                for key, entry in data.get("entries", {}).items()
                if isinstance(entry, dict)
            }
        except Exception:
            logger.exception("Error loading cache")
            return

        self.entries = entries

    def get(self, key: str) -> ParsedDocument | None:
        """Return the stored document if its source is unchanged."""
        entry = self.entries.get(key.lower())
        if not entry:
            return None
        if not isinstance(entry, dict):
            logger.warning("Corrupt cache entry: %s", key)
            self._drop(key)
            return None
        if entry.get("modified") != _mtime(key):
            logger.info("Stale cache entry: %s", key)
            self._drop(key)
            return None
        try:
            return ParsedDocument.from_dict(entry["document"])
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.exception("Corrupt cache entry: %s", key)
            self._drop(key)
            return None

    def _drop(self, key: str) -> None:
        del self.entries[key.lower()]
        self.dirty = True

    def put(self, key: str, document: ParsedDocument) -> None:
        """Store a document together with its source modification time."""
        self.entries[key.lower()] = {
            "filename": key,
            "modified": _mtime(key),
            "document": document.to_dict(),
        }
        self.dirty = True

    def save(self) -> None:
        """Write the cache to disk if anything changed."""
        if not self.dirty:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(
                {
                    "meta": {
                        "schema_version": CURRENT_SCHEMA_VERSION,
                        "config_hash": self.current_config_hash,
                    },
                    "entries": self.entries,
                },
                indent=2,
                sort_keys=True,
            ),
            encoding="utf-8",
        )
        self.dirty = False
