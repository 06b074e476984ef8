"""
Thread-safe cache of document projectors.

Projectors are derived from a single scan of a document version. The cache keeps the projectors of the most
recently used documents and rescans a document only when its version or language changes.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any

from embedlsp.document_regions import EmbeddedDocumentRegions, get_document_regions
from embedlsp.embedded_language_config import EmbeddedLanguageConfig
from embedlsp.regions import RegionScanner
from embedlsp.text_document import TextDocument

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CacheEntry:
    version: int
    language_id: str
    document_regions: EmbeddedDocumentRegions


class DocumentRegionsCache:
    """
    LRU cache of `EmbeddedDocumentRegions`, keyed by document uri.

    Example:
        >>> cache = DocumentRegionsCache(scanner, max_entries=10)
        >>> document_regions = cache.get(document)
        >>> cache.remove(document.uri)

    """

    def __init__(self, scanner: RegionScanner, config: EmbeddedLanguageConfig | None = None, max_entries: int = 10):
        """
        :param scanner: the scanner with which documents are decomposed into regions
        :param config: the language configuration passed to all projectors
        :param max_entries: the maximum number of documents to keep projectors for
        """
        self._scanner = scanner
        self._config = config or EmbeddedLanguageConfig()
        self._max_entries = max_entries
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def get(self, document: TextDocument) -> EmbeddedDocumentRegions:
        """
        Gets the projector for the given document, scanning the document if no projector for its current
        version is cached.

        :param document: the composite document
        :return: the projector
        """
        with self._lock:
            cached = self._get_current(document)
            if cached is not None:
                self._hits += 1
                return cached
            self._misses += 1

        # scanning happens outside the lock
        document_regions = get_document_regions(document, self._scanner, self._config)

        with self._lock:
            # another thread may have stored a projector for the same version in the meantime
            cached = self._get_current(document)
            if cached is not None:
                return cached
            self._entries[document.uri] = _CacheEntry(document.version, document.language_id, document_regions)
            self._entries.move_to_end(document.uri)
            self._evict_if_necessary()
            return document_regions

    def _get_current(self, document: TextDocument) -> EmbeddedDocumentRegions | None:
        # lock must be held
        entry = self._entries.get(document.uri)
        if entry is not None and entry.version == document.version and entry.language_id == document.language_id:
            self._entries.move_to_end(document.uri)
            return entry.document_regions
        return None

    def _evict_if_necessary(self) -> None:
        # lock must be held
        while len(self._entries) > self._max_entries:
            uri, _ = self._entries.popitem(last=False)
            log.debug(f"Evicted regions of {uri}; {len(self._entries)} documents remain cached")

    def remove(self, uri: str) -> bool:
        """
        Removes the projector of the document with the given uri, e.g. when the document is closed.

        :return: True if a projector was cached for the uri, False otherwise
        """
        with self._lock:
            return self._entries.pop(uri, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            log.debug("Document regions cache cleared")

    def hit_rate(self) -> float:
        with self._lock:
            total = self._hits + self._misses
            if total == 0:
                return 0.0
            return self._hits / total

    def stats(self) -> dict[str, Any]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self.hit_rate(),
                "max_entries": self._max_entries,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, uri: str) -> bool:
        with self._lock:
            return uri in self._entries
