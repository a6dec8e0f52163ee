# core/text_search/index_manager.py
"""
Own the current index generation and publish rebuilt ones.
"""
import logging
from enum import Enum
from typing import Any, Iterable, Optional
from config import SEARCH_FIELDS
from core.text_search.documents import DecodeError, decode_tracks, project_tracks
from core.text_search.inverted_index import InvertedIndex

logger = logging.getLogger(__name__)

class IndexState(Enum):
    EMPTY = "empty"
    BUILDING = "building"
    READY = "ready"

class IndexManager:
    """
    Holds the single current InvertedIndex generation.

    A rebuild constructs a complete new generation from a track snapshot and
    only then replaces the current reference, so readers always see either
    the previous generation or the new one in full. Generations are never
    modified after they are published.
    """

    def __init__(self, fields: Iterable[str] = SEARCH_FIELDS):
        self.fields = tuple(fields)
        self._current: Optional[InvertedIndex] = None
        self._state = IndexState.EMPTY
        self._generation = 0

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def generation(self) -> int:
        """Number of generations published so far (0 before the first rebuild)."""
        return self._generation

    def current_index(self) -> Optional[InvertedIndex]:
        return self._current

    def rebuild(self, tracks: Any) -> InvertedIndex:
        """
        Build and publish a new generation from a full track collection.

        Args:
            tracks: List of track records, their JSON text, or None

        Returns:
            The newly published InvertedIndex

        Raises:
            DecodeError: If the input cannot be decoded; the previous
                         generation stays current.
        """
        previous_state = self._state
        self._state = IndexState.BUILDING
        try:
            documents = project_tracks(decode_tracks(tracks))
            index = InvertedIndex.build(documents, self.fields)
        except DecodeError as e:
            self._state = previous_state
            logger.warning(f"Rebuild rejected, keeping generation {self._generation}: {e}")
            raise
        except Exception:
            self._state = previous_state
            raise

        self._current = index
        self._generation += 1
        self._state = IndexState.READY
        logger.info(f"Published index generation {self._generation} ({index.document_count:,} tracks)")
        return index
