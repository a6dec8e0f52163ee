# core/text_search/documents.py
"""
Track record projection.
Decodes rebuild payloads from the catalog owner and projects each
track record into the searchable Document used by the index.
"""
import json
import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Hashable, Iterable, List, Mapping

logger = logging.getLogger(__name__)

class DecodeError(Exception):
    """Raised when rebuild input cannot be decoded into track records."""
    pass

@dataclass(frozen=True)
class Document:
    """One track's searchable projection."""
    id: Hashable
    album: str = ""
    artist: str = ""
    title: str = ""

    def field_text(self, field_name: str) -> str:
        return getattr(self, field_name)

    @classmethod
    def from_record(cls, record: Any) -> "Document":
        """
        Project a catalog track record into a Document.

        Only `id` and the `album`, `artist` and `title` entries of the
        nested `tags` mapping are read; everything else is ignored.
        """
        if not isinstance(record, Mapping):
            raise DecodeError(f"Track record must be an object, got {type(record).__name__}")
        if record.get("id") is None:
            raise DecodeError("Track record is missing an id")

        track_id = record["id"]
        if isinstance(track_id, bool):
            raise DecodeError(f"Track id must not be a boolean, got {track_id!r}")
        try:
            hash(track_id)
        except TypeError:
            raise DecodeError(f"Track id must be a scalar, got {type(track_id).__name__}")

        tags = record.get("tags")
        if tags is None:
            tags = {}
        elif not isinstance(tags, Mapping):
            raise DecodeError(f"Tags of track {track_id!r} must be an object")

        return cls(
            id=track_id,
            album=_as_text(tags.get("album")),
            artist=_as_text(tags.get("artist")),
            title=_as_text(tags.get("title"))
        )

def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)

def decode_tracks(payload: Any) -> List[Any]:
    """
    Decode a rebuild payload into a list of raw track records.

    Accepts an already structured collection, a JSON string or bytes,
    or None (an empty catalog).
    """
    if payload is None:
        return []

    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Track payload is not valid UTF-8: {e}") from e

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Track payload is not valid JSON: {e}") from e
        if payload is None:
            return []

    if isinstance(payload, (str, Mapping)) or not isinstance(payload, Iterable):
        raise DecodeError(f"Track payload must be a list, got {type(payload).__name__}")

    return list(payload)

def project_tracks(records: Iterable[Any]) -> List[Document]:
    """Project raw records into Documents, keeping the first record per id."""
    documents = []
    seen_ids = set()
    for record in records:
        document = Document.from_record(record)
        if document.id in seen_ids:
            logger.warning(f"Skipping duplicate track id {document.id!r}")
            continue
        seen_ids.add(document.id)
        documents.append(document)
    return documents

def id_sort_key(doc_id: Hashable):
    """Ascending document id order: numbers numerically, then everything else as text."""
    if isinstance(doc_id, Real) and not isinstance(doc_id, bool):
        return (0, doc_id, "")
    return (1, 0, str(doc_id))
