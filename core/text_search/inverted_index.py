# core/text_search/inverted_index.py
"""
Track Inverted Index
====================
In-memory inverted index over album, artist and title fields.
The term dictionary is a MARISA trie (term -> term id); postings
for each (term, field) pair are read-only numpy arrays of document
ordinals and term frequencies, kept in document input order.

An index is built once from a document snapshot and never mutated
afterwards, so a published index can be read without locking.
"""
import logging
import time
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple
import marisa_trie
import numpy as np
from config import SEARCH_FIELDS
from core.text_search.documents import Document
from core.text_search.tokenizer import tokenize

logger = logging.getLogger(__name__)

def _frozen(values, dtype=np.int64) -> np.ndarray:
    array = np.asarray(values, dtype=dtype)
    array.flags.writeable = False
    return array

@dataclass(frozen=True)
class Postings:
    """Documents containing one term in one field."""
    doc_ordinals: np.ndarray
    frequencies: np.ndarray

    def __len__(self) -> int:
        return len(self.doc_ordinals)

class InvertedIndex:
    """
    Immutable index generation: term dictionary, postings and corpus statistics.

    Use InvertedIndex.build() rather than the constructor.
    """

    def __init__(self, doc_ids: Sequence[Hashable], fields: Tuple[str, ...],
                 trie: marisa_trie.Trie, postings: Dict[str, Dict[int, Postings]],
                 doc_frequencies: np.ndarray, field_lengths: Dict[str, np.ndarray]):
        self.doc_ids = tuple(doc_ids)
        self.fields = fields
        self._trie = trie
        self._postings = postings
        self._doc_frequencies = doc_frequencies
        self._field_lengths = field_lengths
        self._ordinals = {doc_id: i for i, doc_id in enumerate(self.doc_ids)}
        self._field_totals = {f: int(lengths.sum()) for f, lengths in field_lengths.items()}

    @classmethod
    def build(cls, documents: Iterable[Document],
              fields: Iterable[str] = SEARCH_FIELDS) -> "InvertedIndex":
        """
        Build an index generation from a document snapshot.

        Args:
            documents: Documents with unique ids, indexed in the given order
            fields: Names of the Document text fields to index

        Returns:
            A fully built InvertedIndex (empty when there are no documents)
        """
        fields = tuple(sorted(set(fields)))
        unknown = [f for f in fields if f not in SEARCH_FIELDS]
        if unknown:
            raise ValueError(f"Unknown document fields: {', '.join(unknown)}")

        start_time = time.time()
        doc_ids = []
        seen_ids = set()
        lengths = {f: [] for f in fields}
        # (term, field) -> [(ordinal, frequency), ...]
        accumulated = defaultdict(list)
        doc_frequency = Counter()

        for ordinal, document in enumerate(documents):
            if document.id in seen_ids:
                raise ValueError(f"Duplicate document id: {document.id!r}")
            seen_ids.add(document.id)
            doc_ids.append(document.id)

            doc_terms = set()
            for field in fields:
                terms = tokenize(document.field_text(field))
                lengths[field].append(len(terms))
                for term, frequency in Counter(terms).items():
                    accumulated[(term, field)].append((ordinal, frequency))
                    doc_terms.add(term)
            doc_frequency.update(doc_terms)

        trie = marisa_trie.Trie(list(doc_frequency.keys()))

        doc_frequencies = np.zeros(len(trie), dtype=np.int64)
        for term, count in doc_frequency.items():
            doc_frequencies[trie[term]] = count
        doc_frequencies.flags.writeable = False

        postings = {f: {} for f in fields}
        for (term, field), entries in accumulated.items():
            ordinals, frequencies = zip(*entries)
            postings[field][trie[term]] = Postings(_frozen(ordinals), _frozen(frequencies))

        field_lengths = {f: _frozen(lengths[f]) for f in fields}

        index = cls(doc_ids, fields, trie, postings, doc_frequencies, field_lengths)
        logger.info(
            f"Built index: {index.document_count:,} documents, "
            f"{len(trie):,} terms in {time.time() - start_time:.2f}s"
        )
        return index

    @property
    def document_count(self) -> int:
        return len(self.doc_ids)

    def __len__(self) -> int:
        return self.document_count

    def __contains__(self, term: str) -> bool:
        return term in self._trie

    def terms(self) -> List[str]:
        """All indexed terms, sorted."""
        return sorted(self._trie.keys())

    def term_id(self, term: str) -> Optional[int]:
        if term not in self._trie:
            return None
        return self._trie[term]

    def document_frequency(self, term: str) -> int:
        """Number of distinct documents containing the term in any field."""
        term_id = self.term_id(term)
        if term_id is None:
            return 0
        return int(self._doc_frequencies[term_id])

    def field_postings(self, term: str, field: str) -> Optional[Postings]:
        term_id = self.term_id(term)
        if term_id is None or field not in self._postings:
            return None
        return self._postings[field].get(term_id)

    def postings(self, term: str, field: str) -> List[Tuple[Hashable, int]]:
        """Ordered (document id, frequency) pairs for a term in a field."""
        entries = self.field_postings(term, field)
        if entries is None:
            return []
        return [
            (self.doc_ids[ordinal], int(frequency))
            for ordinal, frequency in zip(entries.doc_ordinals, entries.frequencies)
        ]

    def field_lengths(self, field: str) -> np.ndarray:
        """Term counts of a field, indexed by document ordinal."""
        return self._field_lengths[field]

    def field_length(self, doc_id: Hashable, field: str) -> int:
        return int(self._field_lengths[field][self._ordinals[doc_id]])

    def total_field_length(self, field: str) -> int:
        return self._field_totals.get(field, 0)

    def average_field_length(self, field: str) -> float:
        if self.document_count == 0:
            return 0.0
        return self.total_field_length(field) / self.document_count
