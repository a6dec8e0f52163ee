# core/text_search/query_processor.py
"""
Query Processor
===============
Turns a raw search string into query terms and ranks the documents
of an index generation by summed BM25 score across fields.
"""
import logging
import re
from typing import Dict, Hashable, List, Optional
import numpy as np
from core.text_search.documents import id_sort_key
from core.text_search.inverted_index import InvertedIndex
from core.text_search.scorer import BM25Scorer
from core.text_search.tokenizer import deduplicate_tokens, tokenize

logger = logging.getLogger(__name__)

# Trailing "starts-with" markers, eg. "beat*" or "beat *"
_WILDCARD = re.compile(r"\s*\*+(?=\s|$)")

def parse_query(raw_query) -> List[str]:
    """
    Parse a search string into unique query terms.

    Wildcard markers are stripped and not expanded; matching is
    exact on normalized terms.
    """
    if not isinstance(raw_query, str):
        return []
    return deduplicate_tokens(tokenize(_WILDCARD.sub(" ", raw_query)))

class QueryProcessor:
    """Ranks documents of an InvertedIndex for a search string."""

    def __init__(self, scorer: Optional[BM25Scorer] = None):
        self.scorer = scorer or BM25Scorer()

    def score_documents(self, raw_query, index: Optional[InvertedIndex]) -> Dict[Hashable, float]:
        """Summed score per document matching at least one query term."""
        if index is None or index.document_count == 0:
            return {}

        terms = parse_query(raw_query)
        if not terms:
            logger.debug(f"Query {raw_query!r} has no searchable terms")
            return {}

        total = index.document_count
        scores = np.zeros(total, dtype=np.float64)
        matched = np.zeros(total, dtype=bool)

        for term in terms:
            df = index.document_frequency(term)
            if df == 0:
                continue
            for field in index.fields:
                postings = index.field_postings(term, field)
                if postings is None:
                    continue
                contributions = self.scorer.score(
                    postings.frequencies,
                    index.field_lengths(field)[postings.doc_ordinals],
                    total,
                    df,
                    index.average_field_length(field)
                )
                # Ordinals are unique within one postings list
                scores[postings.doc_ordinals] += contributions * self.scorer.field_weight(field)
                matched[postings.doc_ordinals] = True

        return {index.doc_ids[i]: float(scores[i]) for i in np.flatnonzero(matched)}

    def search(self, raw_query, index: Optional[InvertedIndex]) -> List[Hashable]:
        """
        Search an index generation.

        Args:
            raw_query: Search string as typed by the user
            index: Index generation to read, or None when none is built yet

        Returns:
            Matching document ids, best score first; equal scores are
            ordered by ascending document id. Empty for empty queries,
            missing indexes and queries without matches.
        """
        scores = self.score_documents(raw_query, index)
        return sorted(scores, key=lambda doc_id: (-scores[doc_id], id_sort_key(doc_id)))
