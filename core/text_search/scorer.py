# core/text_search/scorer.py
"""BM25 relevance scoring for track fields."""
import math
from typing import Optional, Union
import numpy as np
from core.utilities.config_manager import config_manager

ArrayLike = Union[int, float, np.ndarray]

class BM25Scorer:
    """BM25 scoring with length normalization against each field's average length."""

    # Every field counts the same for the track catalog
    FIELD_WEIGHTS = {
        'album': 1.0,
        'artist': 1.0,
        'title': 1.0
    }

    def __init__(self, k1: Optional[float] = None, b: Optional[float] = None):
        self.k1 = config_manager.get_k1() if k1 is None else float(k1)
        self.b = config_manager.get_b() if b is None else float(b)
        if self.k1 < 0:
            raise ValueError("k1 must be non-negative")
        if not 0.0 <= self.b <= 1.0:
            raise ValueError("b must be between 0.0 and 1.0")

    def field_weight(self, field_name: str) -> float:
        return self.FIELD_WEIGHTS.get(field_name, 1.0)

    def idf(self, total_documents: int, document_frequency: int) -> float:
        """Non-negative Robertson/Spark Jones IDF: ln(1 + (N - df + 0.5) / (df + 0.5))"""
        if total_documents <= 0 or document_frequency <= 0:
            return 0.0
        return math.log(1.0 + (total_documents - document_frequency + 0.5) / (document_frequency + 0.5))

    def score(self, term_frequency: ArrayLike, field_length: ArrayLike, total_documents: int,
              document_frequency: int, average_field_length: float) -> ArrayLike:
        """
        BM25 contribution of one term in one field.

        Args:
            term_frequency: Occurrences of the term in the field (scalar or array)
            field_length: Terms in the field (scalar or array matching term_frequency)
            total_documents: Documents in the index
            document_frequency: Documents containing the term
            average_field_length: Mean length of this field across the index

        Returns:
            Score >= 0 as a float, or an array when array input is given.
            Absent terms and empty corpora score exactly 0.
        """
        tf = np.asarray(term_frequency, dtype=np.float64)
        dl = np.asarray(field_length, dtype=np.float64)

        if total_documents <= 0 or document_frequency <= 0 or average_field_length <= 0:
            scores = np.zeros(np.broadcast(tf, dl).shape)
        else:
            idf = self.idf(total_documents, document_frequency)
            norm = self.k1 * (1.0 - self.b + self.b * dl / average_field_length)
            with np.errstate(divide='ignore', invalid='ignore'):
                scores = idf * tf * (self.k1 + 1.0) / (tf + norm)
            scores = np.where(tf > 0, scores, 0.0)

        if scores.ndim == 0:
            return float(scores)
        return scores
