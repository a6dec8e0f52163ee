"""
Text Search Package
"""
from .tokenizer import normalize_token, tokenize, iter_terms
from .documents import Document, DecodeError, decode_tracks, project_tracks
from .inverted_index import InvertedIndex, Postings
from .scorer import BM25Scorer
from .query_processor import QueryProcessor, parse_query
from .index_manager import IndexManager, IndexState
from .search_worker import SearchWorker, PERFORM_SEARCH, UPDATE_SEARCH_INDEX

__all__ = [
    'normalize_token',
    'tokenize',
    'iter_terms',
    'Document',
    'DecodeError',
    'decode_tracks',
    'project_tracks',
    'InvertedIndex',
    'Postings',
    'BM25Scorer',
    'QueryProcessor',
    'parse_query',
    'IndexManager',
    'IndexState',
    'SearchWorker',
    'PERFORM_SEARCH',
    'UPDATE_SEARCH_INDEX'
]
