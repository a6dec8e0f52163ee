# core/text_search/tokenizer.py
"""
Track Tokenizer
===============
Deterministic tokenization for track text search.
Used by inverted_index.py to index album, artist and title fields,
and by query_processor.py to turn search strings into query terms,
so both sides normalize identically.
"""
import re
import unidecode
from typing import Iterator, List

_ACRONYM_DOTS = re.compile(r'(?<=\w)\.(?=\w)')
_DECORATIVE = re.compile(r"[!@#%?*\^']")
_NON_WORD = re.compile(r"[\W_]+", flags=re.UNICODE)
_TERM = re.compile(r"\S+")

def normalize_token(text) -> str:
    """
    Normalize text for tokenization with ASCII folding, acronym handling, etc.

    This function prepares text for tokenization by:
    - Converting to lowercase
    - Folding Unicode to ASCII (eg. "Café" → "cafe")
    - Replacing $ with s (eg. "Ke$ha" → "kesha")
    - Removing dots from acronyms (eg. "R.E.M." → "rem")
    - Stripping decorative symbols and apostrophes (eg. "P!nk" → "pnk")
    - Replacing all other punctuation, and underscores, with spaces
    - Collapsing multiple spaces into single spaces

    Args:
        text: Input text; None yields an empty string, other
              non-string values are converted with str()

    Returns:
        Normalized text string ready for splitting into terms
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    if not text:
        return ""

    text = text.lower()
    text = unidecode.unidecode(text)
    # unidecode may produce uppercase letters for some scripts
    text = text.lower()
    text = text.replace('$', 's')
    text = _ACRONYM_DOTS.sub('', text)
    text = _DECORATIVE.sub('', text)
    text = _NON_WORD.sub(' ', text)
    text = re.sub(r"\s+", " ", text)

    return text.strip()

def iter_terms(text) -> Iterator[str]:
    """Lazily yield normalized terms from a field's raw text."""
    for match in _TERM.finditer(normalize_token(text)):
        yield match.group(0)

def tokenize(text) -> List[str]:
    """Tokenize text into a list of normalized unigram terms."""
    return list(iter_terms(text))

def deduplicate_tokens(tokens: List[str]) -> List[str]:
    """Remove duplicate tokens while preserving order (faster than set conversion)."""
    seen = set()
    unique = []
    for token in tokens:
        if token not in seen:
            seen.add(token)
            unique.append(token)
    return unique
