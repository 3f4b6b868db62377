from __future__ import annotations

import json
import re
from typing import FrozenSet, Iterable, Optional

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")

STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare", "ought",
    "used", "that", "this", "these", "those", "which", "who", "whom", "whose",
    "what", "where", "when", "why", "how", "all", "each", "every", "both",
    "few", "more", "most", "other", "some", "such", "no", "nor", "not", "only",
    "own", "same", "so", "than", "too", "very", "just", "also", "now", "our",
    "your", "their", "its", "we", "you", "they", "he", "she", "it", "i", "me",
})

MIN_KEYWORD_LEN = 3


def join_text(parts: Iterable[Optional[str]]) -> str:
    """Space-join the given fields, treating None as empty."""
    return " ".join(p or "" for p in parts)


def lower_blob(parts: Iterable[Optional[str]]) -> str:
    return join_text(parts).lower()


def extract_keywords(text: str) -> FrozenSet[str]:
    """
    Normalized keyword set: lowercase, non-alphanumerics to spaces, split on
    whitespace, drop short tokens and stop words.
    """
    cleaned = _NON_ALNUM_RE.sub(" ", (text or "").lower())
    return frozenset(
        w for w in cleaned.split()
        if len(w) >= MIN_KEYWORD_LEN and w not in STOP_WORDS
    )


def jaccard_similarity(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def decode_tags(tags: Optional[str]) -> str:
    """Space-joined tags from a JSON-encoded array; anything malformed yields ''."""
    if not tags:
        return ""
    try:
        parsed = json.loads(tags)
    except (TypeError, ValueError):
        return ""
    if not isinstance(parsed, list):
        return ""
    return " ".join(_tag_text(t) for t in parsed)


def _tag_text(tag) -> str:
    # null joins as nothing; true/false/whole floats keep their JSON spelling
    if tag is None:
        return ""
    if isinstance(tag, (bool, float)):
        return json.dumps(int(tag) if isinstance(tag, float) and tag.is_integer() else tag)
    return str(tag)


def contains_any(text: str, terms: Iterable[str]) -> bool:
    return any(t in text for t in terms)


def count_contained(text: str, terms: Iterable[str]) -> int:
    return sum(1 for t in terms if t in text)
