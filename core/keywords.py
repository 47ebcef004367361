"""
Local keyword extraction and overlap scoring.

Used for the resume/job keyword match, similar-job ranking and job
recommendations, so none of these need an LLM round trip.
"""
import re
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Set

STOPWORDS = frozenset("""
a about above across after again against all also am an and any are as at be because been
before being below between both but by can could did do does doing down during each either
etc every few for from further had has have having he her here hers him his how i if in into
is it its itself just least less let like may me might more most must my no nor not of off
on once only or other our ours out over own per same she should so some such than that the
their them then there these they this those through to too under until up upon us very via
was we well were what when where which while who whom why will with within without would
you your yours able ability across strong excellent good great work working team role
position candidate candidates job company looking including include includes required
requirements preferred plus years year experience experienced knowledge skills skill using
use new etc responsibilities responsible opportunity environment join help build ensure
""".split())

# Tokens keep +, # and . so "c++", "c#" and "node.js" survive
_TOKEN_RE = re.compile(r"[a-z0-9][a-z0-9+#.\-]*[a-z0-9+#]|[a-z0-9]")


def tokenize(text: str) -> List[str]:
    if not text:
        return []
    return [t for t in _TOKEN_RE.findall(text.lower()) if t not in STOPWORDS and not t.isdigit()]


def extract_keywords(text: str, limit: int = 30) -> List[str]:
    """Most frequent meaningful terms in `text`, most frequent first.

    Two-word phrases that occur more than once are included ahead of their
    individual words.
    """
    tokens = tokenize(text)
    if not tokens:
        return []

    counts = Counter(t for t in tokens if len(t) > 1)
    bigrams = Counter(f"{a} {b}" for a, b in zip(tokens, tokens[1:]))
    phrases = [p for p, n in bigrams.most_common() if n > 1]

    ordered: List[str] = []
    seen: Set[str] = set()
    for term in phrases + [t for t, _ in counts.most_common()]:
        if term not in seen:
            ordered.append(term)
            seen.add(term)
        if len(ordered) >= limit:
            break
    return ordered


def contains_term(text: str, term: str) -> bool:
    """Whole-word, case-insensitive containment."""
    if not text or not term:
        return False
    pattern = r"(?<![a-z0-9])" + re.escape(term.lower()) + r"(?![a-z0-9+#])"
    return re.search(pattern, text.lower()) is not None


def keyword_matches(text: str, keywords: Iterable[str]) -> Dict[str, List[str]]:
    """Split keywords into those found in `text` and those missing."""
    matched, missing = [], []
    for keyword in keywords:
        (matched if contains_term(text, keyword) else missing).append(keyword)
    return {"matched": matched, "missing": missing}


def match_score(text: str, keywords: Sequence[str]) -> int:
    """Percentage (0-100) of keywords present in `text`."""
    if not keywords:
        return 0
    found = len(keyword_matches(text, keywords)["matched"])
    return round(100 * found / len(keywords))


def term_set(*parts: Iterable[str]) -> Set[str]:
    terms: Set[str] = set()
    for part in parts:
        for item in part or []:
            terms.update(tokenize(item))
    return terms


def overlap_score(a: Set[str], b: Set[str]) -> float:
    """Jaccard overlap of two term sets, 0.0 when either is empty."""
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)
