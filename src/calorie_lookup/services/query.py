"""Query normalization for provider searches."""

import re

# Applied in order; each rewrite is a fixed point of itself.
_QUERY_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bdumpsticks\b"), "drumsticks"),
    (re.compile(r"\bskin ?on\b"), "skin-on"),
    (re.compile(r"\bskin ?off\b"), "skinless"),
    (re.compile(r"\bchicken legs?\b"), "chicken drumsticks"),
)


def normalize_query(text: str) -> str:
    """Lower-case a query and rewrite known typos and synonyms."""
    normalized = text.lower()
    for pattern, replacement in _QUERY_RULES:
        normalized = pattern.sub(replacement, normalized)
    return normalized
