"""Budget extraction — pulls a price ceiling or floor out of a free-text query.

A fixed, ordered rule table; the first rule that matches wins:

    ceiling  "under $100", "below 80", "up to $150", "max 200"   -> that number
    ceiling  "$100 or less", "$90 max"                           -> that number
    ceiling  cheap / budget / affordable / low-cost / inexpensive -> 60,
             only when the query contains no number at all
    floor    expensive / luxury / premium / high-end / splurge     -> 200

A floor is only looked for when no ceiling was found, so at most one of the two
is ever set. The same result feeds the LLM prompt and the post-LLM price filter.
"""

import re
from dataclasses import dataclass

CHEAP_CEILING = 60
LUXURY_FLOOR = 200

_CEILING_BEFORE_NUMBER = re.compile(
    r"\b(?:under|below|less than|within|up to|max(?:imum)?)\s*\$?\s*(\d+)",
    re.IGNORECASE,
)
_CEILING_AFTER_NUMBER = re.compile(
    r"\$\s*(\d+)\s*(?:or less|or under|or below|max(?:imum)?)\b",
    re.IGNORECASE,
)
_ANY_AMOUNT = re.compile(r"\$?\s*\d+")
_CHEAP_WORDS = re.compile(
    r"\b(?:cheap|budget|affordable|low-cost|inexpensive)\b",
    re.IGNORECASE,
)
_LUXURY_WORDS = re.compile(
    r"\b(?:expensive|luxury|luxurious|premium|high-end|splurge)\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Budget:
    ceiling: int | None = None
    floor: int | None = None

    def allows(self, price: int) -> bool:
        if self.ceiling is not None and price > self.ceiling:
            return False
        if self.floor is not None and price < self.floor:
            return False
        return True

    @property
    def is_set(self) -> bool:
        return self.ceiling is not None or self.floor is not None


def extract_ceiling(query: str) -> int | None:
    for pattern in (_CEILING_BEFORE_NUMBER, _CEILING_AFTER_NUMBER):
        match = pattern.search(query)
        if match:
            return int(match.group(1))
    # Qualitative words only count when the query names no amount at all
    if _CHEAP_WORDS.search(query) and not _ANY_AMOUNT.search(query):
        return CHEAP_CEILING
    return None


def extract_floor(query: str) -> int | None:
    if extract_ceiling(query) is not None:
        return None
    if _LUXURY_WORDS.search(query):
        return LUXURY_FLOOR
    return None


def extract_budget(query: str) -> Budget:
    ceiling = extract_ceiling(query)
    if ceiling is not None:
        return Budget(ceiling=ceiling)
    return Budget(floor=extract_floor(query))
