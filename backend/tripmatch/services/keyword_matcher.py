"""Keyword shortcut — answers single-keyword queries straight from the inventory.

A query like "beaches" doesn't need the LLM: when the whole normalized query is
one of the keywords below, every item carrying one of the mapped tags is
returned, ranked by how many mapped tags it carries, then by inventory order.
"""

import logging

from tripmatch.data.inventory import TAGS, Inventory, inventory as default_inventory
from tripmatch.schemas.search import MAX_MATCHES, Match

logger = logging.getLogger(__name__)

# Every tag answers for itself; these are extra spellings and combinations.
KEYWORD_TAGS: dict[str, tuple[str, ...]] = {
    **{tag: (tag,) for tag in sorted(TAGS)},
    "beaches": ("beach",),
    "surf": ("surfing",),
    "hike": ("hiking",),
    "hikes": ("hiking",),
    "trekking": ("hiking",),
    "historical": ("history",),
    "heritage": ("history", "culture"),
    "cultural": ("culture",),
    "wildlife": ("animals",),
    "safari": ("animals", "adventure"),
    "views": ("view",),
    "scenic": ("view", "nature"),
    "mountains": ("cold", "hiking"),
    "outdoors": ("nature", "hiking", "adventure"),
    "history and culture": ("history", "culture"),
    "beach and surf": ("beach", "surfing"),
}


def _format_reason(tags: list[str]) -> str:
    quoted = ", ".join(f"'{tag}'" for tag in tags)
    noun = "tag" if len(tags) == 1 else "tags"
    return f"Matched {quoted} {noun}."


def try_match(normalized_query: str, inventory: Inventory = default_inventory) -> list[Match] | None:
    """Matches for a keyword query, or None if the query is not a known keyword."""
    wanted = KEYWORD_TAGS.get(normalized_query)
    if wanted is None:
        return None

    scored: list[tuple[int, int, Match]] = []
    for position, item in enumerate(inventory):
        hits = [tag for tag in wanted if tag in item.tags]
        if hits:
            scored.append((len(hits), position, Match(id=item.id, reason=_format_reason(hits))))

    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    matches = [match for _, _, match in scored[:MAX_MATCHES]]
    logger.info(f"Keyword shortcut {normalized_query!r}: {len(matches)} matches")
    return matches
