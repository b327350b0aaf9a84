"""Travel inventory — the fixed set of experiences the search may recommend.

Both the LLM prompt and the server-side filters read from this module, so a new
experience only needs to be added here.
"""

from dataclasses import asdict, dataclass

# Closed tag vocabulary
TAGS: frozenset[str] = frozenset({
    "cold",
    "nature",
    "hiking",
    "history",
    "culture",
    "walking",
    "animals",
    "adventure",
    "photography",
    "beach",
    "surfing",
    "young-vibe",
    "climbing",
    "view",
})


@dataclass(frozen=True)
class TravelItem:
    id: int
    title: str
    location: str
    price: int  # USD per person
    tags: tuple[str, ...]

    def __post_init__(self):
        if self.id <= 0:
            raise ValueError(f"TravelItem id must be positive, got {self.id}")
        if self.price < 0:
            raise ValueError(f"TravelItem {self.id} has negative price {self.price}")
        unknown = set(self.tags) - TAGS
        if unknown:
            raise ValueError(f"TravelItem {self.id} has unknown tags: {sorted(unknown)}")

    def to_dict(self) -> dict:
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data


TRAVEL_ITEMS: tuple[TravelItem, ...] = (
    TravelItem(1, "High-Altitude Tea Trails", "Nuwara Eliya", 120, ("cold", "nature", "hiking")),
    TravelItem(2, "Coastal Heritage Wander", "Galle Fort", 45, ("history", "culture", "walking")),
    TravelItem(3, "Wild Safari Expedition", "Yala", 250, ("animals", "adventure", "photography")),
    TravelItem(4, "Surf & Chill Retreat", "Arugam Bay", 80, ("beach", "surfing", "young-vibe")),
    TravelItem(5, "Ancient City Exploration", "Sigiriya", 110, ("history", "climbing", "view")),
)


class Inventory:
    """Read-only view over a set of travel items, with id lookups built once."""

    def __init__(self, items: tuple[TravelItem, ...] | list[TravelItem]):
        self.items: tuple[TravelItem, ...] = tuple(items)
        self.by_id: dict[int, TravelItem] = {item.id: item for item in self.items}
        if len(self.by_id) != len(self.items):
            raise ValueError("Duplicate TravelItem ids in inventory")
        self.ids: frozenset[int] = frozenset(self.by_id)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.ids

    def get(self, item_id: int) -> TravelItem | None:
        return self.by_id.get(item_id)

    @property
    def cheapest_price(self) -> int | None:
        return min((item.price for item in self.items), default=None)

    @property
    def highest_price(self) -> int | None:
        return max((item.price for item in self.items), default=None)

    def to_json_list(self) -> list[dict]:
        return [item.to_dict() for item in self.items]


inventory = Inventory(TRAVEL_ITEMS)

# Shorthand over the default inventory
VALID_IDS: frozenset[int] = inventory.ids
