"""Hints for empty results — tells the user why nothing matched."""

from tripmatch.data.inventory import Inventory, inventory as default_inventory
from tripmatch.services.budget_parser import Budget

# Substring groups that no single experience covers together
CONFLICTING_VIBES: tuple[tuple[frozenset[str], frozenset[str]], ...] = (
    (frozenset({"beach", "surf", "coast", "ocean"}), frozenset({"cold", "mountain", "snow", "highland"})),
    (frozenset({"safari", "wildlife", "animal"}), frozenset({"ancient", "ruins", "heritage", "temple"})),
    (frozenset({"party", "nightlife", "young"}), frozenset({"quiet", "peaceful", "secluded"})),
)

CONFLICT_HINT = (
    "Your request combines things that don't overlap in our collection. "
    "Try focusing on one vibe or activity."
)


def _experiences(count: int) -> str:
    return "experience" if count == 1 else "experiences"


def _ceiling_hint(ceiling: int, inventory: Inventory) -> str:
    in_budget = sum(1 for item in inventory if item.price <= ceiling)
    if in_budget == 0:
        return (
            f"No experiences fit a ${ceiling} budget. "
            f"Our most affordable option starts at ${inventory.cheapest_price}. "
            "Try increasing your budget."
        )
    return (
        f"We have {in_budget} {_experiences(in_budget)} within ${ceiling}, "
        "but none matched your interests. Try broadening what you're looking for."
    )


def _floor_hint(floor: int, inventory: Inventory) -> str:
    at_or_above = sum(1 for item in inventory if item.price >= floor)
    if at_or_above == 0:
        return (
            f"No experiences are priced at ${floor} or more. "
            f"Our most premium option is ${inventory.highest_price}. "
            "Try lowering your budget."
        )
    return (
        f"We have {at_or_above} {_experiences(at_or_above)} at ${floor} or more, "
        "but none matched your interests. Try broadening what you're looking for."
    )


def has_conflicting_vibes(query: str) -> bool:
    text = query.lower()
    for left, right in CONFLICTING_VIBES:
        if any(word in text for word in left) and any(word in text for word in right):
            return True
    return False


def build_hint(query: str, budget: Budget, inventory: Inventory = default_inventory) -> str | None:
    """Pick one explanation for an empty result, or None if no rule applies."""
    if len(inventory) == 0:
        return None
    if budget.ceiling is not None:
        return _ceiling_hint(budget.ceiling, inventory)
    if budget.floor is not None:
        return _floor_hint(budget.floor, inventory)
    if has_conflicting_vibes(query):
        return CONFLICT_HINT
    return None
