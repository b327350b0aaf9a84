"""Builds the system prompt sent with every LLM-backed search."""

import json

from tripmatch.data.inventory import Inventory, inventory as default_inventory
from tripmatch.schemas.search import MAX_MATCHES, MAX_REASON_LENGTH
from tripmatch.services.budget_parser import Budget
from tripmatch.services.prompts import load_prompt

_TRAVEL_MATCHER = load_prompt("travel_matcher.md")


def budget_constraint(budget: Budget) -> str | None:
    if budget.ceiling is not None:
        return f"HARD CONSTRAINT: the user's budget is at most ${budget.ceiling}. Exclude every item priced above ${budget.ceiling}."
    if budget.floor is not None:
        return f"HARD CONSTRAINT: the user wants a premium experience. Exclude every item priced below ${budget.floor}."
    return None


def build_system_prompt(budget: Budget, inventory: Inventory = default_inventory) -> str:
    prompt = _TRAVEL_MATCHER.format(
        inventory=json.dumps(inventory.to_json_list(), indent=2),
        max_matches=MAX_MATCHES,
        max_reason_length=MAX_REASON_LENGTH,
    )
    constraint = budget_constraint(budget)
    if constraint:
        prompt = f"{prompt.rstrip()}\n\n{constraint}\n"
    return prompt
