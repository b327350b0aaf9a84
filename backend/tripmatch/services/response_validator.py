"""Validation gate for raw LLM output.

The LLM reply is untrusted text. It goes through exactly one parse-and-validate
step here and comes out either as a list of ``Match`` or as a
``MalformedLLMResponseError`` with reason "non-JSON" or "schema".
"""

import json
import logging

from pydantic import ValidationError

from tripmatch.data.inventory import Inventory, inventory as default_inventory
from tripmatch.exceptions import MalformedLLMResponseError
from tripmatch.schemas.search import LLMSearchReply, Match

logger = logging.getLogger(__name__)


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```) if present."""
    raw = raw.strip()
    if raw.startswith("```"):
        lines = raw.split("\n")
        lines = [l for l in lines if not l.strip().startswith("```")]
        raw = "\n".join(lines).strip()
    return raw


def validate_llm_reply(raw: str, inventory: Inventory = default_inventory) -> list[Match]:
    """Parse and validate an LLM reply into matches.

    Raises:
        MalformedLLMResponseError: reason "non-JSON" when the text does not
            parse, "schema" when it parses but breaks the match-list shape
            (including any id outside the inventory).
    """
    text = strip_code_fences(raw)
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"LLM returned non-JSON: {e}\nRaw: {raw[:500]}")
        raise MalformedLLMResponseError("non-JSON") from e

    try:
        reply = LLMSearchReply.model_validate(payload, context={"valid_ids": inventory.ids})
    except ValidationError as e:
        logger.warning(f"LLM reply failed schema validation: {e.errors()}\nRaw: {raw[:500]}")
        raise MalformedLLMResponseError("schema") from e

    # Second id check, independent of how the schema layer treats its validators
    return [
        Match(id=m.id, reason=m.reason)
        for m in reply.matches
        if m.id in inventory
    ]
