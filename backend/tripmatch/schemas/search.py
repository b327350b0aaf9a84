from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationInfo, field_validator

from tripmatch.data.inventory import VALID_IDS

MAX_MATCHES = 5
MAX_REASON_LENGTH = 200


class SearchRequest(BaseModel):
    query: StrictStr


class Match(BaseModel):
    id: int
    reason: str = Field(min_length=1, max_length=MAX_REASON_LENGTH)


class SearchResponse(BaseModel):
    matches: list[Match] = Field(default_factory=list, max_length=MAX_MATCHES)
    hint: str | None = None

    def to_body(self) -> dict:
        """JSON body for the client; ``hint`` is omitted unless set."""
        return self.model_dump(exclude_none=True)


class LLMMatch(BaseModel):
    id: StrictInt
    reason: StrictStr = Field(min_length=1, max_length=MAX_REASON_LENGTH)

    @field_validator("id")
    @classmethod
    def id_must_exist(cls, value: int, info: ValidationInfo) -> int:
        # Pass context={"valid_ids": ...} to validate against another inventory
        valid_ids = (info.context or {}).get("valid_ids", VALID_IDS)
        if value not in valid_ids:
            raise ValueError("ID does not exist in the inventory")
        return value


class LLMSearchReply(BaseModel):
    """Shape the LLM must reply with."""

    matches: list[LLMMatch] = Field(max_length=MAX_MATCHES)
