from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GrantDTO(BaseModel):
    """Grant listing as delivered by the data-access layer (camelCase or snake_case)."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: Optional[str] = None

    title: Optional[str] = None
    funder: Optional[str] = None
    description: Optional[str] = None

    amount: Optional[str] = None                                  # display text, e.g. "$50,000 - $250,000"
    amount_min: Optional[float] = Field(default=None, alias="amountMin")
    amount_max: Optional[float] = Field(default=None, alias="amountMax")

    type: Optional[str] = None
    category: Optional[str] = None                                # sbir | sttr | small_business | workforce | energy | ...
    eligibility: Optional[str] = None
    requirements: Optional[str] = None

    state: Optional[str] = None                                   # two-letter code, "ALL" = nationwide
    region: Optional[str] = None                                  # Northeast | Southeast | Midwest | Southwest | West
    tags: Optional[str] = None                                    # JSON-encoded list of strings
    deadline: Optional[str] = None                                # ISO date

    @field_validator("id", "amount", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _encode_tags(cls, v: Any):
        if isinstance(v, (list, tuple)):
            return json.dumps([str(t) for t in v], ensure_ascii=False)
        return v

    @field_validator("deadline", mode="before")
    @classmethod
    def _deadline_to_iso(cls, v: Any):
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return v
