from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrganizationDTO(BaseModel):
    """Organization profile as delivered by the data-access layer (camelCase or snake_case)."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: Optional[str] = None
    name: Optional[str] = None

    type: Optional[str] = None                                   # startup | small_business | nonprofit | research
    legal_structure: Optional[str] = Field(default=None, alias="legalStructure")   # 501c3 | llc | corp | sole_proprietor

    state: Optional[str] = None                                  # two-letter code
    city: Optional[str] = None

    mission: Optional[str] = None
    vision: Optional[str] = None
    problem_statement: Optional[str] = Field(default=None, alias="problemStatement")
    solution: Optional[str] = None
    target_market: Optional[str] = Field(default=None, alias="targetMarket")

    team_size: Optional[int] = Field(default=None, alias="teamSize")
    annual_revenue: Optional[str] = Field(default=None, alias="annualRevenue")
    funding_seeking: Optional[str] = Field(default=None, alias="fundingSeeking")   # "500k", "$2M", ...

    @field_validator("id", "funding_seeking", "annual_revenue", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v
