from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dto.grant_dto import GrantDTO


class MatchBreakdownDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    location: int = Field(ge=0, le=100)
    org_type: int = Field(ge=0, le=100, alias="orgType")
    category: int = Field(ge=0, le=100)
    amount: int = Field(ge=0, le=100)
    keywords: int = Field(ge=0, le=100)


class MatchResultDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    grant_id: Optional[str] = Field(default=None, alias="grantId")
    score: int = Field(ge=0, le=100)
    breakdown: MatchBreakdownDTO
    reasons: List[str] = Field(min_length=1)


class MatchSummaryDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_grants: int = Field(alias="totalGrants")
    average_score: int = Field(alias="averageScore")
    high_matches: int = Field(alias="highMatches")        # score >= 80
    good_matches: int = Field(alias="goodMatches")        # 60 <= score < 80
    matched_grants: int = Field(alias="matchedGrants")    # score >= 50
    potential_funding: str = Field(alias="potentialFunding")


@dataclass(frozen=True)
class RankedGrant:
    grant: GrantDTO
    result: MatchResultDTO

    @property
    def score(self) -> int:
        return self.result.score
