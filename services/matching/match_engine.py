"""
Deterministic organization <-> grant match scoring.

calculate_match_score() combines five independent 0-100 sub-scores
(location, organization type, category, amount, keywords) with fixed
weights and explains the result with a short list of reasons.

Every sub-score tolerates missing fields and falls back to a neutral value;
nothing here touches storage, the network, or shared mutable state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Union

from dto.grant_dto import GrantDTO
from dto.match_result_dto import MatchBreakdownDTO, MatchResultDTO
from dto.organization_dto import OrganizationDTO
from services.matching.match_tables import (
    FOR_PROFIT_ONLY,
    INDUSTRY_KEYWORDS,
    LEGAL_STRUCTURE_KEYWORDS,
    NATIONWIDE_STATE,
    NONPROFIT_ONLY,
    ORG_TYPE_KEYWORDS,
    SCORE_WEIGHTS,
    region_for_state,
)
from utils.amount_utils import parse_funding_amount, round_half_up
from utils.keyword_utils import (
    contains_any,
    count_contained,
    decode_tags,
    extract_keywords,
    jaccard_similarity,
    join_text,
    lower_blob,
)

logger = logging.getLogger(__name__)

OrganizationLike = Union[OrganizationDTO, Mapping[str, Any]]
GrantLike = Union[GrantDTO, Mapping[str, Any]]

NEUTRAL_LOCATION = 50
NEUTRAL_AMOUNT = 50
NEUTRAL_KEYWORDS = 40
BASE_ORG_TYPE = 50
BASE_CATEGORY = 40
EXCLUDED_ORG_TYPE = 10


def as_organization(org: OrganizationLike) -> OrganizationDTO:
    if isinstance(org, OrganizationDTO):
        return org
    return OrganizationDTO.model_validate(org)


def as_grant(grant: GrantLike) -> GrantDTO:
    if isinstance(grant, GrantDTO):
        return grant
    return GrantDTO.model_validate(grant)


def _clamp(score: float) -> int:
    return max(0, min(100, int(score)))


# -----------------------------------------------------------
#  Sub-scores
# -----------------------------------------------------------

def location_score(org: OrganizationDTO, grant: GrantDTO) -> int:
    if not grant.state:
        return NEUTRAL_LOCATION
    if grant.state == NATIONWIDE_STATE:
        return 85
    if org.state and org.state.upper() == grant.state.upper():
        return 100
    if org.state and grant.region:
        org_region = region_for_state(org.state)
        if org_region and org_region.lower() == grant.region.lower():
            return 60
    return 20


def org_type_score(org: OrganizationDTO, grant: GrantDTO) -> int:
    grant_text = lower_blob([grant.eligibility, grant.requirements, grant.description, grant.category])
    score = BASE_ORG_TYPE

    if org.type:
        hits = count_contained(grant_text, ORG_TYPE_KEYWORDS.get(org.type.lower(), ()))
        score += min(30, hits * 15)

    if org.legal_structure:
        hits = count_contained(grant_text, LEGAL_STRUCTURE_KEYWORDS.get(org.legal_structure.lower(), ()))
        score += min(20, hits * 10)

    # Explicit exclusions beat any keyword evidence.
    if org.type == "nonprofit" and FOR_PROFIT_ONLY in grant_text:
        return EXCLUDED_ORG_TYPE
    if org.type != "nonprofit" and NONPROFIT_ONLY in grant_text:
        return EXCLUDED_ORG_TYPE

    return min(100, score)


def _org_narrative(org: OrganizationDTO) -> str:
    return lower_blob([org.mission, org.problem_statement, org.solution, org.target_market])


def category_score(org: OrganizationDTO, grant: GrantDTO) -> int:
    grant_text = lower_blob([grant.title, grant.description, grant.category, grant.tags])
    org_text = _org_narrative(org)
    score = BASE_CATEGORY

    for industry, terms in INDUSTRY_KEYWORDS.items():
        if contains_any(org_text, terms) and contains_any(grant_text, terms):
            logger.debug("Industry overlap on %s for grant=%s", industry, grant.id)
            score += 15

    category = (grant.category or "").lower()
    if category in ("sbir", "sttr") and (
        org.type == "research" or contains_any(org_text, ("research", "innovation"))
    ):
        score += 20
    elif category == "small_business" and org.type in ("startup", "small_business"):
        score += 15
    elif category == "workforce" and "training" in org_text:
        score += 15
    elif category == "energy" and contains_any(org_text, ("energy", "clean", "sustainable")):
        score += 20

    # Industry bonuses may push the sum past 100; cap once here.
    return min(100, score)


def amount_score(org: OrganizationDTO, grant: GrantDTO) -> int:
    if not org.funding_seeking or not grant.amount_max:
        return NEUTRAL_AMOUNT

    seeking = parse_funding_amount(org.funding_seeking)
    if seeking == 0:
        return NEUTRAL_AMOUNT

    grant_min = grant.amount_min or 0
    grant_max = grant.amount_max

    if grant_min <= seeking <= grant_max:
        return 100
    if seeking < grant_min:
        return max(30, round_half_up(seeking / grant_min * 70))
    if seeking > grant_max:
        return max(20, round_half_up(grant_max / seeking * 80))
    return NEUTRAL_AMOUNT


def keyword_score(org: OrganizationDTO, grant: GrantDTO) -> int:
    org_words = extract_keywords(join_text([
        org.mission, org.problem_statement, org.solution, org.target_market, org.name,
    ]))
    grant_words = extract_keywords(join_text([
        grant.title, grant.description, grant.eligibility, grant.requirements, decode_tags(grant.tags),
    ]))

    if not org_words or not grant_words:
        return NEUTRAL_KEYWORDS

    similarity = jaccard_similarity(org_words, grant_words)
    # x200 favours partial overlap; +30 floor for any non-empty comparison
    return min(100, round_half_up(similarity * 200) + 30)


# -----------------------------------------------------------
#  Reasons
# -----------------------------------------------------------

def generate_match_reasons(
    org: OrganizationDTO,
    grant: GrantDTO,
    breakdown: MatchBreakdownDTO,
) -> List[str]:
    reasons: List[str] = []

    if breakdown.location >= 80:
        if grant.state == NATIONWIDE_STATE:
            reasons.append("National grant - available in all states")
        else:
            reasons.append(f"Located in {grant.state} - matches your state")

    if breakdown.org_type >= 70:
        reasons.append(f"Strong fit for {org.type or 'your organization type'}")

    if breakdown.category >= 70:
        reasons.append("Aligns with your industry and mission")

    if breakdown.amount >= 80:
        reasons.append("Grant amount matches your funding needs")
    elif breakdown.amount >= 60:
        reasons.append("Grant amount partially matches your needs")

    if breakdown.keywords >= 70:
        reasons.append("Strong keyword match with your profile")

    if not reasons:
        reasons.append("Potential opportunity - review eligibility")

    return reasons


# -----------------------------------------------------------
#  Entry point
# -----------------------------------------------------------

def weighted_score(breakdown: MatchBreakdownDTO) -> int:
    parts: Dict[str, int] = {
        "location": breakdown.location,
        "org_type": breakdown.org_type,
        "category": breakdown.category,
        "amount": breakdown.amount,
        "keywords": breakdown.keywords,
    }
    total = 0.0
    for name, value in parts.items():
        total += value * SCORE_WEIGHTS[name]
    return _clamp(round_half_up(total))


def calculate_match_score(org: OrganizationLike, grant: GrantLike) -> MatchResultDTO:
    """Score one grant for one organization."""
    org = as_organization(org)
    grant = as_grant(grant)

    breakdown = MatchBreakdownDTO(
        location=_clamp(location_score(org, grant)),
        org_type=_clamp(org_type_score(org, grant)),
        category=_clamp(category_score(org, grant)),
        amount=_clamp(amount_score(org, grant)),
        keywords=_clamp(keyword_score(org, grant)),
    )
    score = weighted_score(breakdown)

    logger.debug(
        "Scored grant=%s org=%s score=%d breakdown=%s",
        grant.id, org.id, score, breakdown.model_dump(),
    )

    return MatchResultDTO(
        grant_id=grant.id,
        score=score,
        breakdown=breakdown,
        reasons=generate_match_reasons(org, grant, breakdown),
    )
