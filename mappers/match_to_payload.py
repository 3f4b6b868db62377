from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from dto.match_result_dto import RankedGrant
from services.matching.grant_ranker import GrantRanker, summarize_matches
from services.matching.match_engine import GrantLike, OrganizationLike, as_organization

MISSION_PREVIEW_CHARS = 100


def ranked_grant_to_payload(ranked: RankedGrant) -> Dict[str, Any]:
    g = ranked.grant
    return {
        "id": g.id,
        "title": g.title,
        "funder": g.funder,
        "score": ranked.result.score,
        "reasons": list(ranked.result.reasons),
        "amount": g.amount,
        "deadline": g.deadline,
        "state": g.state,
    }


def _mission_preview(mission: Optional[str]) -> Optional[str]:
    if mission is None:
        return None
    if len(mission) > MISSION_PREVIEW_CHARS:
        return mission[:MISSION_PREVIEW_CHARS] + "..."
    return mission


def top_matches_payload(
    org: OrganizationLike,
    grants: Sequence[GrantLike],
    limit: Optional[int] = None,
    *,
    ranker: Optional[GrantRanker] = None,
) -> Dict[str, Any]:
    org = as_organization(org)
    ranker = ranker or GrantRanker()

    scored = ranker.score_all(org, grants)
    summary = summarize_matches(scored)
    top = ranker.rank(scored, limit)

    return {
        "success": True,
        "totalGrants": summary.total_grants,
        "matchedGrants": summary.matched_grants,
        "highMatches": summary.high_matches,
        "topMatches": [ranked_grant_to_payload(r) for r in top],
        "profile": {
            "name": org.name,
            "type": org.type,
            "state": org.state,
            "mission": _mission_preview(org.mission),
        },
    }
