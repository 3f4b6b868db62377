from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence, Tuple

from config import MATCH_MAX_WORKERS, MATCH_PARALLEL_THRESHOLD, MATCH_TOP_LIMIT
from dto.grant_dto import GrantDTO
from dto.match_result_dto import MatchResultDTO, MatchSummaryDTO, RankedGrant
from services.matching.match_engine import (
    GrantLike,
    OrganizationLike,
    as_grant,
    as_organization,
    calculate_match_score,
)
from utils.amount_utils import format_potential_funding, round_half_up

logger = logging.getLogger(__name__)

HIGH_MATCH_SCORE = 80
GOOD_MATCH_SCORE = 60
MATCHED_SCORE = 50


class GrantRanker:
    """Scores a batch of grants for one organization and ranks them."""

    def __init__(
        self,
        *,
        max_workers: Optional[int] = None,
        parallel_threshold: Optional[int] = None,
    ):
        self.max_workers = MATCH_MAX_WORKERS if max_workers is None else max_workers
        self.parallel_threshold = (
            MATCH_PARALLEL_THRESHOLD if parallel_threshold is None else parallel_threshold
        )

    def _use_pool(self, n: int) -> bool:
        return self.max_workers > 1 and n >= max(1, self.parallel_threshold)

    def score_all(
        self,
        org: OrganizationLike,
        grants: Sequence[GrantLike],
    ) -> List[RankedGrant]:
        """Score every grant; output keeps input order."""
        org = as_organization(org)
        grant_dtos = [as_grant(g) for g in grants]

        if not self._use_pool(len(grant_dtos)):
            return [RankedGrant(grant=g, result=calculate_match_score(org, g)) for g in grant_dtos]

        def _score_item(item: Tuple[int, GrantDTO]) -> Tuple[int, RankedGrant]:
            idx, grant = item
            return idx, RankedGrant(grant=grant, result=calculate_match_score(org, grant))

        logger.info(
            "Scoring %d grants on %d workers (org=%s)",
            len(grant_dtos), self.max_workers, org.id,
        )
        indexed: List[Tuple[int, RankedGrant]] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as ex:
            futures = [ex.submit(_score_item, item) for item in enumerate(grant_dtos)]
            for fut in as_completed(futures):
                indexed.append(fut.result())
        # completion order is arbitrary; restore input order
        indexed.sort(key=lambda x: x[0])
        return [ranked for _, ranked in indexed]

    def top_matches(
        self,
        org: OrganizationLike,
        grants: Sequence[GrantLike],
        limit: Optional[int] = None,
    ) -> List[RankedGrant]:
        return self.rank(self.score_all(org, grants), limit)

    @staticmethod
    def rank(scored: Sequence[RankedGrant], limit: Optional[int] = None) -> List[RankedGrant]:
        """Sort already-scored grants best first and cut to ``limit``."""
        limit = MATCH_TOP_LIMIT if limit is None else limit
        ranked = list(scored)
        # list.sort is stable: equal scores keep input order
        ranked.sort(key=lambda r: r.result.score, reverse=True)
        top = ranked[:max(0, limit)]
        if top:
            logger.info(
                "Ranked %d grants, returning %d (best score: %d)",
                len(ranked), len(top), top[0].result.score,
            )
        else:
            logger.info("Ranked %d grants, nothing to return", len(ranked))
        return top


def match_grants_to_organization(
    org: OrganizationLike,
    grants: Sequence[GrantLike],
) -> Dict[Optional[str], MatchResultDTO]:
    """Map grant id -> match result, in input order."""
    return {r.grant.id: r.result for r in GrantRanker().score_all(org, grants)}


def get_top_matches(
    org: OrganizationLike,
    grants: Sequence[GrantLike],
    limit: Optional[int] = None,
) -> List[RankedGrant]:
    """Best-scoring grants first, ties in input order, at most ``limit`` (default 10)."""
    return GrantRanker().top_matches(org, grants, limit)


def summarize_matches(ranked: Sequence[RankedGrant]) -> MatchSummaryDTO:
    scores = [r.result.score for r in ranked]
    total = len(scores)
    average = round_half_up(sum(scores) / total) if total else 0

    potential = 0.0
    for r in ranked:
        if r.result.score >= GOOD_MATCH_SCORE and r.grant.amount_max:
            potential += r.grant.amount_max

    return MatchSummaryDTO(
        total_grants=total,
        average_score=average,
        high_matches=sum(1 for s in scores if s >= HIGH_MATCH_SCORE),
        good_matches=sum(1 for s in scores if GOOD_MATCH_SCORE <= s < HIGH_MATCH_SCORE),
        matched_grants=sum(1 for s in scores if s >= MATCHED_SCORE),
        potential_funding=format_potential_funding(potential),
    )


def summarize_organization_matches(
    org: OrganizationLike,
    grants: Sequence[GrantLike],
) -> MatchSummaryDTO:
    return summarize_matches(GrantRanker().score_all(org, grants))


