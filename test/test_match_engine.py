import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from dto.grant_dto import GrantDTO
from dto.match_result_dto import MatchBreakdownDTO
from dto.organization_dto import OrganizationDTO
from services.matching.match_engine import (
    calculate_match_score,
    generate_match_reasons,
    weighted_score,
)


def make_scenario():
    org = OrganizationDTO(
        id="org-1",
        type="startup",
        state="CA",
        funding_seeking="250k",
        mission="AI-powered logistics platform",
    )
    grant = GrantDTO(
        id="g-ai",
        state="CA",
        amount_min=100_000,
        amount_max=500_000,
        category="small_business",
        eligibility="small business, California-based",
        title="AI Logistics Innovation Grant",
    )
    return org, grant


def make_breakdown(location=50, org_type=50, category=40, amount=50, keywords=40) -> MatchBreakdownDTO:
    return MatchBreakdownDTO(
        location=location,
        org_type=org_type,
        category=category,
        amount=amount,
        keywords=keywords,
    )


def test_startup_logistics_scenario():
    org, grant = make_scenario()
    result = calculate_match_score(org, grant)

    assert result.grant_id == "g-ai"
    assert result.breakdown.location == 100
    assert result.breakdown.org_type == 65
    assert result.breakdown.category == 85
    assert result.breakdown.amount == 100
    assert result.breakdown.keywords == 52
    assert result.score == 79
    assert result.reasons == [
        "Located in CA - matches your state",
        "Aligns with your industry and mission",
        "Grant amount matches your funding needs",
    ]


def test_empty_records_score_neutral_with_fallback_reason():
    result = calculate_match_score(OrganizationDTO(), GrantDTO(id="g-0"))
    assert result.breakdown.model_dump() == {
        "location": 50,
        "org_type": 50,
        "category": 40,
        "amount": 50,
        "keywords": 40,
    }
    assert result.score == 46
    assert result.reasons == ["Potential opportunity - review eligibility"]


def test_accepts_camel_case_mappings():
    org = {"type": "startup", "fundingSeeking": "250k", "state": "ca", "unknownField": 1}
    grant = {"id": 7, "state": "CA", "amountMin": 100000, "amountMax": 500000}
    result = calculate_match_score(org, grant)
    assert result.grant_id == "7"
    assert result.breakdown.location == 100
    assert result.breakdown.amount == 100


def test_output_serializes_to_camel_case():
    org, grant = make_scenario()
    payload = calculate_match_score(org, grant).model_dump(by_alias=True)
    assert payload["grantId"] == "g-ai"
    assert set(payload["breakdown"]) == {"location", "orgType", "category", "amount", "keywords"}


def test_scoring_is_deterministic():
    org, grant = make_scenario()
    first = calculate_match_score(org, grant)
    second = calculate_match_score(org, grant)
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_scores_stay_in_bounds_and_reasons_non_empty():
    orgs = [
        OrganizationDTO(),
        OrganizationDTO(type="nonprofit", legal_structure="501c3", state="NY", funding_seeking="$5B"),
        OrganizationDTO(type="research", mission="research innovation science study", funding_seeking="."),
        OrganizationDTO(type="startup", legal_structure="llc", state="tx", funding_seeking="10"),
    ]
    grants = [
        GrantDTO(),
        GrantDTO(state="ALL", amount_max=1, category="sbir", tags="not-json"),
        GrantDTO(state="PA", region="Northeast", eligibility="For-profit only", amount_min=10, amount_max=20),
        GrantDTO(state="TX", description="research innovation science study", tags='["research"]',
                 amount_min=1_000_000, amount_max=2_000_000, category="energy"),
    ]
    for org in orgs:
        for grant in grants:
            result = calculate_match_score(org, grant)
            assert 0 <= result.score <= 100
            for value in result.breakdown.model_dump().values():
                assert 0 <= value <= 100
            assert result.reasons


def test_nationwide_grant_reason():
    result = calculate_match_score(OrganizationDTO(state="TX"), GrantDTO(state="ALL"))
    assert result.breakdown.location == 85
    assert result.reasons[0] == "National grant - available in all states"


def test_nonprofit_for_profit_only_override():
    org = OrganizationDTO(type="nonprofit", legal_structure="501c3")
    grant = GrantDTO(eligibility="Charitable foundation nonprofit community programs. For-profit only.")
    assert calculate_match_score(org, grant).breakdown.org_type == 10


def test_reasons_follow_fixed_order():
    org = OrganizationDTO(type="startup")
    grant = GrantDTO(state="WA")
    breakdown = make_breakdown(location=100, org_type=80, category=70, amount=100, keywords=70)
    assert generate_match_reasons(org, grant, breakdown) == [
        "Located in WA - matches your state",
        "Strong fit for startup",
        "Aligns with your industry and mission",
        "Grant amount matches your funding needs",
        "Strong keyword match with your profile",
    ]


def test_reasons_partial_amount_and_unknown_type():
    breakdown = make_breakdown(org_type=70, amount=63)
    reasons = generate_match_reasons(OrganizationDTO(), GrantDTO(), breakdown)
    assert reasons == [
        "Strong fit for your organization type",
        "Grant amount partially matches your needs",
    ]


def test_reason_thresholds_are_inclusive_below_and_exclusive_above():
    breakdown = make_breakdown(location=79, org_type=69, category=69, amount=59, keywords=69)
    assert generate_match_reasons(OrganizationDTO(), GrantDTO(state="CA"), breakdown) == [
        "Potential opportunity - review eligibility",
    ]


def test_weighted_score_rounds_half_up():
    # 100*.2 + 50*.25 + 40*.2 + 50*.15 + 40*.2 = 56.0
    assert weighted_score(make_breakdown(location=100)) == 56
    assert weighted_score(make_breakdown(location=100, org_type=100, category=100, amount=100, keywords=100)) == 100
    assert weighted_score(make_breakdown(location=0, org_type=0, category=0, amount=0, keywords=0)) == 0
    # 20 + 12.5 + 0 + 0 + 0 = 32.5 -> 33
    assert weighted_score(make_breakdown(location=100, org_type=50, category=0, amount=0, keywords=0)) == 33
