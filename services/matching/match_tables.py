"""
Static reference tables for grant match scoring.

Built once at import and exposed read-only; scoring code only looks them up.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# -----------------------------------------------------------
#  Sub-score weights (sum to 1.0)
# -----------------------------------------------------------

SCORE_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "location": 0.20,
    "org_type": 0.25,
    "category": 0.20,
    "amount": 0.15,
    "keywords": 0.20,
})

# -----------------------------------------------------------
#  Industry / sector vocabularies
# -----------------------------------------------------------

INDUSTRY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "technology": ("tech", "software", "ai", "machine learning", "saas", "cloud", "digital", "app",
                   "platform", "automation", "data", "cyber", "blockchain", "iot", "startup"),
    "healthcare": ("health", "medical", "biotech", "pharma", "clinical", "patient", "hospital",
                   "wellness", "therapeutic", "drug", "diagnosis", "treatment", "care"),
    "cleantech": ("clean", "energy", "solar", "wind", "renewable", "sustainable", "green",
                  "environmental", "climate", "carbon", "electric", "battery", "efficiency"),
    "education": ("education", "learning", "training", "school", "student", "teacher", "curriculum",
                  "edtech", "academic", "university", "skill"),
    "manufacturing": ("manufacturing", "production", "industrial", "factory", "supply chain",
                      "logistics", "assembly", "materials", "fabrication"),
    "agriculture": ("agriculture", "farm", "food", "crop", "livestock", "agtech", "sustainable",
                    "organic", "harvest", "soil"),
    "finance": ("finance", "fintech", "banking", "payment", "investment", "insurance", "lending",
                "credit", "financial"),
    "social": ("social", "community", "nonprofit", "impact", "underserved", "equity", "diversity",
               "inclusion", "justice", "poverty"),
    "research": ("research", "innovation", "r&d", "science", "experiment", "study", "discovery",
                 "laboratory", "academic"),
})

# -----------------------------------------------------------
#  Eligibility vocabularies
# -----------------------------------------------------------

ORG_TYPE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "startup": ("startup", "small business", "early stage", "entrepreneur", "emerging", "innovation",
                "seed", "series a"),
    "small_business": ("small business", "sme", "entrepreneur", "business owner",
                       "established business", "sbir", "sttr"),
    "nonprofit": ("nonprofit", "non-profit", "501c3", "charitable", "foundation", "ngo",
                  "social enterprise", "community"),
    "research": ("research", "academic", "university", "institution", "r&d", "laboratory",
                 "scientific", "researcher"),
})

LEGAL_STRUCTURE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "501c3": ("nonprofit", "501(c)(3)", "tax-exempt", "charitable", "foundation"),
    "llc": ("llc", "small business", "for-profit", "company"),
    "corp": ("corporation", "c-corp", "s-corp", "incorporated", "company"),
    "sole_proprietor": ("sole proprietor", "individual", "self-employed", "freelance"),
})

FOR_PROFIT_ONLY = "for-profit only"
NONPROFIT_ONLY = "nonprofit only"

# -----------------------------------------------------------
#  Geography
# -----------------------------------------------------------

NATIONWIDE_STATE = "ALL"

REGION_STATES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Northeast": ("CT", "ME", "MA", "NH", "RI", "VT", "NJ", "NY", "PA"),
    "Southeast": ("AL", "AR", "FL", "GA", "KY", "LA", "MS", "NC", "SC", "TN", "VA", "WV"),
    "Midwest": ("IL", "IN", "IA", "KS", "MI", "MN", "MO", "NE", "ND", "OH", "SD", "WI"),
    "Southwest": ("AZ", "NM", "OK", "TX"),
    "West": ("AK", "CA", "CO", "HI", "ID", "MT", "NV", "OR", "UT", "WA", "WY"),
})

_STATE_TO_REGION: Mapping[str, str] = MappingProxyType({
    state: region for region, states in REGION_STATES.items() for state in states
})


def region_for_state(state: Optional[str]) -> Optional[str]:
    """Region bucket for a two-letter state code, or None if it has none."""
    if not state:
        return None
    return _STATE_TO_REGION.get(state.upper())
