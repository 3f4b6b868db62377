from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from dto.grant_dto import GrantDTO
from dto.organization_dto import OrganizationDTO
from logging_setup import setup_logging
from mappers.match_to_payload import top_matches_payload
from services.matching.grant_ranker import GrantRanker, summarize_matches
from services.matching.match_errors import MatchInputError

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise MatchInputError(str(path), "file not found") from exc
    except json.JSONDecodeError as exc:
        raise MatchInputError(str(path), "invalid JSON", {"line": exc.lineno, "col": exc.colno}) from exc


def load_organization(path: Path) -> OrganizationDTO:
    raw = _read_json(path)
    if isinstance(raw, dict) and isinstance(raw.get("organization"), dict):
        raw = raw["organization"]
    if not isinstance(raw, dict):
        raise MatchInputError(str(path), "expected a JSON object describing one organization")
    try:
        return OrganizationDTO.model_validate(raw)
    except ValidationError as exc:
        raise MatchInputError(str(path), "invalid organization record", {"errors": exc.errors()}) from exc


def load_grants(path: Path) -> List[GrantDTO]:
    raw = _read_json(path)
    if isinstance(raw, dict):
        raw = raw.get("grants")
    if not isinstance(raw, list):
        raise MatchInputError(str(path), "expected a JSON list of grants (or {\"grants\": [...]})")

    grants: List[GrantDTO] = []
    for i, item in enumerate(raw):
        try:
            grants.append(GrantDTO.model_validate(item))
        except ValidationError as exc:
            raise MatchInputError(str(path), f"invalid grant record at index {i}", {"errors": exc.errors()}) from exc
    return grants


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Score grants against an organization profile.")
    ap.add_argument("--org", type=Path, required=True, help="Organization profile JSON file.")
    ap.add_argument("--grants", type=Path, required=True, help="Grant list JSON file.")
    ap.add_argument("--limit", type=int, default=None, help="How many top matches to print.")
    ap.add_argument("--summary", action="store_true", help="Print aggregate match statistics instead.")
    ap.add_argument("--workers", type=int, default=None, help="Thread pool size for large batches.")
    ap.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run.")
    ap.add_argument("--no-log-file", action="store_true", help="Log to the console only.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("matching", level=args.log_level, to_file=not args.no_log_file)

    try:
        org = load_organization(args.org)
        grants = load_grants(args.grants)
    except MatchInputError as exc:
        logger.error("Cannot score matches: %s", exc)
        return 1

    ranker = GrantRanker(max_workers=args.workers)
    if args.summary:
        summary = summarize_matches(ranker.score_all(org, grants))
        out = summary.model_dump(by_alias=True)
    else:
        out = top_matches_payload(org, grants, args.limit, ranker=ranker)

    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
