"""Preview agency drafts and the priority inbox from the command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from agency.types import DraftRequest, DraftResult, OfferContext
from core.constants import (
    AGENCY_INTENSITIES,
    AGENCY_PLAYBOOKS,
    AGENCY_STAGES,
    DRAFT_LAYOUTS,
    DRAFT_MODES,
)
from core.log_utils import setup_logging
from services.draft_service import build_agency_draft, build_agency_draft_for_creator
from services.inbox_service import InboxItem, load_agency_inbox


def _non_negative_int(value: str) -> int:
    parsed = int(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be a non-negative integer")
    return parsed


def _upper(value: str) -> str:
    return value.strip().upper().replace("-", "_")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Agency drafting and inbox preview.")
    parser.add_argument("--log-level", default=None, help="Override AGENCY_LOG_LEVEL.")
    sub = parser.add_subparsers(dest="command", required=True)

    draft = sub.add_parser("draft", help="Build one or more drafts for a fan context.")
    draft.add_argument("--stage", type=_upper, choices=AGENCY_STAGES, default="NEW")
    draft.add_argument("--objective", type=_upper, default="CONNECT")
    draft.add_argument("--intensity", type=_upper, choices=AGENCY_INTENSITIES, default="MEDIUM")
    draft.add_argument("--playbook", type=_upper, choices=AGENCY_PLAYBOOKS, default=None)
    draft.add_argument("--fan-name", default="")
    draft.add_argument("--last-msg", default="")
    draft.add_argument("--language", default=None)
    draft.add_argument("--mode", choices=DRAFT_MODES, default="full")
    draft.add_argument(
        "--layout",
        choices=DRAFT_LAYOUTS,
        default="lines",
        help="One part per line, or a single line.",
    )
    draft.add_argument("--variant", type=_non_negative_int, default=0)
    draft.add_argument(
        "--count",
        type=_non_negative_int,
        default=1,
        help="Number of consecutive variants to print.",
    )
    draft.add_argument("--avoid-text", default=None)
    draft.add_argument("--offer-title", default=None)
    draft.add_argument("--offer-price-cents", type=_non_negative_int, default=None)
    draft.add_argument("--offer-currency", default=None)
    draft.add_argument(
        "--creator-id",
        default=None,
        help="Load this creator's stored templates from the database.",
    )

    inbox = sub.add_parser("inbox", help="Print the creator's fans ranked by priority.")
    inbox.add_argument("--creator-id", required=True)
    inbox.add_argument("--limit", type=_non_negative_int, default=20)
    return parser.parse_args(argv)


def build_request(args: argparse.Namespace, variant: int) -> DraftRequest:
    offer = None
    if args.offer_title or args.offer_price_cents is not None:
        offer = OfferContext(
            title=args.offer_title,
            price_cents=args.offer_price_cents,
            currency=args.offer_currency,
        )
    return DraftRequest(
        stage=args.stage,
        objective=args.objective,
        intensity=args.intensity,
        playbook=args.playbook,
        fan_name=args.fan_name,
        last_fan_msg=args.last_msg,
        language=args.language,
        offer=offer,
        variant=variant,
        mode=args.mode,
        layout=args.layout,
        avoid_text=args.avoid_text,
    )


async def run_draft(
    args: argparse.Namespace,
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> list[DraftResult]:
    results: list[DraftResult] = []
    for offset in range(max(1, args.count)):
        request = build_request(args, args.variant + offset)
        if args.creator_id:
            if session_maker is None:
                from db.engine import async_session as session_maker
            async with session_maker() as session:
                results.append(
                    await build_agency_draft_for_creator(session, args.creator_id, request)
                )
        else:
            results.append(build_agency_draft(request))
    return results


async def run_inbox(
    args: argparse.Namespace,
    session_maker: async_sessionmaker[AsyncSession] | None = None,
) -> list[InboxItem]:
    if session_maker is None:
        from db.engine import async_session as session_maker
    async with session_maker() as session:
        items = await load_agency_inbox(session, args.creator_id)
    return items[: args.limit] if args.limit else items


async def _main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    if args.command == "draft":
        for result in await run_draft(args):
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return 0

    for item in await run_inbox(args):
        print(json.dumps(asdict(item), ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    return asyncio.run(_main(argv))


if __name__ == "__main__":
    raise SystemExit(main())
