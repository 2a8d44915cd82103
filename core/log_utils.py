"""Shared logging helpers."""

import logging
from datetime import datetime, timezone

import structlog

from core.config import env


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or env.log_level).upper(), logging.INFO),
        format="%(message)s",
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(),
    )


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """Current UTC time in ISO format."""
    return now_utc().isoformat()


def draft_log_context(request) -> dict[str, object]:
    """Build a common log context dict from a DraftRequest."""
    last_msg = request.last_fan_msg or ""
    return {
        "stage": request.stage,
        "objective": request.objective,
        "intensity": request.intensity,
        "playbook": request.playbook,
        "language": request.language,
        "mode": request.mode,
        "layout": request.layout,
        "requested_variant": request.variant,
        "has_offer": request.offer is not None,
        "has_avoid_text": bool((request.avoid_text or "").strip()),
        "last_msg_len": len(last_msg),
    }
