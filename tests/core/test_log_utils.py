from datetime import datetime, timezone

import structlog

from agency.types import DraftRequest, OfferContext
from core import log_utils


def test_now_iso_is_valid_utc_iso_datetime():
    parsed = datetime.fromisoformat(log_utils.now_iso())
    assert parsed.tzinfo == timezone.utc


def test_draft_log_context_collects_request_shape():
    request = DraftRequest(
        stage="HEAT",
        objective="SELL_EXTRA",
        intensity="INTENSE",
        fan_name="Ana",
        last_fan_msg="hola",
        language="es",
        offer=OfferContext(title="vídeo"),
        variant=2,
        mode="short",
        avoid_text="  ",
    )

    context = log_utils.draft_log_context(request)

    assert context["stage"] == "HEAT"
    assert context["mode"] == "short"
    assert context["layout"] == "lines"
    assert context["requested_variant"] == 2
    assert context["has_offer"] is True
    assert context["has_avoid_text"] is False
    assert context["last_msg_len"] == 4
    assert "Ana" not in context.values()
    assert "hola" not in context.values()


def test_setup_logging_accepts_level_override():
    log_utils.setup_logging("debug")
    log_utils.setup_logging()
    structlog.reset_defaults()
