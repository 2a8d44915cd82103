import pytest

from agency.auto_advance import get_auto_advance_stage


@pytest.mark.parametrize(
    "stage,action,expected",
    [
        ("NEW", "offer:123", "OFFER"),
        ("HEAT", "ppv:abc", "OFFER"),
        ("OFFER", "ppv:abc", "CLOSE"),
        ("OFFER", "intent:llevar_a_mensual", "CLOSE"),
        ("NEW", "template:soft", "WARM_UP"),
        ("NEW", " WELCOME ", "WARM_UP"),
        ("NEW", "draft:42", "WARM_UP"),
        ("NEW", "template:medium", "HEAT"),
        ("WARM_UP", "template:intense", "HEAT"),
        ("HEAT", "reengage:cold", "RECOVERY"),
        ("AFTERCARE", "autopilot:renovacion", "RECOVERY"),
    ],
)
def test_matching_rules_advance(stage, action, expected):
    assert get_auto_advance_stage(stage, action) == expected


@pytest.mark.parametrize(
    "stage,action",
    [
        ("BOUNDARY", "reengage:x"),
        ("CLOSE", "offer:1"),
        ("HEAT", "template:soft"),
        ("NEW", "unknown"),
        ("NEW", ""),
        ("NEW", None),
    ],
)
def test_no_rule_keeps_stage(stage, action):
    assert get_auto_advance_stage(stage, action) is None
