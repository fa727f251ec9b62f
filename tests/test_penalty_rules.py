"""
Penalty Rule Tests

Verifies rule compilation and per-mode cost evaluation:
- Tiered lookup boundaries and open-ended ceiling
- Over-threshold and breach-count formulas
- Unusable rules resolve to Uncosted with a reason
"""

import pytest

from penalty.rules import (
    Costed,
    OverThreshold,
    PerBreachCount,
    Tiered,
    Uncosted,
    UncostedReason,
    Unrecognized,
    compile_rule,
    evaluate_rule,
    is_usable,
)
from schemas.vendor import PenaltyRule


FRAME_LOSS_TIERS = PenaltyRule.model_validate({
    "type": "declarative",
    "tiered": [
        {"min": 0.5, "max": 1.0, "unitCost": 50},
        {"min": 1.0, "max": 5.0, "unitCost": 200},
    ],
})


def test_compile_over_threshold():
    rule = PenaltyRule(unit_cost=0.5, calc="over_threshold_ms * unitCost")
    assert compile_rule(rule) == OverThreshold(unit_cost=0.5)


def test_compile_over_threshold_any_unit():
    rule = PenaltyRule(unit_cost=3, calc="over_threshold_pct * unitCost")
    assert compile_rule(rule) == OverThreshold(unit_cost=3)


def test_compile_breach_count():
    rule = PenaltyRule(unit_cost=20, calc="breach_count * unitCost")
    assert compile_rule(rule) == PerBreachCount(unit_cost=20)


def test_compile_tiered_takes_precedence_over_formula():
    rule = PenaltyRule.model_validate({
        "unitCost": 20,
        "calc": "breach_count * unitCost",
        "tiered": [{"min": 0, "max": 10, "unitCost": 5}],
    })
    compiled = compile_rule(rule)
    assert isinstance(compiled, Tiered)
    assert len(compiled.bands) == 1


@pytest.mark.parametrize(
    "rule, reason",
    [
        (PenaltyRule(calc="breach_count * unitCost"), UncostedReason.MISSING_FIELDS),
        (PenaltyRule(unit_cost=10), UncostedReason.MISSING_FIELDS),
        (PenaltyRule(unit_cost=10, calc="flat_fee"), UncostedReason.UNRECOGNIZED_FORMULA),
        (PenaltyRule(tiered=[]), UncostedReason.EMPTY_TIERS),
        (PenaltyRule.model_validate({"tiered": [{"min": 0.5, "max": 1.0}]}), UncostedReason.MISSING_FIELDS),
        (
            PenaltyRule.model_validate({"tiered": [{"min": 0.5, "max": 1.0, "unitCost": 50}, {"max": 5.0, "unitCost": 200}]}),
            UncostedReason.MISSING_FIELDS,
        ),
        (PenaltyRule(type="functional", plugin_url="https://example.com/plugin.js"), UncostedReason.MISSING_FIELDS),
    ],
)
def test_unusable_rules(rule, reason):
    compiled = compile_rule(rule)
    assert isinstance(compiled, Unrecognized)
    assert compiled.reason is reason
    assert not is_usable(compiled)

    outcome = evaluate_rule(compiled, value=999, threshold=1, breach_count=5)
    assert outcome == Uncosted(reason=reason)
    assert outcome.cost == 0.0


def test_unrecognized_formula_keeps_text():
    compiled = compile_rule(PenaltyRule(unit_cost=10, calc="flat_fee"))
    assert compiled.calc == "flat_fee"


def test_over_threshold_scales_by_excess():
    outcome = evaluate_rule(OverThreshold(unit_cost=0.5), value=120, threshold=100, breach_count=0)
    assert outcome == Costed(amount=10.0)


def test_over_threshold_one_unit_above():
    outcome = evaluate_rule(OverThreshold(unit_cost=0.5), value=101, threshold=100, breach_count=0)
    assert outcome.cost == 0.5


def test_breach_count_uses_history_count():
    outcome = evaluate_rule(PerBreachCount(unit_cost=20), value=7, threshold=5, breach_count=3)
    assert outcome.cost == 60


def test_breach_count_without_history_is_zero_cost():
    outcome = evaluate_rule(PerBreachCount(unit_cost=20), value=7, threshold=5, breach_count=0)
    assert outcome == Uncosted(reason=UncostedReason.ZERO_COST)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.5, 50),     # at first band's min
        (0.8, 50),
        (1.0, 200),    # at first band's max -> next band
        (2.5, 200),
        (5.0, 200),    # at last band's max -> ceiling
        (12.0, 200),
    ],
)
def test_tier_boundaries(value, expected):
    compiled = compile_rule(FRAME_LOSS_TIERS)
    assert evaluate_rule(compiled, value=value, threshold=0.5, breach_count=0).cost == expected


def test_value_below_every_tier_is_uncosted():
    rule = PenaltyRule.model_validate({"tiered": [{"min": 1.0, "max": 5.0, "unitCost": 200}]})
    outcome = evaluate_rule(compile_rule(rule), value=0.8, threshold=0.5, breach_count=0)
    assert outcome == Uncosted(reason=UncostedReason.BELOW_TIERS)


def test_value_in_gap_between_tiers_is_uncosted():
    rule = PenaltyRule.model_validate({
        "tiered": [
            {"min": 0.5, "max": 1.0, "unitCost": 50},
            {"min": 2.0, "max": 5.0, "unitCost": 200},
        ],
    })
    outcome = evaluate_rule(compile_rule(rule), value=1.5, threshold=0.5, breach_count=0)
    assert outcome.reason is UncostedReason.BELOW_TIERS


def test_tier_flat_fee_is_not_multiplied():
    outcome = evaluate_rule(compile_rule(FRAME_LOSS_TIERS), value=4.9, threshold=0.5, breach_count=7)
    assert outcome.cost == 200
