"""
Penalty Rules

Compiles a configured PenaltyRule into a closed set of calculation modes and
evaluates it for a single breached metric.

DESIGN RULES:
- Pure functions, no side effects
- Never throws during evaluation (unusable rules resolve to Uncosted)
- Formula text is matched once, at compile time
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from schemas.vendor import METRICS, PenaltyRule, TierBand, VendorConfig


# Substrings recognised in the free-text ``calc`` descriptor
OVER_THRESHOLD_TOKEN = "over_threshold"
BREACH_COUNT_TOKEN = "breach_count"


class PenaltyRuleError(ValueError):
    """Raised by strict configuration loading for an unusable rule."""


class UncostedReason(str, Enum):
    COMPLIANT = "compliant"
    NO_RULE = "no_rule"
    BELOW_TIERS = "below_tiers"
    EMPTY_TIERS = "empty_tiers"
    MISSING_FIELDS = "missing_fields"
    UNRECOGNIZED_FORMULA = "unrecognized_formula"
    ZERO_COST = "zero_cost"


# --- Compiled calculation modes ---

@dataclass(frozen=True)
class OverThreshold:
    """``max(0, value - threshold) * unit_cost``"""
    unit_cost: float


@dataclass(frozen=True)
class PerBreachCount:
    """``breach_count * unit_cost``"""
    unit_cost: float


@dataclass(frozen=True)
class Tiered:
    """Flat fee of the band the value falls into."""
    bands: Tuple[TierBand, ...]


@dataclass(frozen=True)
class Unrecognized:
    reason: UncostedReason
    calc: str = ""


CompiledRule = Union[OverThreshold, PerBreachCount, Tiered, Unrecognized]


# --- Per-metric outcome ---

@dataclass(frozen=True)
class Costed:
    amount: float

    @property
    def cost(self) -> float:
        return self.amount


@dataclass(frozen=True)
class Uncosted:
    reason: UncostedReason

    @property
    def cost(self) -> float:
        return 0.0


MetricOutcome = Union[Costed, Uncosted]


def compile_rule(rule: PenaltyRule) -> CompiledRule:
    """
    Select the calculation mode for a rule.

    Tiered takes precedence over a formula when both are present.
    """
    if rule.tiered is not None:
        if not rule.tiered:
            return Unrecognized(reason=UncostedReason.EMPTY_TIERS)
        if not all(band.is_complete for band in rule.tiered):
            return Unrecognized(reason=UncostedReason.MISSING_FIELDS)
        return Tiered(bands=tuple(rule.tiered))

    if rule.calc is None or rule.unit_cost is None:
        return Unrecognized(reason=UncostedReason.MISSING_FIELDS, calc=rule.calc or "")

    if OVER_THRESHOLD_TOKEN in rule.calc:
        return OverThreshold(unit_cost=rule.unit_cost)
    if BREACH_COUNT_TOKEN in rule.calc:
        return PerBreachCount(unit_cost=rule.unit_cost)

    return Unrecognized(reason=UncostedReason.UNRECOGNIZED_FORMULA, calc=rule.calc)


def is_usable(compiled: CompiledRule) -> bool:
    return not isinstance(compiled, Unrecognized)


def compile_rules(config: VendorConfig) -> Dict[str, CompiledRule]:
    """Compile every rule of a vendor by metric name, skipping null rules and unknown metrics."""
    known = {metric.value for metric in METRICS}
    return {
        name: compile_rule(rule)
        for name, rule in config.penalty_rules.items()
        if rule is not None and name in known
    }


def compiled_rules_for(config: VendorConfig) -> Dict[str, CompiledRule]:
    """
    Compiled rules attached to a vendor config.

    Configs from the loader carry them already; any other config is
    compiled on first use and the result attached.
    """
    compiled = config.compiled_rules
    if compiled is None:
        compiled = compile_rules(config)
        config.attach_compiled_rules(compiled)
    return compiled


def _outcome(amount: float) -> MetricOutcome:
    if amount == 0:
        return Uncosted(reason=UncostedReason.ZERO_COST)
    return Costed(amount=amount)


def _tier_cost(bands: Tuple[TierBand, ...], value: float) -> MetricOutcome:
    for band in bands:
        if band.min <= value < band.max:
            return _outcome(band.unit_cost)

    # Open-ended ceiling
    last = bands[-1]
    if value >= last.max:
        return _outcome(last.unit_cost)

    return Uncosted(reason=UncostedReason.BELOW_TIERS)


def evaluate_rule(
    compiled: CompiledRule,
    value: float,
    threshold: float,
    breach_count: int,
) -> MetricOutcome:
    """
    Compute the cost of one breached metric.

    Args:
        compiled: Output of compile_rule
        value: Current measured value
        threshold: Vendor threshold for the metric
        breach_count: Historical breach events recorded for the metric

    Returns:
        Costed for a non-zero amount, Uncosted otherwise
    """
    if isinstance(compiled, Tiered):
        return _tier_cost(compiled.bands, value)

    if isinstance(compiled, OverThreshold):
        return _outcome(max(0, value - threshold) * compiled.unit_cost)

    if isinstance(compiled, PerBreachCount):
        return _outcome(breach_count * compiled.unit_cost)

    return Uncosted(reason=compiled.reason)
