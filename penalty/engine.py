"""
Penalty Evaluation Engine

Translates a circuit snapshot, its vendor configuration and its breach
history into monetary cost and compliance verdicts.

DESIGN RULES:
- Pure functions; the only state is the compiled-rule map attached to a
  vendor config, written once
- Never throws on numeric input (negative values and NaN pass through)
- Only the live snapshot decides whether a metric is in breach;
  history only scales breach-count formulas
"""

import logging
import math
from collections import Counter
from typing import Dict, Iterable, List, Sequence

from penalty.rules import (
    MetricOutcome,
    Uncosted,
    UncostedReason,
    compiled_rules_for,
    evaluate_rule,
)
from schemas.circuit import (
    BreachEvent,
    CircuitRow,
    CostBreakdown,
    CostEvent,
    MetricStatus,
)
from schemas.vendor import METRICS, Metric, MetricCosts, VendorConfig


logger = logging.getLogger(__name__)

DEFAULT_NEAR_THRESHOLD_MARGIN = 0.1


def count_events_by_metric(events: Iterable[BreachEvent]) -> Dict[Metric, int]:
    counts = Counter(event.metric for event in events)
    return {metric: counts.get(metric, 0) for metric in METRICS}


def evaluate_metric(
    metric: Metric,
    circuit: CircuitRow,
    vendor: VendorConfig,
    breach_count: int = 0,
) -> MetricOutcome:
    """
    Evaluate a single metric of a circuit.

    A value at or below threshold is never costed, whatever the history.
    A breach with no configured rule is Uncosted(no_rule): zero money, but
    still non-compliant for calculate_compliance_percent.
    """
    value = circuit.metric_value(metric)
    threshold = vendor.kpi_thresholds.for_metric(metric)

    if not value > threshold:
        return Uncosted(reason=UncostedReason.COMPLIANT)

    compiled = compiled_rules_for(vendor).get(metric.value)
    if compiled is None:
        return Uncosted(reason=UncostedReason.NO_RULE)

    return evaluate_rule(compiled, value, threshold, breach_count)


def compute_costs_for_circuit(
    circuit: CircuitRow,
    vendor: VendorConfig,
    events: Sequence[BreachEvent] = (),
) -> CostBreakdown:
    """
    Compute the cost breakdown of one circuit.

    Args:
        circuit: Current snapshot
        vendor: Resolved vendor configuration (lookup is the caller's job)
        events: Historical breach events for this circuit

    Returns:
        A new CostBreakdown; cost events are stamped with the snapshot's
        ``last_updated`` and only emitted for strictly positive costs.
    """
    breach_counts = count_events_by_metric(events)
    costs: Dict[Metric, float] = {}
    cost_events: List[CostEvent] = []

    for metric in METRICS:
        outcome = evaluate_metric(metric, circuit, vendor, breach_counts[metric])

        if isinstance(outcome, Uncosted) and outcome.reason is not UncostedReason.COMPLIANT:
            logger.debug(
                f"Uncosted breach: circuit={circuit.circuit_id} vendor={vendor.vendor_id} "
                f"metric={metric.value} reason={outcome.reason.value}"
            )

        costs[metric] = outcome.cost
        if outcome.cost > 0:
            cost_events.append(CostEvent(
                timestamp=circuit.last_updated,
                metric=metric,
                value=circuit.metric_value(metric),
                cost=outcome.cost,
            ))

    by_metric = MetricCosts(
        latency=costs[Metric.LATENCY],
        jitter=costs[Metric.JITTER],
        frame_loss=costs[Metric.FRAME_LOSS],
    )
    total = by_metric.latency + by_metric.jitter + by_metric.frame_loss

    return CostBreakdown(total=total, by_metric=by_metric, events=cost_events)


def get_metric_status(
    value: float,
    threshold: float,
    near_threshold_margin: float = DEFAULT_NEAR_THRESHOLD_MARGIN,
) -> MetricStatus:
    """
    Classify a reading for display.

    green below threshold, amber from threshold up to the warning margin,
    red beyond. Independent of cost: a value equal to threshold is amber
    here yet never charged.
    """
    if value < threshold:
        return MetricStatus.GREEN
    if value < threshold * (1 + near_threshold_margin):
        return MetricStatus.AMBER
    return MetricStatus.RED


def is_circuit_compliant(circuit: CircuitRow, vendor: VendorConfig) -> bool:
    thresholds = vendor.kpi_thresholds
    return (
        circuit.latency_ms <= thresholds.latency_ms
        and circuit.jitter_ms <= thresholds.jitter_ms
        and circuit.frame_loss_pct <= thresholds.frame_loss_pct
    )


def count_metric_breaches(circuit: CircuitRow, vendor: VendorConfig) -> int:
    """Number of metrics (0-3) currently above threshold."""
    return sum(
        1 for metric in METRICS
        if circuit.metric_value(metric) > vendor.kpi_thresholds.for_metric(metric)
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_compliance_percent(
    circuits: Sequence[CircuitRow],
    vendor: VendorConfig,
) -> int:
    """
    Share of circuits with no metric above threshold, 0-100.

    An empty fleet is 100% compliant. Rounding is half-up (12.5 -> 13).
    """
    if not circuits:
        return 100

    compliant = sum(1 for circuit in circuits if is_circuit_compliant(circuit, vendor))
    return round_half_up(compliant / len(circuits) * 100)
