"""
Vendor Summary

Fleet-level roll-up of one vendor's circuits. Every cost is recomputed by
the engine from current metrics; stored ``cost_usd`` values are ignored.
"""

from typing import Dict, Mapping, Optional, Sequence

from penalty.engine import calculate_compliance_percent, compute_costs_for_circuit
from schemas.circuit import BreachEvent, CircuitRow
from schemas.vendor import METRICS, Metric, MetricCosts, MetricCounts, VendorConfig, VendorKPIs


def summarize_vendor(
    circuits: Sequence[CircuitRow],
    vendor: VendorConfig,
    events_by_circuit: Optional[Mapping[str, Sequence[BreachEvent]]] = None,
) -> VendorKPIs:
    """
    Summarize compliance, live breaches and penalty cost for a vendor.

    Args:
        circuits: The vendor's circuits (current snapshots)
        vendor: Vendor configuration
        events_by_circuit: Breach history keyed by circuit id

    Returns:
        VendorKPIs
    """
    events_by_circuit = events_by_circuit or {}
    breaches: Dict[Metric, int] = {metric: 0 for metric in METRICS}
    costs: Dict[Metric, float] = {metric: 0.0 for metric in METRICS}

    for circuit in circuits:
        for metric in METRICS:
            if circuit.metric_value(metric) > vendor.kpi_thresholds.for_metric(metric):
                breaches[metric] += 1

        breakdown = compute_costs_for_circuit(
            circuit, vendor, events_by_circuit.get(circuit.circuit_id, ())
        )
        for metric in METRICS:
            costs[metric] += breakdown.by_metric.for_metric(metric)

    cost_by_metric = MetricCosts(
        latency=costs[Metric.LATENCY],
        jitter=costs[Metric.JITTER],
        frame_loss=costs[Metric.FRAME_LOSS],
    )

    return VendorKPIs(
        vendor_id=vendor.vendor_id,
        compliance_percent=calculate_compliance_percent(circuits, vendor),
        total_breaches=sum(breaches.values()),
        total_cost_usd=cost_by_metric.latency + cost_by_metric.jitter + cost_by_metric.frame_loss,
        breaches_by_metric=MetricCounts(
            latency=breaches[Metric.LATENCY],
            jitter=breaches[Metric.JITTER],
            frame_loss=breaches[Metric.FRAME_LOSS],
        ),
        cost_by_metric=cost_by_metric,
    )
