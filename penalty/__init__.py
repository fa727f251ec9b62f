# Penalty Package
from penalty.engine import (
    calculate_compliance_percent,
    compute_costs_for_circuit,
    evaluate_metric,
    get_metric_status,
    is_circuit_compliant,
)
from penalty.rules import Costed, Uncosted, UncostedReason, compile_rule, compiled_rules_for
from penalty.summary import summarize_vendor

__all__ = [
    "calculate_compliance_percent",
    "compute_costs_for_circuit",
    "evaluate_metric",
    "get_metric_status",
    "is_circuit_compliant",
    "Costed",
    "Uncosted",
    "UncostedReason",
    "compile_rule",
    "compiled_rules_for",
    "summarize_vendor",
]
