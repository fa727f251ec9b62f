"""
Vendor Schemas

SLA counterparty configuration as supplied by the configuration store.

Wire names are camelCase (``vendorId``, ``kpiThresholds``...); attributes are
snake_case. Both are accepted on input, aliases are used on output.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class Metric(str, Enum):
    """A monitored KPI."""
    LATENCY = "latency"
    JITTER = "jitter"
    FRAME_LOSS = "frameLoss"


# Evaluation order for every per-metric loop
METRICS: Tuple[Metric, ...] = (Metric.LATENCY, Metric.JITTER, Metric.FRAME_LOSS)


class RuleType(str, Enum):
    DECLARATIVE = "declarative"
    FUNCTIONAL = "functional"


class KPIThresholds(BaseModel):
    """
    Maximum acceptable value per KPI.

    Inclusive: a value equal to its threshold is compliant.
    """
    model_config = ConfigDict(populate_by_name=True)

    latency_ms: float
    jitter_ms: float
    frame_loss_pct: float = Field(..., alias="frameLoss_pct")

    def for_metric(self, metric: Metric) -> float:
        if metric is Metric.LATENCY:
            return self.latency_ms
        if metric is Metric.JITTER:
            return self.jitter_ms
        return self.frame_loss_pct


class TierBand(BaseModel):
    """
    Half-open band ``[min, max)`` charged a flat ``unit_cost``.

    Fields may be absent; a rule with an incomplete band compiles to
    missing_fields and is never costed.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    unit_cost: Optional[float] = Field(default=None, alias="unitCost")

    @property
    def is_complete(self) -> bool:
        return self.min is not None and self.max is not None and self.unit_cost is not None


class PenaltyRule(BaseModel):
    """
    One metric's cost-calculation policy.

    Either ``tiered`` (band lookup) or ``calc`` + ``unit_cost`` (linear
    formula). ``type`` and ``plugin_url`` are carried for display only;
    plugin rules are never executed.
    """
    model_config = ConfigDict(populate_by_name=True)

    type: RuleType = RuleType.DECLARATIVE
    unit_cost: Optional[float] = Field(default=None, alias="unitCost")
    calc: Optional[str] = None
    tiered: Optional[List[TierBand]] = None
    plugin_url: Optional[str] = Field(default=None, alias="pluginUrl")


class UIHints(BaseModel):
    color: Optional[str] = None
    accent: Optional[str] = None
    badge: Optional[str] = None


class VendorConfig(BaseModel):
    """
    Configuration for one SLA counterparty.

    ``penalty_rules`` is keyed by metric name (``latency``, ``jitter``,
    ``frameLoss``); a missing key or a null rule means breaches of that
    metric are never costed.

    Compiled rules are attached by the loader (see
    ``penalty.rules.compiled_rules_for``) and are not part of the wire shape.
    """
    model_config = ConfigDict(populate_by_name=True)

    _compiled_rules: Optional[Dict[str, Any]] = PrivateAttr(default=None)

    vendor_id: str = Field(..., min_length=1, alias="vendorId")
    name: str
    currency: str = "USD"
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    kpi_thresholds: KPIThresholds = Field(..., alias="kpiThresholds")
    penalty_rules: Dict[str, Optional[PenaltyRule]] = Field(default_factory=dict, alias="penaltyRules")
    ui_hints: Optional[UIHints] = Field(default=None, alias="uiHints")
    display_order: int = Field(default=0, alias="displayOrder")
    is_active: bool = Field(default=True, alias="isActive")

    def rule_for(self, metric: Metric) -> Optional[PenaltyRule]:
        return self.penalty_rules.get(metric.value)

    @property
    def compiled_rules(self) -> Optional[Dict[str, Any]]:
        return self._compiled_rules

    def attach_compiled_rules(self, compiled: Dict[str, Any]) -> None:
        self._compiled_rules = compiled


class MetricCounts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    latency: int = 0
    jitter: int = 0
    frame_loss: int = Field(default=0, alias="frameLoss")


class MetricCosts(BaseModel):
    """Cost per metric; every metric is always present."""
    model_config = ConfigDict(populate_by_name=True)

    latency: float = 0.0
    jitter: float = 0.0
    frame_loss: float = Field(default=0.0, alias="frameLoss")

    def for_metric(self, metric: Metric) -> float:
        if metric is Metric.LATENCY:
            return self.latency
        if metric is Metric.JITTER:
            return self.jitter
        return self.frame_loss


class VendorKPIs(BaseModel):
    """Fleet-level roll-up for one vendor."""
    model_config = ConfigDict(populate_by_name=True)

    vendor_id: str = Field(..., alias="vendorId")
    compliance_percent: int = Field(..., ge=0, le=100, alias="compliancePercent")
    total_breaches: int = Field(default=0, alias="totalBreaches")
    total_cost_usd: float = Field(default=0.0, alias="totalCostUSD")
    breaches_by_metric: MetricCounts = Field(default_factory=MetricCounts, alias="breachesByMetric")
    cost_by_metric: MetricCosts = Field(default_factory=MetricCosts, alias="costByMetric")
