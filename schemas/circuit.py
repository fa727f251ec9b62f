"""
Circuit Schemas

Telemetry snapshots, breach history and engine output.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.vendor import Metric, MetricCosts


class CircuitStatus(str, Enum):
    ACTIVE = "active"
    DEGRADED = "degraded"
    DOWN = "down"


class MetricStatus(str, Enum):
    """Visual severity of a single KPI reading."""
    GREEN = "green"
    AMBER = "amber"
    RED = "red"


class CircuitRow(BaseModel):
    """
    One monitored circuit's current snapshot.

    ``breach_count``, ``status`` and ``cost_usd`` are stored display values.
    Costs must be derived fresh by the engine, never read from here.
    """
    model_config = ConfigDict(populate_by_name=True)

    circuit_id: str = Field(..., alias="circuitId")
    vendor_id: str = Field(..., alias="vendorId")
    sites: List[str] = Field(default_factory=list)
    bandwidth_mbps: int = Field(default=0, alias="bandwidthMbps")
    status: CircuitStatus = CircuitStatus.ACTIVE
    region: Optional[str] = None
    latency_ms: float
    jitter_ms: float
    frame_loss_pct: float = Field(..., alias="frameLoss_pct")
    breach_count: int = Field(default=0, alias="breachCount")
    cost_usd: float = Field(default=0.0, alias="costUSD")
    last_updated: str = Field(..., alias="lastUpdated")

    def metric_value(self, metric: Metric) -> float:
        if metric is Metric.LATENCY:
            return self.latency_ms
        if metric is Metric.JITTER:
            return self.jitter_ms
        return self.frame_loss_pct


class BreachEvent(BaseModel):
    """A historical incident; counted per metric, never re-costed."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    circuit_id: str = Field(default="", alias="circuitId")
    vendor_id: str = Field(default="", alias="vendorId")
    metric: Metric
    threshold: float
    measured_value: float = Field(..., alias="measuredValue")
    cost_usd: float = Field(default=0.0, alias="costUSD")
    timestamp: str


class CostEvent(BaseModel):
    timestamp: str
    metric: Metric
    value: float
    cost: float


class CostBreakdown(BaseModel):
    """
    Engine output for one circuit evaluation.

    ``total`` is always ``latency + jitter + frame_loss`` of ``by_metric``.
    """
    model_config = ConfigDict(populate_by_name=True)

    total: float = 0.0
    by_metric: MetricCosts = Field(default_factory=MetricCosts, alias="byMetric")
    events: List[CostEvent] = Field(default_factory=list)


class CircuitFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    time_window: Optional[str] = Field(default=None, alias="timeWindow")
    region: Optional[str] = None
    bandwidth_tier: Optional[str] = Field(default=None, alias="bandwidthTier")
    status: Optional[CircuitStatus] = None
    search_term: Optional[str] = Field(default=None, alias="searchTerm")


class ActiveTestStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ActiveTestMeasurements(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    latency_ms: float
    jitter_ms: float
    frame_loss_pct: float = Field(..., alias="frameLoss_pct")
    timestamp: str


class ActiveTestResult(BaseModel):
    """Outcome of an on-demand synthetic test (Y.1731 style)."""
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId")
    circuit_id: str = Field(..., alias="circuitId")
    status: ActiveTestStatus
    results: Optional[ActiveTestMeasurements] = None
    started_at: str = Field(..., alias="startedAt")
    completed_at: Optional[str] = Field(default=None, alias="completedAt")
