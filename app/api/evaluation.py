"""
Evaluation API Routes

Circuit cost evaluation and compliance for stored telemetry or literal
payloads. Contains no calculation logic of its own.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from app.api.vendors import require_vendor
from app.dependencies import get_near_threshold_margin, get_telemetry_source, get_vendor_registry
from penalty.engine import (
    calculate_compliance_percent,
    compute_costs_for_circuit,
    get_metric_status,
    is_circuit_compliant,
)
from registry.vendor_registry import VendorRegistry
from schemas.circuit import ActiveTestResult, BreachEvent, CircuitRow, CostBreakdown, MetricStatus
from schemas.vendor import VendorConfig
from telemetry.active_test import snapshot_from_test_result
from telemetry.source import TelemetrySource


router = APIRouter(tags=["evaluation"])


class MetricStatuses(BaseModel):
    """Severity band per metric."""
    model_config = ConfigDict(populate_by_name=True)

    latency: MetricStatus
    jitter: MetricStatus
    frame_loss: MetricStatus = Field(..., alias="frameLoss")


class CircuitEvaluation(BaseModel):
    """Costs, severity and compliance of one circuit snapshot."""
    model_config = ConfigDict(populate_by_name=True)

    circuit_id: str = Field(..., alias="circuitId")
    vendor_id: str = Field(..., alias="vendorId")
    as_of: str = Field(..., alias="asOf", description="Snapshot timestamp the evaluation applies to")
    costs: CostBreakdown
    status: MetricStatuses
    compliant: bool = Field(..., description="No metric above threshold, costed or not")


class EvaluateRequest(BaseModel):
    circuit: CircuitRow
    vendor: VendorConfig
    events: List[BreachEvent] = Field(default_factory=list)


class ComplianceRequest(BaseModel):
    circuits: List[CircuitRow] = Field(default_factory=list)
    vendor: VendorConfig


class ComplianceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    vendor_id: str = Field(..., alias="vendorId")
    circuit_count: int = Field(..., alias="circuitCount")
    compliance_percent: int = Field(..., ge=0, le=100, alias="compliancePercent")


def evaluate_circuit(
    circuit: CircuitRow,
    vendor: VendorConfig,
    events: List[BreachEvent],
    margin: float,
) -> CircuitEvaluation:
    thresholds = vendor.kpi_thresholds
    return CircuitEvaluation(
        circuit_id=circuit.circuit_id,
        vendor_id=vendor.vendor_id,
        as_of=circuit.last_updated,
        costs=compute_costs_for_circuit(circuit, vendor, events),
        status=MetricStatuses(
            latency=get_metric_status(circuit.latency_ms, thresholds.latency_ms, margin),
            jitter=get_metric_status(circuit.jitter_ms, thresholds.jitter_ms, margin),
            frame_loss=get_metric_status(circuit.frame_loss_pct, thresholds.frame_loss_pct, margin),
        ),
        compliant=is_circuit_compliant(circuit, vendor),
    )


def _require_circuit(circuit_id: str, telemetry: TelemetrySource) -> CircuitRow:
    circuit = telemetry.get_circuit(circuit_id)
    if circuit is None:
        raise HTTPException(status_code=404, detail=f"Circuit not found: {circuit_id}")
    return circuit


@router.get("/circuits/{circuit_id}/costs", response_model=CircuitEvaluation)
def get_circuit_costs(
    circuit_id: str,
    registry: VendorRegistry = Depends(get_vendor_registry),
    telemetry: TelemetrySource = Depends(get_telemetry_source),
    margin: float = Depends(get_near_threshold_margin),
) -> CircuitEvaluation:
    """Evaluate a stored circuit against its vendor and its breach history."""
    circuit = _require_circuit(circuit_id, telemetry)
    vendor = require_vendor(circuit.vendor_id, registry)
    events = telemetry.list_breach_events(circuit_id=circuit_id)
    return evaluate_circuit(circuit, vendor, events, margin)


@router.post("/circuits/{circuit_id}/active-test", response_model=CircuitEvaluation)
def evaluate_active_test(
    circuit_id: str,
    result: ActiveTestResult,
    registry: VendorRegistry = Depends(get_vendor_registry),
    telemetry: TelemetrySource = Depends(get_telemetry_source),
    margin: float = Depends(get_near_threshold_margin),
) -> CircuitEvaluation:
    """Evaluate a completed on-demand test as a fresh snapshot."""
    circuit = _require_circuit(circuit_id, telemetry)
    vendor = require_vendor(circuit.vendor_id, registry)

    try:
        snapshot = snapshot_from_test_result(circuit, result)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if snapshot is None:
        raise HTTPException(status_code=409, detail=f"Active test {result.job_id} is {result.status.value}")

    events = telemetry.list_breach_events(circuit_id=circuit_id)
    return evaluate_circuit(snapshot, vendor, events, margin)


@router.post("/evaluate", response_model=CircuitEvaluation)
def evaluate(
    request: EvaluateRequest,
    margin: float = Depends(get_near_threshold_margin),
) -> CircuitEvaluation:
    """Evaluate a literal circuit, vendor and history."""
    return evaluate_circuit(request.circuit, request.vendor, request.events, margin)


@router.post("/compliance", response_model=ComplianceResponse)
def compliance(request: ComplianceRequest) -> ComplianceResponse:
    return ComplianceResponse(
        vendor_id=request.vendor.vendor_id,
        circuit_count=len(request.circuits),
        compliance_percent=calculate_compliance_percent(request.circuits, request.vendor),
    )
