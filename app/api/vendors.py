"""
Vendor API Routes

Registry listing, per-vendor circuits, fleet summary and CSV export.
Thin delegation to the registry, telemetry source and engine.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.dependencies import get_telemetry_source, get_vendor_registry
from penalty.summary import summarize_vendor
from registry.vendor_registry import VendorRegistry
from reporting.csv_export import circuit_export_rows, export_to_csv
from schemas.circuit import CircuitFilters, CircuitRow, CircuitStatus
from schemas.vendor import VendorConfig, VendorKPIs
from telemetry.filters import group_events_by_circuit
from telemetry.source import TelemetrySource


router = APIRouter(tags=["vendors"])


def require_vendor(vendor_id: str, registry: VendorRegistry) -> VendorConfig:
    """Resolve a vendor or answer 404."""
    vendor = registry.get(vendor_id)
    if vendor is None:
        raise HTTPException(status_code=404, detail=f"Vendor not found: {vendor_id}")
    return vendor


@router.get("/vendors", response_model=List[VendorConfig])
def list_vendors(registry: VendorRegistry = Depends(get_vendor_registry)) -> List[VendorConfig]:
    """Active vendors in display order."""
    return registry.get_all()


@router.get("/vendors/{vendor_id}", response_model=VendorConfig)
def get_vendor(
    vendor_id: str,
    registry: VendorRegistry = Depends(get_vendor_registry),
) -> VendorConfig:
    return require_vendor(vendor_id, registry)


@router.get("/vendors/{vendor_id}/circuits", response_model=List[CircuitRow])
def list_vendor_circuits(
    vendor_id: str,
    region: Optional[str] = None,
    status: Optional[CircuitStatus] = None,
    bandwidth_tier: Optional[str] = Query(default=None, alias="bandwidthTier"),
    search: Optional[str] = None,
    time_window: Optional[str] = Query(default=None, alias="timeWindow"),
    registry: VendorRegistry = Depends(get_vendor_registry),
    telemetry: TelemetrySource = Depends(get_telemetry_source),
) -> List[CircuitRow]:
    require_vendor(vendor_id, registry)
    filters = CircuitFilters(
        region=region,
        status=status,
        bandwidth_tier=bandwidth_tier,
        search_term=search,
        time_window=time_window,
    )
    return telemetry.list_circuits(vendor_id=vendor_id, filters=filters)


@router.get("/vendors/{vendor_id}/summary", response_model=VendorKPIs)
def get_vendor_summary(
    vendor_id: str,
    registry: VendorRegistry = Depends(get_vendor_registry),
    telemetry: TelemetrySource = Depends(get_telemetry_source),
) -> VendorKPIs:
    """Compliance, live breaches and engine-derived penalty cost."""
    vendor = require_vendor(vendor_id, registry)
    circuits = telemetry.list_circuits(vendor_id=vendor_id)
    events = group_events_by_circuit(telemetry.list_breach_events(vendor_id=vendor_id))
    return summarize_vendor(circuits, vendor, events)


@router.get("/vendors/{vendor_id}/export")
def export_vendor_circuits(
    vendor_id: str,
    registry: VendorRegistry = Depends(get_vendor_registry),
    telemetry: TelemetrySource = Depends(get_telemetry_source),
) -> Response:
    """Download the vendor's circuits as CSV with freshly computed costs."""
    vendor = require_vendor(vendor_id, registry)
    circuits = telemetry.list_circuits(vendor_id=vendor_id)
    events = group_events_by_circuit(telemetry.list_breach_events(vendor_id=vendor_id))

    content = export_to_csv(circuit_export_rows(circuits, vendor, events))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{vendor_id}-circuits.csv"'},
    )
