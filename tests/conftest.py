import pytest

from schemas.circuit import BreachEvent, CircuitRow
from schemas.vendor import VendorConfig
from registry.vendor_registry import VendorRegistry, bootstrap_vendors


ATT_CONFIG = {
    "vendorId": "att",
    "name": "AT&T",
    "currency": "USD",
    "kpiThresholds": {"latency_ms": 100, "jitter_ms": 5, "frameLoss_pct": 0.5},
    "penaltyRules": {
        "latency": {"type": "declarative", "unitCost": 0.5, "calc": "over_threshold_ms * unitCost"},
        "jitter": {"type": "declarative", "unitCost": 20, "calc": "breach_count * unitCost"},
        "frameLoss": {
            "type": "declarative",
            "tiered": [
                {"min": 0.5, "max": 1.0, "unitCost": 50},
                {"min": 1.0, "max": 5.0, "unitCost": 200},
            ],
        },
    },
}


def make_vendor(**overrides) -> VendorConfig:
    data = {**ATT_CONFIG, **overrides}
    return VendorConfig.model_validate(data)


def make_circuit(
    latency: float = 80,
    jitter: float = 3,
    frame_loss: float = 0.2,
    circuit_id: str = "ATT-CKT-0001",
    vendor_id: str = "att",
    **extra,
) -> CircuitRow:
    data = {
        "circuitId": circuit_id,
        "vendorId": vendor_id,
        "sites": ["New York", "Boston"],
        "bandwidthMbps": 1000,
        "status": "active",
        "region": "US-East",
        "latency_ms": latency,
        "jitter_ms": jitter,
        "frameLoss_pct": frame_loss,
        "breachCount": 0,
        "costUSD": 0,
        "lastUpdated": "2024-05-01T12:00:00.000Z",
    }
    data.update(extra)
    return CircuitRow.model_validate(data)


def make_event(
    metric: str,
    circuit_id: str = "ATT-CKT-0001",
    timestamp: str = "2024-04-20T08:00:00.000Z",
    index: int = 0,
) -> BreachEvent:
    return BreachEvent.model_validate({
        "id": f"breach-{circuit_id}-{index}",
        "circuitId": circuit_id,
        "vendorId": "att",
        "metric": metric,
        "threshold": 5,
        "measuredValue": 6.5,
        "costUSD": 42.0,
        "timestamp": timestamp,
    })


@pytest.fixture
def att_vendor() -> VendorConfig:
    return make_vendor()


@pytest.fixture
def registry() -> VendorRegistry:
    """Fresh registry seeded with the built-in vendors."""
    return bootstrap_vendors(VendorRegistry())
