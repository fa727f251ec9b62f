"""
Default Vendors

Built-in vendor configurations used when no configuration file is set.

DESIGN RULES:
- Configuration only, no logic
- Same wire shape as a vendor configuration file
"""

from typing import Any, Dict, List

from registry.loader import compile_vendor_rules
from schemas.vendor import VendorConfig


DEFAULT_VENDOR_DATA: List[Dict[str, Any]] = [
    # AT&T
    {
        "vendorId": "att",
        "name": "AT&T",
        "currency": "USD",
        "displayOrder": 1,
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
        "uiHints": {"color": "#00A8E0"},
        "isActive": True,
    },
    # Verizon
    {
        "vendorId": "verizon",
        "name": "Verizon",
        "currency": "USD",
        "displayOrder": 2,
        "kpiThresholds": {"latency_ms": 90, "jitter_ms": 4, "frameLoss_pct": 0.3},
        "penaltyRules": {
            "latency": {"type": "declarative", "unitCost": 0.75, "calc": "over_threshold_ms * unitCost"},
            "jitter": {"type": "declarative", "unitCost": 25, "calc": "breach_count * unitCost"},
            "frameLoss": {
                "type": "declarative",
                "tiered": [
                    {"min": 0.3, "max": 0.8, "unitCost": 60},
                    {"min": 0.8, "max": 3.0, "unitCost": 250},
                ],
            },
        },
        "uiHints": {"color": "#CD040B"},
        "isActive": True,
    },
    # T-Mobile
    {
        "vendorId": "tmobile",
        "name": "T-Mobile",
        "currency": "USD",
        "displayOrder": 3,
        "kpiThresholds": {"latency_ms": 110, "jitter_ms": 6, "frameLoss_pct": 0.6},
        "penaltyRules": {
            "latency": {"type": "declarative", "unitCost": 0.4, "calc": "over_threshold_ms * unitCost"},
            "jitter": {"type": "declarative", "unitCost": 15, "calc": "breach_count * unitCost"},
            "frameLoss": {
                "type": "declarative",
                "tiered": [
                    {"min": 0.6, "max": 1.2, "unitCost": 45},
                    {"min": 1.2, "max": 6.0, "unitCost": 180},
                ],
            },
        },
        "uiHints": {"color": "#E20074"},
        "isActive": True,
    },
]

def _load_defaults() -> List[VendorConfig]:
    configs = [VendorConfig.model_validate(data) for data in DEFAULT_VENDOR_DATA]
    for config in configs:
        compile_vendor_rules(config, strict=True)
    return configs


DEFAULT_VENDORS: List[VendorConfig] = _load_defaults()
