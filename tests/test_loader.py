"""
Vendor Configuration Loader Tests
"""

import json
import logging

import pytest
from pydantic import ValidationError

from conftest import ATT_CONFIG
from penalty.rules import (
    OverThreshold,
    PenaltyRuleError,
    PerBreachCount,
    Tiered,
    UncostedReason,
    Unrecognized,
)
from registry.loader import compile_vendor_rules, load_vendor_configs
from schemas.vendor import VendorConfig


YAML_CONFIG = """
vendors:
  - vendorId: att
    name: AT&T
    currency: USD
    displayOrder: 1
    kpiThresholds:
      latency_ms: 100
      jitter_ms: 5
      frameLoss_pct: 0.5
    penaltyRules:
      latency:
        type: declarative
        unitCost: 0.5
        calc: over_threshold_ms * unitCost
      frameLoss:
        type: declarative
        tiered:
          - {min: 0.5, max: 1.0, unitCost: 50}
          - {min: 1.0, max: 5.0, unitCost: 200}
  - vendorId: lumen
    name: Lumen
    currency: USD
    isActive: false
    kpiThresholds:
      latency_ms: 95
      jitter_ms: 4
      frameLoss_pct: 0.4
"""


def test_load_yaml(tmp_path):
    path = tmp_path / "vendors.yaml"
    path.write_text(YAML_CONFIG, encoding="utf-8")

    configs = load_vendor_configs(path)

    assert [c.vendor_id for c in configs] == ["att", "lumen"]
    assert configs[0].penalty_rules["latency"].unit_cost == 0.5
    assert configs[0].penalty_rules["frameLoss"].tiered[1].unit_cost == 200
    assert configs[1].is_active is False
    assert configs[1].penalty_rules == {}


def test_load_json_list(tmp_path):
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([ATT_CONFIG]), encoding="utf-8")

    configs = load_vendor_configs(str(path))

    assert len(configs) == 1
    assert configs[0].kpi_thresholds.frame_loss_pct == 0.5


def test_load_rejects_wrong_shape(tmp_path):
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps({"att": ATT_CONFIG}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_vendor_configs(path)


def test_load_rejects_missing_thresholds(tmp_path):
    broken = {k: v for k, v in ATT_CONFIG.items() if k != "kpiThresholds"}
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([broken]), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_vendor_configs(path)


def test_compile_vendor_rules():
    compiled = compile_vendor_rules(VendorConfig.model_validate(ATT_CONFIG))

    assert isinstance(compiled["latency"], OverThreshold)
    assert isinstance(compiled["jitter"], PerBreachCount)
    assert isinstance(compiled["frameLoss"], Tiered)


def test_unrecognized_formula_is_flagged(caplog):
    config = VendorConfig.model_validate({
        **ATT_CONFIG,
        "penaltyRules": {"latency": {"unitCost": 1, "calc": "minutes_down * unitCost"}},
    })
    caplog.set_level(logging.WARNING, logger="registry.loader")

    compiled = compile_vendor_rules(config)

    assert isinstance(compiled["latency"], Unrecognized)
    assert "unrecognized_formula" in caplog.text
    assert "minutes_down" in caplog.text


def test_unrecognized_formula_rejected_when_strict(tmp_path):
    data = {**ATT_CONFIG, "penaltyRules": {"jitter": {"unitCost": 5, "calc": "per_minute"}}}
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([data]), encoding="utf-8")

    with pytest.raises(PenaltyRuleError):
        load_vendor_configs(path, strict=True)


def test_unknown_metric_rule_is_ignored(caplog):
    config = VendorConfig.model_validate({
        **ATT_CONFIG,
        "penaltyRules": {"packetLoss": {"unitCost": 1, "calc": "breach_count * unitCost"}},
    })
    caplog.set_level(logging.WARNING, logger="registry.loader")

    assert compile_vendor_rules(config) == {}
    assert "packetLoss" in caplog.text


def test_incomplete_tier_band_does_not_reject_vendor(tmp_path, caplog):
    broken = {
        **ATT_CONFIG,
        "vendorId": "broken",
        "penaltyRules": {
            **ATT_CONFIG["penaltyRules"],
            "frameLoss": {"type": "declarative", "tiered": [{"min": 0.5, "max": 1.0}]},
        },
    }
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([broken, ATT_CONFIG]), encoding="utf-8")
    caplog.set_level(logging.WARNING, logger="registry.loader")

    configs = load_vendor_configs(path)

    assert [c.vendor_id for c in configs] == ["broken", "att"]
    assert configs[0].compiled_rules["frameLoss"] == Unrecognized(reason=UncostedReason.MISSING_FIELDS)
    assert isinstance(configs[0].compiled_rules["latency"], OverThreshold)
    assert "missing_fields" in caplog.text


def test_incomplete_tier_band_rejected_when_strict(tmp_path):
    data = {**ATT_CONFIG, "penaltyRules": {"frameLoss": {"tiered": [{"max": 1.0, "unitCost": 50}]}}}
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([data]), encoding="utf-8")

    with pytest.raises(PenaltyRuleError):
        load_vendor_configs(path, strict=True)


def test_null_rule_is_skipped(tmp_path):
    data = {**ATT_CONFIG, "penaltyRules": {**ATT_CONFIG["penaltyRules"], "latency": None}}
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([data]), encoding="utf-8")

    configs = load_vendor_configs(path, strict=True)

    assert configs[0].penalty_rules["latency"] is None
    assert set(configs[0].compiled_rules) == {"jitter", "frameLoss"}


def test_loaded_configs_carry_compiled_rules(tmp_path):
    path = tmp_path / "vendors.json"
    path.write_text(json.dumps([ATT_CONFIG]), encoding="utf-8")

    config = load_vendor_configs(path)[0]

    assert config.compiled_rules == {
        "latency": OverThreshold(unit_cost=0.5),
        "jitter": PerBreachCount(unit_cost=20),
        "frameLoss": Tiered(bands=tuple(config.penalty_rules["frameLoss"].tiered)),
    }
