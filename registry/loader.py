"""
Vendor Configuration Loader

Reads vendor configurations from a YAML or JSON file.

Every penalty rule is compiled at load time. Rules that cannot be evaluated
(unrecognized formula text, missing fields, empty tier table) are flagged
with a warning, or rejected when ``strict`` is set.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from penalty.rules import CompiledRule, PenaltyRuleError, compile_rule, is_usable
from schemas.vendor import METRICS, VendorConfig


logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_document(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)


def compile_vendor_rules(config: VendorConfig, strict: bool = False) -> Dict[str, CompiledRule]:
    """
    Compile a vendor's penalty rules and attach them to the config.

    The engine evaluates the attached rules; calc text is not parsed again.

    Args:
        config: Vendor configuration
        strict: Raise PenaltyRuleError instead of warning

    Returns:
        Compiled rule per configured metric name
    """
    known = {metric.value for metric in METRICS}
    compiled: Dict[str, CompiledRule] = {}

    for metric_name, rule in config.penalty_rules.items():
        if metric_name not in known:
            logger.warning(f"Vendor {config.vendor_id}: rule for unknown metric '{metric_name}' is ignored")
            continue

        if rule is None:
            logger.debug(f"Vendor {config.vendor_id}: {metric_name} rule is null; breaches will not be costed")
            continue

        result = compile_rule(rule)
        if not is_usable(result):
            message = (
                f"Vendor {config.vendor_id}: {metric_name} rule cannot be evaluated "
                f"({result.reason.value}{': ' + result.calc if result.calc else ''}); "
                f"breaches will not be costed"
            )
            if strict:
                raise PenaltyRuleError(message)
            logger.warning(message)

        compiled[metric_name] = result

    config.attach_compiled_rules(compiled)
    return compiled


def load_vendor_configs(path: Union[str, Path], strict: bool = False) -> List[VendorConfig]:
    """
    Load vendor configurations from a file.

    Accepts either a list of vendor objects or ``{"vendors": [...]}``.

    Raises:
        ValueError: The document has neither shape
        pydantic.ValidationError: A vendor object is structurally invalid
        PenaltyRuleError: A rule cannot be evaluated and strict is set
    """
    path = Path(path)
    data = _read_document(path)

    if isinstance(data, dict) and "vendors" in data:
        data = data["vendors"]
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of vendors or a 'vendors' key")

    configs = [VendorConfig.model_validate(item) for item in data]
    for config in configs:
        compile_vendor_rules(config, strict=strict)

    logger.info(f"Loaded {len(configs)} vendor configs from {path}")
    return configs
