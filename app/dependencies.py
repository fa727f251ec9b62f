"""
FastAPI Dependencies

All long-lived objects are created here, not per request.
Routes receive them through Depends() and never build their own.

RULE: Routes hold no business logic - they resolve inputs, call the
engine, and shape the response.
"""

import logging
from functools import lru_cache

from app.core.config import settings
from registry.loader import load_vendor_configs
from registry.vendor_registry import VendorRegistry, bootstrap_vendors
from telemetry.file_source import FileTelemetrySource
from telemetry.source import InMemoryTelemetrySource, TelemetrySource


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_vendor_registry() -> VendorRegistry:
    """
    Create and cache the vendor registry.

    Loaded from ``settings.vendor_config_path`` when set, otherwise seeded
    with the built-in vendors.
    """
    registry = VendorRegistry()

    if settings.vendor_config_path:
        configs = load_vendor_configs(
            settings.vendor_config_path,
            strict=settings.strict_penalty_rules,
        )
        return bootstrap_vendors(registry, configs)

    return bootstrap_vendors(registry)


@lru_cache(maxsize=1)
def get_telemetry_source() -> TelemetrySource:
    """Create and cache the telemetry source (empty when no file is configured)."""
    if settings.telemetry_path:
        return FileTelemetrySource(settings.telemetry_path)

    logger.info("No telemetry path configured; serving no circuits")
    return InMemoryTelemetrySource()


def get_near_threshold_margin() -> float:
    return settings.near_threshold_margin
