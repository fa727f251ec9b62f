"""
Vendor Registry

Keyed in-memory storage of vendor configurations.

DESIGN RULES:
- Explicitly constructed and passed down, no module-level instance
- No structural validation: malformed rules surface as zero cost downstream
- Whole configs are replaced on re-registration (last write wins)
"""

import logging
from typing import Dict, Iterable, List, Optional

from schemas.vendor import VendorConfig


logger = logging.getLogger(__name__)


class VendorRegistry:
    """
    Registry of SLA vendors keyed by vendor_id.

    Features:
    - Insert-or-overwrite registration
    - Active-only listing ordered by display_order
    - Exact-key lookup that also returns inactive vendors
    """

    def __init__(self, configs: Optional[Iterable[VendorConfig]] = None):
        self._vendors: Dict[str, VendorConfig] = {}
        if configs:
            self.register_multiple(configs)

    def register(self, config: VendorConfig) -> None:
        """Insert or overwrite a vendor. An overwrite keeps its original position."""
        if config.vendor_id in self._vendors:
            logger.debug(f"Overwriting vendor config: {config.vendor_id}")
        self._vendors[config.vendor_id] = config

    def register_multiple(self, configs: Iterable[VendorConfig]) -> None:
        """Register in input order; later duplicates win."""
        for config in configs:
            self.register(config)

    def get(self, vendor_id: str) -> Optional[VendorConfig]:
        """Get a vendor by id, None if unknown."""
        return self._vendors.get(vendor_id)

    def get_all(self) -> List[VendorConfig]:
        """
        Active vendors sorted ascending by display_order.

        The sort is stable, so ties keep insertion order.
        """
        active = [v for v in self._vendors.values() if v.is_active is not False]
        return sorted(active, key=lambda v: v.display_order or 0)

    def exists(self, vendor_id: str) -> bool:
        return vendor_id in self._vendors

    def remove(self, vendor_id: str) -> bool:
        """Remove a vendor. Returns True if one was removed."""
        return self._vendors.pop(vendor_id, None) is not None

    def clear(self) -> None:
        self._vendors.clear()

    def __len__(self) -> int:
        return len(self._vendors)


# --- Registry Bootstrap ---

def bootstrap_vendors(
    registry: VendorRegistry,
    configs: Optional[Iterable[VendorConfig]] = None,
) -> VendorRegistry:
    """
    Seed a registry.

    Called once at startup. Uses the built-in vendors unless configs are given.
    """
    if configs is None:
        from registry.defaults import DEFAULT_VENDORS
        configs = DEFAULT_VENDORS

    registry.register_multiple(configs)
    logger.info(f"Vendor registry bootstrapped with {len(registry)} vendors")
    return registry
