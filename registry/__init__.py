# Registry Package
from registry.vendor_registry import VendorRegistry, bootstrap_vendors
from registry.loader import load_vendor_configs

__all__ = ["VendorRegistry", "bootstrap_vendors", "load_vendor_configs"]
