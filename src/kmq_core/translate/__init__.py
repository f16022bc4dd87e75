"""Event translation: property mapping, device classification, command rules."""
from .device import is_mobile
from .mapping import alias_properties, normalize_revenue, prefix

__all__ = ["alias_properties", "is_mobile", "normalize_revenue", "prefix"]
