"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from food_delivery.core.config import get_settings, Settings, EnvironmentMode
from food_delivery.core.errors import ServiceError

__all__ = ["get_settings", "Settings", "EnvironmentMode", "ServiceError"]
