"""API routes package"""

from . import health, mess_cuts, notifications, messes, navigation, deliveries

__all__ = ["health", "mess_cuts", "notifications", "messes", "navigation", "deliveries"]
