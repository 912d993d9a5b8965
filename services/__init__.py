"""Services package - Business logic layer"""

from services.notification_service import NotificationService
from services.mess_cut_service import MessCutService
from services.navigation_service import NavigationService
from services.discovery_service import DiscoveryService
from services.pricing_service import PricingService
from services.mess_service import MessService
from services.delivery_service import DeliveryService

__all__ = [
    "NotificationService",
    "MessCutService",
    "NavigationService",
    "DiscoveryService",
    "PricingService",
    "MessService",
    "DeliveryService",
]
