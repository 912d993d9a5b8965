"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.delivery_mapper import DeliveryMapper

__all__ = ["DeliveryMapper"]
