"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, Type
from uuid import UUID
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing lookup and delete by primary key.
    All repositories should inherit from this class and set ``id_field``
    to the name of the model's primary key column (delivery_id, mess_id, ...).
    """

    id_field: str = ""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """
        Get entity by its primary key.

        Args:
            entity_id: Entity UUID

        Returns:
            Entity or None if not found
        """
        if not self.id_field:
            raise NotImplementedError(
                f"{self.__class__.__name__} must define id_field"
            )
        column = getattr(self.model, self.id_field)
        return self.db.query(self.model).filter(column == entity_id).first()

    def delete(self, entity_id: UUID) -> bool:
        """Delete entity by ID"""
        entity = self.get_by_id(entity_id)
        if entity:
            self.db.delete(entity)
            self.db.commit()
            return True
        return False
