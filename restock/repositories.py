"""
Identity-keyed persistence helpers.

Services never rely on save cascades: parent rows are added and flushed
first, child rows are added explicitly afterwards, and the caller commits
once at the end of the unit of work.
"""
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import selectinload

T = TypeVar('T')


class Repository(Generic[T]):
    """Thin find/save/remove wrapper around a SQLAlchemy session for one model."""

    def __init__(self, session, model: Type[T]):
        self.session = session
        self.model = model

    def find(self, entity_id: Any, *relations: str) -> Optional[T]:
        """Load one row by primary key, eagerly loading the named relationships."""
        query = self.session.query(self.model).filter(self.model.id == entity_id)
        for relation in relations:
            query = query.options(selectinload(getattr(self.model, relation)))
        return query.first()

    def find_by(self, **criteria) -> Optional[T]:
        return self.session.query(self.model).filter_by(**criteria).first()

    def list(self, *relations: str) -> List[T]:
        query = self.session.query(self.model)
        for relation in relations:
            query = query.options(selectinload(getattr(self.model, relation)))
        return query.order_by(self.model.id).all()

    def save(self, entity: T) -> T:
        """Stage the row and flush so its identity is assigned."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def save_all(self, entities: List[T]) -> List[T]:
        self.session.add_all(entities)
        self.session.flush()
        return entities

    def remove(self, entity: T) -> None:
        self.session.delete(entity)
        self.session.flush()
