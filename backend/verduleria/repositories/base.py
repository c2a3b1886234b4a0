"""
Base Repository - shared data access for every entity kind

Implements the store contract (find_all, find_by_id, find_matching,
exists_by_id, save, delete_by_id) on top of a SQLAlchemy session and maps
ORM rows to Pydantic domain models. Repositories never commit: the calling
service owns the transaction.

Author: Verduleria
Date: 2025-11-03
"""
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from verduleria.core.criteria import CriteriaFilter, Predicate

T = TypeVar("T", bound=BaseModel)


class SqlRepository(Generic[T]):
    """
    Generic repository for one ORM model / domain model pair

    Subclasses set:
        model: SQLAlchemy ORM class
        domain: Pydantic domain class
        criteria: CriteriaFilter with the entity's filterable fields
    """

    model: Type = None
    domain: Type[T] = None
    criteria: CriteriaFilter = None

    def __init__(self, db: Session):
        self.db = db

    def _to_domain(self, row) -> T:
        return self.domain.model_validate(row)

    def _apply(self, row, record: T) -> None:
        """Copy the record's column values onto the ORM row"""
        for name, value in record.model_dump(exclude={"id"}).items():
            if hasattr(self.model, name):
                setattr(row, name, value)

    def parse_criteria(self, search: Optional[str]) -> Predicate:
        return self.criteria.parse(search)

    def find_all(self) -> List[T]:
        rows = self.db.scalars(select(self.model).order_by(self.model.id)).all()
        return [self._to_domain(row) for row in rows]

    def find_by_id(self, record_id: int) -> Optional[T]:
        row = self.db.get(self.model, record_id)
        return self._to_domain(row) if row is not None else None

    def find_matching(self, predicate: Predicate) -> List[T]:
        """Find all records satisfying a criteria predicate"""
        query = select(self.model).where(predicate.to_sql(self.model)).order_by(self.model.id)
        return [self._to_domain(row) for row in self.db.scalars(query).all()]

    def exists_by_id(self, record_id: int) -> bool:
        return self.db.get(self.model, record_id) is not None

    def save(self, record: T) -> T:
        """
        Insert (id is None) or update a record

        Returns the persisted record as read back from the database, with
        its id assigned.
        """
        row = self.db.get(self.model, record.id) if record.id is not None else None
        if row is None:
            row = self.model(id=record.id)
            self.db.add(row)

        self._apply(row, record)
        self.db.flush()
        self._refresh(row)
        return self._to_domain(row)

    def _refresh(self, row) -> None:
        """Reload the row so the returned record holds the stored values"""
        self.db.refresh(row)

    def delete_by_id(self, record_id: int) -> None:
        row = self.db.get(self.model, record_id)
        if row is not None:
            self.db.delete(row)
            self.db.flush()
