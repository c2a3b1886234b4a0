"""
Catalog Services - Customers and Products

Plain create / update / delete / query managers. Neither entity has
lifecycle rules; orders reference them by id.

Author: Verduleria
Date: 2025-11-03
"""
from typing import Generic, List, Optional, TypeVar
import logging

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from verduleria.core.database import transaction
from verduleria.core.exceptions import ConflictError, NotFoundError
from verduleria.domain.customer import Customer
from verduleria.domain.product import Product
from verduleria.repositories.base import SqlRepository
from verduleria.repositories.customer_repository import CustomerRepository
from verduleria.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class CatalogService(Generic[T]):
    """
    Shared CRUD for catalog entities

    Subclasses set ``label`` (used in error messages) and pass their
    repository.
    """

    label = "Registro"

    def __init__(self, db: Session, repository: SqlRepository[T]):
        self.db = db
        self.repository = repository

    def _not_found(self, record_id: int) -> NotFoundError:
        return NotFoundError(
            f"{self.label} con ID {record_id} no encontrado",
            extra={"id": record_id},
        )

    def find_all(self) -> List[T]:
        return self.repository.find_all()

    def find_by_criteria(self, search: Optional[str]) -> List[T]:
        """List records matching a criteria filter (empty filter -> all)"""
        predicate = self.repository.parse_criteria(search)
        if predicate.is_empty:
            return self.repository.find_all()
        return self.repository.find_matching(predicate)

    def find_by_id(self, record_id: int) -> T:
        record = self.repository.find_by_id(record_id)
        if record is None:
            raise self._not_found(record_id)
        return record

    def create(self, payload: BaseModel) -> T:
        with transaction(self.db):
            record = self.repository.domain(**payload.model_dump())
            saved = self.repository.save(record)
            logger.info(f"{self.label} {saved.id} created")
            return saved

    def update(self, record_id: int, payload: BaseModel) -> T:
        """Apply the fields present in the payload to an existing record"""
        with transaction(self.db):
            current = self.find_by_id(record_id)
            changes = payload.model_dump(exclude_unset=True, exclude_none=True)
            saved = self.repository.save(current.model_copy(update=changes))
            logger.info(f"{self.label} {record_id} updated: {sorted(changes)}")
            return saved

    def delete(self, record_id: int) -> None:
        """Delete a record; records still referenced by orders are kept"""
        with transaction(self.db):
            if not self.repository.exists_by_id(record_id):
                raise self._not_found(record_id)
            try:
                self.repository.delete_by_id(record_id)
            except IntegrityError as e:
                raise ConflictError(
                    f"{self.label} con ID {record_id} está referenciado por pedidos",
                    extra={"id": record_id},
                ) from e
            logger.info(f"{self.label} {record_id} deleted")


class CustomerService(CatalogService[Customer]):
    """Customer manager (CustomerCreate / CustomerUpdate payloads)"""

    label = "Cliente"

    def __init__(self, db: Session):
        super().__init__(db, CustomerRepository(db))


class ProductService(CatalogService[Product]):
    """Product manager (ProductCreate / ProductUpdate payloads)"""

    label = "Producto"

    def __init__(self, db: Session):
        super().__init__(db, ProductRepository(db))
