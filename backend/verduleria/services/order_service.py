"""
Order Service - order lifecycle

Handles:
- Order save (create / update) with customer and product resolution
- Total recomputation from the supplied lines
- Status transitions (optionally checked against ORDER_TRANSITIONS)
- Order queries, delete and statistics

Every public write runs in one transaction (see core.database.transaction).

Author: Verduleria
Date: 2025-11-03
"""
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from verduleria.core.config import settings
from verduleria.core.database import transaction
from verduleria.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from verduleria.domain.money import total_of
from verduleria.domain.order import (
    Order,
    OrderLine,
    OrderLineInput,
    OrderSave,
    OrderStatus,
    can_transition,
)
from verduleria.repositories.customer_repository import CustomerRepository
from verduleria.repositories.order_repository import OrderRepository
from verduleria.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order lifecycle manager

    Args:
        db: SQLAlchemy session shared by the repositories
        clock: Returns "now" for created_at (injectable for tests)
        enforce_transitions: Reject status changes not allowed by
            ORDER_TRANSITIONS. Off by default: status is overwritten
            unconditionally and callers restrict it where they need to.
    """

    def __init__(
        self,
        db: Session,
        clock: Callable[[], datetime] = datetime.now,
        enforce_transitions: Optional[bool] = None,
    ):
        self.db = db
        self.clock = clock
        if enforce_transitions is None:
            enforce_transitions = settings.ENFORCE_STATUS_TRANSITIONS
        self.enforce_transitions = enforce_transitions

        self.orders = OrderRepository(db)
        self.customers = CustomerRepository(db)
        self.products = ProductRepository(db)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_transition(self, order: Order, target: OrderStatus) -> None:
        if not self.enforce_transitions or can_transition(order.status, target):
            return

        if order.is_terminal:
            message = f"El pedido {order.id} está cerrado ({order.status.value}) y no admite cambios de estado"
        else:
            message = f"El pedido {order.id} no puede pasar de {order.status.value} a {target.value}"
        raise InvalidStateError(
            message,
            extra={
                "order_id": order.id,
                "status": order.status.value,
                "target": target.value,
                "terminal": order.is_terminal,
            },
        )

    def _resolve_customer(self, customer_id: Optional[int]) -> int:
        if customer_id is None:
            raise InvalidArgumentError("El pedido debe tener un cliente asociado")
        if not self.customers.exists_by_id(customer_id):
            raise InvalidArgumentError(
                f"Cliente con ID {customer_id} no encontrado",
                extra={"customer_id": customer_id},
            )
        return customer_id

    def _resolve_line(self, line_input: OrderLineInput, order_id: Optional[int]) -> OrderLine:
        if not self.products.exists_by_id(line_input.product_id):
            raise NotFoundError(
                f"Producto con ID {line_input.product_id} no encontrado",
                extra={"product_id": line_input.product_id},
            )
        return OrderLine(
            order_id=order_id,
            product_id=line_input.product_id,
            quantity=line_input.quantity,
            unit_price=line_input.unit_price,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, payload: OrderSave, order_id: Optional[int] = None) -> Order:
        """
        Create (order_id is None) or update an order

        When lines are supplied they replace the order's lines and the total
        is recomputed from them, overriding any total in the payload.
        Without lines the payload total (if any) is kept.

        Raises:
            InvalidArgumentError: customer missing or unknown
            NotFoundError: order (on update) or a line's product unknown
            InvalidStateError: status change rejected by the transition table
        """
        with transaction(self.db):
            customer_id = self._resolve_customer(payload.customer_id)

            current = None
            if order_id is not None:
                current = self.find_by_id(order_id)

            status = payload.status or (current.status if current else OrderStatus.PENDING)
            if current is not None:
                self._check_transition(current, status)

            lines = current.lines if current else []
            total = current.total_amount if current else Decimal("0")
            if payload.total_amount is not None:
                total = payload.total_amount

            if payload.lines is not None:
                lines = [self._resolve_line(line_input, order_id) for line_input in payload.lines]
                total = total_of(line.subtotal for line in lines)

            generated = payload.delivery_note_generated
            if generated is None:
                generated = current.delivery_note_generated if current else False

            order = Order(
                id=order_id,
                created_at=current.created_at if current else self.clock(),
                customer_id=customer_id,
                status=status,
                delivery_note_generated=generated,
                lines=lines,
                total_amount=total,
            )
            saved = self.orders.save(order)

            action = "updated" if current else "created"
            logger.info(
                f"Order {saved.id} {action}: customer={customer_id} "
                f"lines={saved.line_count} total={saved.total_amount}"
            )
            return saved

    def change_status(self, order_id: int, status: OrderStatus) -> Order:
        """
        Set an order's status

        Moving to DELIVERED also marks the delivery note flag. No version
        check: concurrent changes are last-write-wins.

        Raises:
            NotFoundError: order unknown
            InvalidStateError: transition rejected (strict mode only)
        """
        with transaction(self.db):
            order = self.find_by_id(order_id)
            self._check_transition(order, status)

            changes: Dict[str, Any] = {"status": status}
            if status == OrderStatus.DELIVERED:
                changes["delivery_note_generated"] = True

            saved = self.orders.save(order.model_copy(update=changes))
            logger.info(f"Order {order_id} status {order.status.value} -> {status.value}")
            return saved

    def delete(self, order_id: int) -> None:
        """Delete an order and its lines"""
        with transaction(self.db):
            if not self.orders.exists_by_id(order_id):
                raise NotFoundError(
                    f"Pedido con ID {order_id} no encontrado para eliminar",
                    extra={"order_id": order_id},
                )
            try:
                self.orders.delete_by_id(order_id)
            except IntegrityError as e:
                raise ConflictError(
                    f"El pedido {order_id} tiene un remito asociado y no puede eliminarse",
                    extra={"order_id": order_id},
                ) from e
            logger.info(f"Order {order_id} deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self) -> List[Order]:
        return self.orders.find_all()

    def find_by_id(self, order_id: int) -> Order:
        order = self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError(
                f"Pedido con ID {order_id} no encontrado",
                extra={"order_id": order_id},
            )
        return order

    def find_by_customer(self, customer_id: int) -> List[Order]:
        return self.orders.find_by_customer_id(customer_id)

    def find_by_status(self, status: OrderStatus) -> List[Order]:
        return self.orders.find_by_status(status)

    def find_by_criteria(self, search: Optional[str]) -> List[Order]:
        """List orders matching a criteria filter (empty filter -> all)"""
        predicate = self.orders.parse_criteria(search)
        if predicate.is_empty:
            return self.orders.find_all()
        return self.orders.find_matching(predicate)

    def search(
        self,
        search: Optional[str] = None,
        customer_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
    ) -> List[Order]:
        """
        List orders by customer and/or status, narrowed by a criteria filter

        Without customer_id and status this is find_by_criteria.
        """
        if customer_id is None and status is None:
            return self.find_by_criteria(search)

        predicate = self.orders.parse_criteria(search)
        if customer_id is not None:
            orders = self.find_by_customer(customer_id)
        else:
            orders = self.find_by_status(status)

        return [
            order for order in orders
            if (status is None or order.status == status) and predicate(order)
        ]

    def get_stats(self) -> Dict[str, Any]:
        return self.orders.get_stats()
