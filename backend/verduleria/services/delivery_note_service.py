"""
Delivery Note Service - remito issuance and delivery confirmation

Handles:
- Generating the single remito of an order (status and duplicate checks)
- Advancing the order IN_PREPARATION -> SHIPPED when the remito is issued
- Confirming the delivery (order -> DELIVERED, receiver details recorded)
- Remito queries and delete

All order status writes go through OrderService.

Author: Verduleria
Date: 2025-11-03
"""
from typing import Callable, List, Optional
from datetime import datetime
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from verduleria.core.database import transaction
from verduleria.core.exceptions import ConflictError, InvalidStateError, NotFoundError
from verduleria.domain.delivery_note import DeliveryNote
from verduleria.domain.order import DELIVERY_NOTE_STATUSES, OrderStatus
from verduleria.repositories.delivery_note_repository import DeliveryNoteRepository
from verduleria.services.order_service import OrderService

logger = logging.getLogger(__name__)


class DeliveryNoteService:
    """
    Delivery note generator

    Args:
        db: SQLAlchemy session shared with the order service
        orders: Order lifecycle manager (built on the same session if omitted)
        clock: Returns "now" for issued_at / delivered_at
        number_source: Returns the next remito number when none is given.
            Defaults to the clock's epoch milliseconds.
    """

    def __init__(
        self,
        db: Session,
        orders: Optional[OrderService] = None,
        clock: Callable[[], datetime] = datetime.now,
        number_source: Optional[Callable[[], int]] = None,
    ):
        self.db = db
        self.clock = clock
        self.orders = orders or OrderService(db, clock=clock)
        self.number_source = number_source or self._timestamp_number
        self.notes = DeliveryNoteRepository(db)

    def _timestamp_number(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def _conflict(self, order_id: int) -> ConflictError:
        return ConflictError(
            f"El pedido {order_id} ya tiene un remito asociado",
            extra={"order_id": order_id},
        )

    def generate_delivery_note(self, order_id: int, note_number: Optional[int] = None) -> DeliveryNote:
        """
        Issue the delivery note of an order

        Steps:
        1. Reject if the order already has a remito
        2. Load the order
        3. Require status IN_PREPARATION or SHIPPED
        4. Total = rounded sum of the order's line subtotals
        5. Persist the remito
        6. IN_PREPARATION orders move to SHIPPED

        Raises:
            ConflictError: the order already has a delivery note
            NotFoundError: order unknown
            InvalidStateError: order status does not allow a remito
        """
        with transaction(self.db):
            if self.notes.find_by_order_id(order_id) is not None:
                raise self._conflict(order_id)

            order = self.orders.find_by_id(order_id)
            if order.status not in DELIVERY_NOTE_STATUSES:
                raise InvalidStateError(
                    f"No se puede generar el remito del pedido {order_id} en estado {order.status.value}",
                    extra={"order_id": order_id, "status": order.status.value},
                )

            note = DeliveryNote(
                note_number=note_number if note_number is not None else self.number_source(),
                order_id=order_id,
                total_value=order.lines_total,
                issued_at=self.clock(),
            )
            try:
                saved = self.notes.save(note)
            except IntegrityError as e:
                # Another request issued the remito between the check and the insert
                raise self._conflict(order_id) from e

            if order.status == OrderStatus.IN_PREPARATION:
                self.orders.change_status(order_id, OrderStatus.SHIPPED)

            logger.info(
                f"Delivery note {saved.note_number} issued for order {order_id}: total={saved.total_value}"
            )
            return saved

    def confirm_delivery(
        self,
        note_id: int,
        received_by_name: Optional[str] = None,
        received_by_id_doc: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> DeliveryNote:
        """
        Confirm that the goods of a delivery note were handed over

        The order moves to DELIVERED unless it already is. Receiver details
        are recorded by the first confirmation only; confirming again returns
        the note unchanged.

        Raises:
            NotFoundError: delivery note unknown
        """
        with transaction(self.db):
            note = self.find_by_id(note_id)

            order = self.orders.find_by_id(note.order_id)
            if order.status != OrderStatus.DELIVERED:
                self.orders.change_status(order.id, OrderStatus.DELIVERED)

            if not note.is_delivered:
                note = note.model_copy(update={
                    "received_by_name": received_by_name,
                    "received_by_id_doc": received_by_id_doc,
                    "remarks": remarks,
                    "delivered_at": self.clock(),
                })
                logger.info(f"Delivery note {note_id} confirmed, received by {received_by_name!r}")
            else:
                logger.info(f"Delivery note {note_id} already confirmed")

            return self.notes.save(note)

    def delete(self, note_id: int) -> None:
        with transaction(self.db):
            if not self.notes.exists_by_id(note_id):
                raise NotFoundError(
                    f"Remito con ID {note_id} no encontrado para eliminar",
                    extra={"delivery_note_id": note_id},
                )
            self.notes.delete_by_id(note_id)
            logger.info(f"Delivery note {note_id} deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self) -> List[DeliveryNote]:
        return self.notes.find_all()

    def find_by_id(self, note_id: int) -> DeliveryNote:
        note = self.notes.find_by_id(note_id)
        if note is None:
            raise NotFoundError(
                f"Remito con ID {note_id} no encontrado",
                extra={"delivery_note_id": note_id},
            )
        return note

    def find_by_order(self, order_id: int) -> Optional[DeliveryNote]:
        return self.notes.find_by_order_id(order_id)

    def find_by_criteria(self, search: Optional[str]) -> List[DeliveryNote]:
        """List delivery notes matching a criteria filter (empty filter -> all)"""
        predicate = self.notes.parse_criteria(search)
        if predicate.is_empty:
            return self.notes.find_all()
        return self.notes.find_matching(predicate)
