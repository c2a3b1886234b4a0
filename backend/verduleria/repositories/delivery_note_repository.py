"""
Delivery Note Repository - Data Access Layer for remitos

Author: Verduleria
Date: 2025-11-03
"""
from typing import Optional

from sqlalchemy import select

from verduleria.core.criteria import CriteriaFilter, FieldKind, FilterField
from verduleria.domain.delivery_note import DeliveryNote
from verduleria.models.delivery_note import DeliveryNote as DeliveryNoteRow
from verduleria.repositories.base import SqlRepository


DELIVERY_NOTE_CRITERIA = CriteriaFilter(
    fields={
        "id": FilterField("id", FieldKind.INTEGER),
        "note_number": FilterField("note_number", FieldKind.INTEGER),
        "order_id": FilterField("order_id", FieldKind.INTEGER),
        "total_value": FilterField("total_value", FieldKind.DECIMAL),
        "issued_at": FilterField("issued_at", FieldKind.DATETIME),
        "delivered_at": FilterField("delivered_at", FieldKind.DATETIME),
        "received_by_name": FilterField("received_by_name", FieldKind.TEXT),
    },
    aliases={
        "numeroRemito": "note_number",
        "pedidoId": "order_id",
        "valorTotal": "total_value",
        "fechaEmision": "issued_at",
    },
)


class DeliveryNoteRepository(SqlRepository[DeliveryNote]):
    """Repository for DeliveryNote data access"""

    model = DeliveryNoteRow
    domain = DeliveryNote
    criteria = DELIVERY_NOTE_CRITERIA

    def find_by_order_id(self, order_id: int) -> Optional[DeliveryNote]:
        """
        Find the delivery note issued against an order

        Args:
            order_id: Order ID

        Returns:
            DeliveryNote or None if the order has none
        """
        row = self.db.scalars(
            select(DeliveryNoteRow).where(DeliveryNoteRow.order_id == order_id)
        ).first()
        return self._to_domain(row) if row is not None else None
