"""
Order Repository - Data Access Layer for Orders

Orders are stored with their lines; lines are only reachable through their
order and are deleted with it.

Author: Verduleria
Date: 2025-11-03
"""
from typing import Any, Dict, List

from sqlalchemy import func, select

from verduleria.core.criteria import CriteriaFilter, FieldKind, FilterField
from verduleria.domain.order import Order, OrderStatus
from verduleria.models.order import Order as OrderRow, OrderLine as OrderLineRow
from verduleria.repositories.base import SqlRepository


ORDER_CRITERIA = CriteriaFilter(
    fields={
        "id": FilterField("id", FieldKind.INTEGER),
        "customer_id": FilterField("customer_id", FieldKind.INTEGER),
        "status": FilterField("status", FieldKind.STATUS),
        "delivery_note_generated": FilterField("delivery_note_generated", FieldKind.BOOLEAN),
        "total_amount": FilterField("total_amount", FieldKind.DECIMAL),
        "created_at": FilterField("created_at", FieldKind.DATETIME),
    },
    aliases={
        "clienteId": "customer_id",
        "estado": "status",
        "remitoGenerado": "delivery_note_generated",
        "montoTotal": "total_amount",
        "fechaCreacion": "created_at",
    },
)


class OrderRepository(SqlRepository[Order]):
    """
    Repository for Order data access

    Returns Order domain models with their lines.
    """

    model = OrderRow
    domain = Order
    criteria = ORDER_CRITERIA

    def _apply(self, row: OrderRow, record: Order) -> None:
        row.created_at = record.created_at
        row.customer_id = record.customer_id
        row.status = record.status
        row.delivery_note_generated = record.delivery_note_generated
        row.total_amount = record.total_amount

        # Lines keep their row when their id is present, the rest are replaced
        existing = {line.id: line for line in row.lines}
        lines = []
        for line in record.lines:
            line_row = existing.get(line.id) if line.id is not None else None
            if line_row is None:
                line_row = OrderLineRow()
            line_row.product_id = line.product_id
            line_row.quantity = line.quantity
            line_row.unit_price = line.unit_price
            lines.append(line_row)
        row.lines = lines

    def _refresh(self, row: OrderRow) -> None:
        super()._refresh(row)
        for line_row in row.lines:
            self.db.refresh(line_row)

    def find_by_customer_id(self, customer_id: int) -> List[Order]:
        """
        Find all orders of a customer

        Args:
            customer_id: Owning customer ID

        Returns:
            List of orders, oldest first
        """
        query = select(OrderRow).where(OrderRow.customer_id == customer_id).order_by(OrderRow.id)
        return [self._to_domain(row) for row in self.db.scalars(query).all()]

    def find_by_status(self, status: OrderStatus) -> List[Order]:
        """
        Find all orders currently in a status

        Args:
            status: Order status

        Returns:
            List of orders, oldest first
        """
        query = select(OrderRow).where(OrderRow.status == status).order_by(OrderRow.id)
        return [self._to_domain(row) for row in self.db.scalars(query).all()]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get order statistics

        Returns:
            Dict with total orders, revenue (cancelled orders excluded) and
            order count per status
        """
        totals = self.db.execute(
            select(
                func.count(OrderRow.id).label("total_orders"),
                func.coalesce(func.sum(OrderRow.total_amount), 0).label("total_revenue"),
            ).where(OrderRow.status != OrderStatus.CANCELLED)
        ).one()

        by_status_rows = self.db.execute(
            select(OrderRow.status, func.count(OrderRow.id).label("count"))
            .group_by(OrderRow.status)
        ).all()

        by_status = {status.value: 0 for status in OrderStatus}
        for status, count in by_status_rows:
            by_status[OrderStatus(status).value] = count

        return {
            'totals': {
                'total_orders': sum(by_status.values()),
                'active_orders': totals.total_orders,
                'total_revenue': float(totals.total_revenue),
            },
            'by_status': by_status,
        }
