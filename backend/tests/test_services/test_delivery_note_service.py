"""
Tests for DeliveryNoteService - remito generation and delivery confirmation

Author: Verduleria
Date: 2025-11-03
"""
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

from verduleria.core.exceptions import ConflictError, InvalidStateError, NotFoundError
from verduleria.domain.order import OrderLineInput, OrderSave, OrderStatus
from verduleria.repositories import DeliveryNoteRepository
from verduleria.services import DeliveryNoteService, OrderService


class TestGenerateDeliveryNote:
    """Test remito generation"""

    def test_pending_order_is_invalid_state_and_nothing_persisted(self, delivery_note_service, make_order):
        order = make_order(status=OrderStatus.PENDING)

        with pytest.raises(InvalidStateError) as exc_info:
            delivery_note_service.generate_delivery_note(order.id, 1001)

        assert exc_info.value.extra["status"] == "PENDING"
        assert delivery_note_service.find_all() == []
        assert delivery_note_service.orders.find_by_id(order.id).status == OrderStatus.PENDING

    @pytest.mark.parametrize("status", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_closed_orders_are_invalid_state(self, delivery_note_service, make_order, status):
        order = make_order(status=status)

        with pytest.raises(InvalidStateError):
            delivery_note_service.generate_delivery_note(order.id)

    def test_unknown_order_is_not_found(self, delivery_note_service):
        with pytest.raises(NotFoundError):
            delivery_note_service.generate_delivery_note(999)

    def test_in_preparation_order_moves_to_shipped(self, delivery_note_service, make_order, clock):
        order = make_order(status=OrderStatus.IN_PREPARATION)

        note = delivery_note_service.generate_delivery_note(order.id)

        assert note.id is not None
        assert note.note_number == 1001
        assert note.order_id == order.id
        assert note.total_value == Decimal("32.02")
        assert note.issued_at == clock()
        assert not note.is_delivered

        reloaded = delivery_note_service.orders.find_by_id(order.id)
        assert reloaded.status == OrderStatus.SHIPPED
        assert not reloaded.delivery_note_generated

    def test_shipped_order_keeps_status(self, delivery_note_service, make_order):
        order = make_order(status=OrderStatus.SHIPPED)

        note = delivery_note_service.generate_delivery_note(order.id, note_number=5005)

        assert note.note_number == 5005
        assert delivery_note_service.orders.find_by_id(order.id).status == OrderStatus.SHIPPED

    def test_second_note_is_conflict(self, delivery_note_service, make_order):
        order = make_order(status=OrderStatus.IN_PREPARATION)
        first = delivery_note_service.generate_delivery_note(order.id)

        with pytest.raises(ConflictError) as exc_info:
            delivery_note_service.generate_delivery_note(order.id)

        assert exc_info.value.extra == {"order_id": order.id}
        assert [n.id for n in delivery_note_service.find_all()] == [first.id]

    def test_concurrent_insert_is_conflict(self, delivery_note_service, make_order):
        """A note inserted by another request after the existence check is caught by the unique constraint"""
        order = make_order(status=OrderStatus.SHIPPED)
        first = delivery_note_service.generate_delivery_note(order.id)

        with patch.object(DeliveryNoteRepository, 'find_by_order_id', return_value=None):
            with pytest.raises(ConflictError) as exc_info:
                delivery_note_service.generate_delivery_note(order.id)

        assert exc_info.value.extra == {"order_id": order.id}
        assert [n.id for n in delivery_note_service.find_all()] == [first.id]
        assert delivery_note_service.orders.find_by_id(order.id).status == OrderStatus.SHIPPED

    def test_note_total_matches_order_total(self, delivery_note_service, order_service, customer, products):
        order = order_service.save(OrderSave(
            customer_id=customer.id,
            status=OrderStatus.SHIPPED,
            lines=[OrderLineInput(product_id=products[1].id, quantity=Decimal("1"), unit_price=Decimal("2.005"))],
        ))

        note = delivery_note_service.generate_delivery_note(order.id)

        assert order.total_amount == Decimal("2.01")
        assert note.total_value == order.total_amount

    def test_total_uses_lines_not_stored_total(self, delivery_note_service, order_service, customer, products):
        """The remito total is recomputed from the lines at issuance time"""
        order = order_service.save(OrderSave(
            customer_id=customer.id,
            status=OrderStatus.SHIPPED,
            lines=[
                OrderLineInput(product_id=products[0].id, quantity=Decimal("0.5"), unit_price=Decimal("10.005")),
                OrderLineInput(product_id=products[2].id, quantity=Decimal("2.25"), unit_price=Decimal("850")),
            ],
        ))
        order_service.save(OrderSave(customer_id=customer.id, total_amount=Decimal("1")), order_id=order.id)

        note = delivery_note_service.generate_delivery_note(order.id)

        # 5.0025 + 1912.50 = 1917.5025 -> 1917.50
        assert note.total_value == Decimal("1917.50")

    def test_default_number_is_epoch_millis(self, db_session, make_order, clock):
        order = make_order(status=OrderStatus.SHIPPED)
        service = DeliveryNoteService(db_session, clock=clock)

        note = service.generate_delivery_note(order.id)

        assert note.note_number == int(clock().timestamp() * 1000)

    def test_failure_after_insert_rolls_back(self, delivery_note_service, make_order):
        """A failed status change leaves neither a remito nor a status change"""
        order = make_order(status=OrderStatus.IN_PREPARATION)

        with patch.object(OrderService, 'change_status', side_effect=RuntimeError("db down")):
            with pytest.raises(RuntimeError):
                delivery_note_service.generate_delivery_note(order.id)

        assert delivery_note_service.find_by_order(order.id) is None
        assert delivery_note_service.orders.find_by_id(order.id).status == OrderStatus.IN_PREPARATION


class TestConfirmDelivery:
    """Test delivery confirmation"""

    def test_confirm_marks_order_delivered(self, delivery_note_service, make_order, clock):
        order = make_order(status=OrderStatus.IN_PREPARATION)
        note = delivery_note_service.generate_delivery_note(order.id)

        confirmed = delivery_note_service.confirm_delivery(
            note.id, received_by_name="Marta Gómez", received_by_id_doc="28456123", remarks="Sin faltantes"
        )

        assert confirmed.is_delivered
        assert confirmed.delivered_at == clock()
        assert confirmed.received_by_name == "Marta Gómez"
        assert confirmed.received_by_id_doc == "28456123"
        assert confirmed.remarks == "Sin faltantes"

        reloaded = delivery_note_service.orders.find_by_id(order.id)
        assert reloaded.status == OrderStatus.DELIVERED
        assert reloaded.delivery_note_generated

    def test_confirm_is_idempotent(self, db_session, delivery_note_service, make_order):
        order = make_order(status=OrderStatus.SHIPPED)
        note = delivery_note_service.generate_delivery_note(order.id)
        first = delivery_note_service.confirm_delivery(note.id, received_by_name="Marta Gómez")

        later = DeliveryNoteService(db_session, clock=lambda: datetime(2025, 3, 20, 8, 0))
        second = later.confirm_delivery(note.id, received_by_name="Otra persona")

        assert second.received_by_name == "Marta Gómez"
        assert second.delivered_at == first.delivered_at
        assert later.orders.find_by_id(order.id).status == OrderStatus.DELIVERED

    def test_confirm_unknown_note(self, delivery_note_service):
        with pytest.raises(NotFoundError):
            delivery_note_service.confirm_delivery(31)

    def test_confirm_in_strict_mode(self, db_session, make_order, clock):
        order = make_order(status=OrderStatus.IN_PREPARATION)
        strict = OrderService(db_session, clock=clock, enforce_transitions=True)
        service = DeliveryNoteService(db_session, orders=strict, clock=clock, number_source=lambda: 1)

        note = service.generate_delivery_note(order.id)
        service.confirm_delivery(note.id)

        assert strict.find_by_id(order.id).status == OrderStatus.DELIVERED


class TestQueries:
    """Test remito queries and delete"""

    def test_find_by_criteria(self, delivery_note_service, make_order):
        first = delivery_note_service.generate_delivery_note(make_order(status=OrderStatus.SHIPPED).id)
        second = delivery_note_service.generate_delivery_note(make_order(status=OrderStatus.SHIPPED).id)

        assert [n.id for n in delivery_note_service.find_by_criteria("numeroRemito>1002")] == [second.id]
        assert [n.id for n in delivery_note_service.find_by_criteria("")] == [first.id, second.id]

    def test_delete_frees_the_order(self, delivery_note_service, make_order):
        order = make_order(status=OrderStatus.SHIPPED)
        note = delivery_note_service.generate_delivery_note(order.id)

        delivery_note_service.delete(note.id)

        assert delivery_note_service.find_by_order(order.id) is None
        assert delivery_note_service.generate_delivery_note(order.id).order_id == order.id

    def test_delete_unknown_note(self, delivery_note_service):
        with pytest.raises(NotFoundError):
            delivery_note_service.delete(8)
