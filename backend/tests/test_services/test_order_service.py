"""
Tests for OrderService - order save, status changes, delete and queries

Author: Verduleria
Date: 2025-11-03
"""
import pytest
from decimal import Decimal

from pydantic import ValidationError

from verduleria.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from verduleria.domain.order import OrderLineInput, OrderSave, OrderStatus
from verduleria.services import CustomerService, OrderService, ProductService


class TestSave:
    """Test order create / update"""

    def test_total_is_rounded_half_up(self, make_order, clock):
        """3 x 10.005 + 1 x 2.00 = 32.015 -> 32.02"""
        order = make_order()

        assert order.total_amount == Decimal("32.02")
        assert order.line_count == 2
        assert order.status == OrderStatus.PENDING
        assert order.created_at == clock()
        assert not order.delivery_note_generated

    def test_supplied_total_is_overwritten_when_lines_present(self, order_service, customer, products):
        order = order_service.save(OrderSave(
            customer_id=customer.id,
            total_amount=Decimal("1"),
            lines=[OrderLineInput(product_id=products[2].id, quantity=Decimal("1.5"), unit_price=Decimal("850"))],
        ))

        assert order.total_amount == Decimal("1275.00")

    def test_total_kept_without_lines(self, order_service, customer):
        order = order_service.save(OrderSave(customer_id=customer.id, total_amount=Decimal("99.90")))

        assert order.total_amount == Decimal("99.90")
        assert order.lines == []

    def test_update_replaces_lines_and_recomputes(self, order_service, make_order, products, customer):
        order = make_order()

        updated = order_service.save(
            OrderSave(
                customer_id=customer.id,
                lines=[OrderLineInput(product_id=products[1].id, quantity=Decimal("4"), unit_price=Decimal("1.25"))],
            ),
            order_id=order.id,
        )

        assert updated.id == order.id
        assert updated.total_amount == Decimal("5.00")
        assert [line.product_id for line in updated.lines] == [products[1].id]
        assert updated.created_at == order.created_at

    def test_update_without_lines_keeps_them(self, order_service, make_order, customer):
        order = make_order()

        updated = order_service.save(
            OrderSave(customer_id=customer.id, status=OrderStatus.IN_PREPARATION),
            order_id=order.id,
        )

        assert updated.status == OrderStatus.IN_PREPARATION
        assert [line.id for line in updated.lines] == [line.id for line in order.lines]
        assert updated.total_amount == Decimal("32.02")

    def test_missing_customer_is_invalid_argument(self, order_service):
        with pytest.raises(InvalidArgumentError):
            order_service.save(OrderSave())

    def test_unknown_customer_is_invalid_argument(self, order_service):
        with pytest.raises(InvalidArgumentError) as exc_info:
            order_service.save(OrderSave(customer_id=404))

        assert exc_info.value.extra == {"customer_id": 404}
        assert order_service.find_all() == []

    def test_unknown_product_is_not_found_and_nothing_saved(self, order_service, customer):
        with pytest.raises(NotFoundError) as exc_info:
            order_service.save(OrderSave(
                customer_id=customer.id,
                lines=[OrderLineInput(product_id=777, quantity=Decimal("1"), unit_price=Decimal("1"))],
            ))

        assert exc_info.value.extra == {"product_id": 777}
        assert order_service.find_all() == []

    @pytest.mark.parametrize("quantity,unit_price", [("0.0004", "1"), ("1", "2.0049")])
    def test_line_values_beyond_three_decimals_are_rejected(self, quantity, unit_price):
        with pytest.raises(ValidationError):
            OrderLineInput(product_id=1, quantity=Decimal(quantity), unit_price=Decimal(unit_price))

    def test_supplied_total_beyond_cents_is_rejected(self, customer):
        with pytest.raises(ValidationError):
            OrderSave(customer_id=customer.id, total_amount=Decimal("10.005"))

    def test_update_unknown_order_is_not_found(self, order_service, customer):
        with pytest.raises(NotFoundError):
            order_service.save(OrderSave(customer_id=customer.id), order_id=123)


class TestChangeStatus:
    """Test status changes"""

    def test_status_is_overwritten_by_default(self, order_service, make_order):
        order = make_order()

        changed = order_service.change_status(order.id, OrderStatus.SHIPPED)

        assert changed.status == OrderStatus.SHIPPED
        assert not changed.delivery_note_generated

    def test_delivered_sets_delivery_note_flag(self, order_service, make_order):
        order = make_order(status=OrderStatus.SHIPPED)

        changed = order_service.change_status(order.id, OrderStatus.DELIVERED)

        assert changed.status == OrderStatus.DELIVERED
        assert changed.delivery_note_generated
        assert order_service.find_by_id(order.id).delivery_note_generated

    def test_change_status_keeps_lines_and_total(self, order_service, make_order):
        order = make_order()

        changed = order_service.change_status(order.id, OrderStatus.CANCELLED)

        assert changed.total_amount == order.total_amount
        assert [line.id for line in changed.lines] == [line.id for line in order.lines]

    def test_unknown_order(self, order_service):
        with pytest.raises(NotFoundError):
            order_service.change_status(42, OrderStatus.SHIPPED)

    def test_strict_mode_rejects_skipping_states(self, db_session, clock, make_order):
        order = make_order()
        strict = OrderService(db_session, clock=clock, enforce_transitions=True)

        with pytest.raises(InvalidStateError) as exc_info:
            strict.change_status(order.id, OrderStatus.DELIVERED)

        assert exc_info.value.extra["target"] == "DELIVERED"
        assert exc_info.value.extra["terminal"] is False
        assert strict.find_by_id(order.id).status == OrderStatus.PENDING

    def test_strict_mode_allows_forward_path(self, db_session, clock, make_order):
        order = make_order()
        strict = OrderService(db_session, clock=clock, enforce_transitions=True)

        for status in (OrderStatus.IN_PREPARATION, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            order = strict.change_status(order.id, status)

        assert order.status == OrderStatus.DELIVERED
        with pytest.raises(InvalidStateError):
            strict.change_status(order.id, OrderStatus.CANCELLED)


    def test_strict_mode_reports_closed_orders(self, db_session, clock, make_order):
        order = make_order(status=OrderStatus.CANCELLED)
        strict = OrderService(db_session, clock=clock, enforce_transitions=True)

        with pytest.raises(InvalidStateError) as exc_info:
            strict.change_status(order.id, OrderStatus.PENDING)

        assert exc_info.value.extra["terminal"] is True
        assert "cerrado" in exc_info.value.detail
        assert strict.change_status(order.id, OrderStatus.CANCELLED).status == OrderStatus.CANCELLED


class TestDeleteAndQueries:
    """Test delete and listing operations"""

    def test_delete_removes_order(self, order_service, make_order):
        order = make_order()

        order_service.delete(order.id)

        with pytest.raises(NotFoundError):
            order_service.find_by_id(order.id)

    def test_delete_unknown_order(self, order_service):
        with pytest.raises(NotFoundError):
            order_service.delete(5)

    def test_delete_order_with_delivery_note_conflicts(self, order_service, delivery_note_service, make_order):
        order = make_order(status=OrderStatus.IN_PREPARATION)
        delivery_note_service.generate_delivery_note(order.id)

        with pytest.raises(ConflictError):
            order_service.delete(order.id)

        assert order_service.find_by_id(order.id).status == OrderStatus.SHIPPED

    def test_customer_with_orders_cannot_be_deleted(self, db_session, make_order, customer):
        make_order()

        with pytest.raises(ConflictError):
            CustomerService(db_session).delete(customer.id)

    def test_product_in_order_cannot_be_deleted(self, db_session, make_order, products):
        make_order()
        service = ProductService(db_session)

        with pytest.raises(ConflictError):
            service.delete(products[0].id)
        service.delete(products[2].id)

        assert [p.id for p in service.find_all()] == [products[0].id, products[1].id]

    def test_search_by_customer_status_and_criteria(self, order_service, make_order, customer):
        pending = make_order()
        shipped = make_order(status=OrderStatus.SHIPPED)

        assert [o.id for o in order_service.search(customer_id=customer.id)] == [pending.id, shipped.id]
        assert [o.id for o in order_service.search(status=OrderStatus.SHIPPED)] == [shipped.id]
        assert [o.id for o in order_service.search("estado:pending", customer_id=customer.id)] == [pending.id]
        assert [o.id for o in order_service.search("montoTotal>32")] == [pending.id, shipped.id]
        assert order_service.search(customer_id=customer.id, status=OrderStatus.DELIVERED) == []

    def test_get_stats(self, order_service, make_order):
        make_order()
        make_order(status=OrderStatus.CANCELLED)

        stats = order_service.get_stats()

        assert stats['totals']['total_orders'] == 2
        assert stats['totals']['total_revenue'] == 32.02
        assert stats['by_status']['CANCELLED'] == 1
