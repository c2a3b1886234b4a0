"""
Pytest fixtures and configuration for Verduleria Backend tests

This file provides shared fixtures that can be used across all test modules.
Every test gets its own in-memory SQLite database with the full schema.

Author: Verduleria
Date: 2025-11-03
"""
import pytest
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from verduleria.core.database import build_engine, init_db
from verduleria.domain.order import OrderLineInput, OrderSave, OrderStatus
from verduleria.services import CustomerService, DeliveryNoteService, OrderService, ProductService
from verduleria.domain.customer import CustomerCreate
from verduleria.domain.product import ProductCreate


FIXED_NOW = datetime(2025, 3, 14, 10, 30, 0)


@pytest.fixture(scope="function")
def engine():
    """
    Provides an in-memory SQLite engine with all tables created

    Scope: function (fresh database per test)
    StaticPool keeps the single connection so TestClient threads see the same data
    """
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """
    Provides a SQLAlchemy session for each test

    Automatically closes session after test
    """
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def clock():
    """A clock frozen at FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
def order_service(db_session, clock):
    return OrderService(db_session, clock=clock, enforce_transitions=False)


@pytest.fixture
def delivery_note_service(db_session, order_service, clock):
    numbers = iter(range(1001, 2000))
    return DeliveryNoteService(
        db_session,
        orders=order_service,
        clock=clock,
        number_source=lambda: next(numbers),
    )


@pytest.fixture
def customer(db_session):
    """A persisted customer"""
    return CustomerService(db_session).create(CustomerCreate(
        name="Almacén Don Pedro",
        phone="351-4567890",
        address="Av. Colón 1234",
        email="donpedro@example.com",
        tax_id="20-12345678-9",
    ))


@pytest.fixture
def products(db_session):
    """Persisted products: tomate (kg), lechuga (unidad), papa (kg)"""
    service = ProductService(db_session)
    return [
        service.create(ProductCreate(name="Tomate perita", unit="kg", sale_price=Decimal("10.005"))),
        service.create(ProductCreate(name="Lechuga criolla", unit="unidad", sale_price=Decimal("1.00"))),
        service.create(ProductCreate(name="Papa negra", unit="kg", sale_price=Decimal("850.00"))),
    ]


@pytest.fixture
def make_order(order_service, customer, products):
    """
    Factory for persisted orders

    Default lines: 3 x 10.005 + 1 x 2.00 = 32.015 -> 32.02
    """
    def _make(status=OrderStatus.PENDING, lines=None):
        if lines is None:
            lines = [
                OrderLineInput(product_id=products[0].id, quantity=Decimal("3"), unit_price=Decimal("10.005")),
                OrderLineInput(product_id=products[1].id, quantity=Decimal("1"), unit_price=Decimal("2.00")),
            ]
        return order_service.save(OrderSave(customer_id=customer.id, status=status, lines=lines))
    return _make
