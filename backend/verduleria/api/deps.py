"""
FastAPI dependencies: one service instance per request, on the request's session
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from verduleria.core.database import get_db
from verduleria.services import CustomerService, DeliveryNoteService, OrderService, ProductService


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    return CustomerService(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_delivery_note_service(
    db: Session = Depends(get_db),
    orders: OrderService = Depends(get_order_service),
) -> DeliveryNoteService:
    return DeliveryNoteService(db, orders=orders)
