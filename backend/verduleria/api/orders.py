"""
Orders API Endpoints
Order lifecycle: save, status changes, queries and statistics

Author: Verduleria
Date: 2025-11-03
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from verduleria.api.deps import get_order_service
from verduleria.domain.order import OrderSave, OrderStatus, OrderStatusUpdate
from verduleria.services import OrderService

router = APIRouter()


@router.get("/")
def get_orders(
    search: Optional[str] = Query(None, description="Criteria filter, e.g. status:SHIPPED,total_amount>1000"),
    customer_id: Optional[int] = Query(None, description="Only orders of this customer"),
    status: Optional[OrderStatus] = Query(None, description="Only orders in this status"),
    service: OrderService = Depends(get_order_service),
):
    """
    Get all orders with optional filters

    Returns orders with their lines
    """
    orders = service.search(search=search, customer_id=customer_id, status=status)
    return {
        "status": "success",
        "count": len(orders),
        "data": [order.to_dict() for order in orders]
    }


@router.get("/stats")
def get_order_stats(service: OrderService = Depends(get_order_service)):
    """
    Get order statistics

    Returns:
    - Total orders and revenue (cancelled excluded)
    - Orders by status
    """
    return {"status": "success", "data": service.get_stats()}


@router.get("/{order_id}")
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return {"status": "success", "data": service.find_by_id(order_id).to_dict()}


@router.post("/", status_code=201)
def create_order(payload: OrderSave, service: OrderService = Depends(get_order_service)):
    """Create an order; the total is computed from the lines"""
    return {"status": "success", "data": service.save(payload).to_dict()}


@router.put("/{order_id}")
def update_order(order_id: int, payload: OrderSave, service: OrderService = Depends(get_order_service)):
    """Update an order; supplied lines replace the existing ones"""
    return {"status": "success", "data": service.save(payload, order_id=order_id).to_dict()}


@router.patch("/{order_id}/status")
def change_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    return {"status": "success", "data": service.change_status(order_id, payload.status).to_dict()}


@router.delete("/{order_id}")
def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    service.delete(order_id)
    return {"status": "success", "message": f"Pedido {order_id} eliminado"}
