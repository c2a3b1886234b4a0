"""
Customers API Endpoints
Customer management and queries

Author: Verduleria
Date: 2025-11-03
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from verduleria.api.deps import get_customer_service
from verduleria.domain.customer import CustomerCreate, CustomerUpdate
from verduleria.services import CustomerService

router = APIRouter()


@router.get("/")
def get_customers(
    search: Optional[str] = Query(None, description="Criteria filter, e.g. name:perez,address:centro"),
    service: CustomerService = Depends(get_customer_service),
):
    """Get all customers, optionally narrowed by a criteria filter"""
    customers = service.find_by_criteria(search)
    return {
        "status": "success",
        "count": len(customers),
        "data": [customer.to_dict() for customer in customers]
    }


@router.get("/{customer_id}")
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    return {"status": "success", "data": service.find_by_id(customer_id).to_dict()}


@router.post("/", status_code=201)
def create_customer(payload: CustomerCreate, service: CustomerService = Depends(get_customer_service)):
    return {"status": "success", "data": service.create(payload).to_dict()}


@router.put("/{customer_id}")
def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    return {"status": "success", "data": service.update(customer_id, payload).to_dict()}


@router.delete("/{customer_id}")
def delete_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    service.delete(customer_id)
    return {"status": "success", "message": f"Cliente {customer_id} eliminado"}
