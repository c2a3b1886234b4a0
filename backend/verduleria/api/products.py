"""
Products API Endpoints
Product catalog management and queries

Author: Verduleria
Date: 2025-11-03
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from verduleria.api.deps import get_product_service
from verduleria.domain.product import ProductCreate, ProductUpdate
from verduleria.services import ProductService

router = APIRouter()


@router.get("/")
def get_products(
    search: Optional[str] = Query(None, description="Criteria filter, e.g. name:lechuga,sale_price<500"),
    service: ProductService = Depends(get_product_service),
):
    """
    Get all products with an optional criteria filter

    Examples:
        ?search=nombre:lechuga
        ?search=sale_price>100,sale_price<300
    """
    products = service.find_by_criteria(search)
    return {
        "status": "success",
        "count": len(products),
        "data": [product.to_dict() for product in products]
    }


@router.get("/{product_id}")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    return {"status": "success", "data": service.find_by_id(product_id).to_dict()}


@router.post("/", status_code=201)
def create_product(payload: ProductCreate, service: ProductService = Depends(get_product_service)):
    return {"status": "success", "data": service.create(payload).to_dict()}


@router.put("/{product_id}")
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    return {"status": "success", "data": service.update(product_id, payload).to_dict()}


@router.delete("/{product_id}")
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete(product_id)
    return {"status": "success", "message": f"Producto {product_id} eliminado"}
