"""
Product Domain Model

Represents a product sold by the shop (fruit, vegetables, by unit or weight).

Author: Verduleria
Date: 2025-11-03
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from decimal import Decimal


class Product(BaseModel):
    """
    Product domain model

    Fields:
        id: Internal product ID (primary key)
        name: Product name
        unit: Unit of measure (kg, unidad, atado, cajón...)
        sale_price: Current price per unit of measure
    """

    id: Optional[int] = Field(None, description="Internal product ID")
    name: str = Field(..., description="Product name")
    unit: str = Field(..., description="Unit of measure")
    sale_price: Decimal = Field(..., description="Sale price per unit", gt=0)

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        data['sale_price'] = float(data['sale_price'])
        return data


class ProductCreate(BaseModel):
    """Schema for creating a new product"""
    name: str = Field(..., min_length=1)
    unit: str = Field(..., min_length=1)
    sale_price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)


class ProductUpdate(BaseModel):
    """Schema for updating an existing product"""
    name: Optional[str] = Field(None, min_length=1)
    unit: Optional[str] = Field(None, min_length=1)
    sale_price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=3)
