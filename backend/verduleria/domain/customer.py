"""
Customer Domain Models

Author: Verduleria
Date: 2025-11-03
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class Customer(BaseModel):
    """
    Customer domain model - a shop customer that places orders

    Fields:
        id: Internal customer ID
        name: Legal / display name (razón social)
        phone: Contact phone
        address: Delivery address
        email: Contact email
        tax_id: CUIT or DNI
    """

    id: Optional[int] = Field(None, description="Customer ID")
    name: str = Field(..., description="Legal or display name")
    phone: Optional[str] = Field(None, description="Contact phone")
    address: str = Field(..., description="Delivery address")
    email: Optional[str] = Field(None, description="Contact email")
    tax_id: str = Field(..., description="CUIT / DNI")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        return self.model_dump()


class CustomerCreate(BaseModel):
    """Schema for creating a new customer"""
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    address: str = Field(..., min_length=1)
    email: Optional[str] = None
    tax_id: str = Field(..., min_length=1)


class CustomerUpdate(BaseModel):
    """Schema for updating an existing customer"""
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    address: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    tax_id: Optional[str] = Field(None, min_length=1)
