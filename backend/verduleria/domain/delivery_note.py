"""
Delivery Note (remito) Domain Models

Author: Verduleria
Date: 2025-11-03
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal


class DeliveryNote(BaseModel):
    """
    Delivery note domain model - the remito issued once per order

    Fields:
        id: Internal delivery note ID
        note_number: Remito number printed on the document
        order_id: The order it was issued against (one note per order)
        total_value: Rounded sum of the order's line subtotals at issuance
        issued_at: Issuance timestamp

        # Filled when the delivery is confirmed
        received_by_name: Who received the goods
        received_by_id_doc: Receiver's identity document
        remarks: Free-text remarks from the delivery
        delivered_at: When the delivery was confirmed
    """

    id: Optional[int] = Field(None, description="Delivery note ID")
    note_number: int = Field(..., description="Delivery note number")
    order_id: int = Field(..., description="Order ID")
    total_value: Decimal = Field(..., description="Total value", ge=0)
    issued_at: datetime = Field(..., description="Issuance timestamp")

    received_by_name: Optional[str] = Field(None, description="Receiver name")
    received_by_id_doc: Optional[str] = Field(None, description="Receiver identity document")
    remarks: Optional[str] = Field(None, description="Delivery remarks")
    delivered_at: Optional[datetime] = Field(None, description="Delivery confirmation timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_delivered(self) -> bool:
        return self.delivered_at is not None

    def to_dict(self) -> dict:
        data = self.model_dump()
        data['total_value'] = float(self.total_value)
        data['issued_at'] = self.issued_at.isoformat()
        if self.delivered_at:
            data['delivered_at'] = self.delivered_at.isoformat()
        data['is_delivered'] = self.is_delivered
        return data


class DeliveryNoteCreate(BaseModel):
    """Schema for generating a delivery note"""
    order_id: int
    note_number: Optional[int] = Field(None, ge=1)


class DeliveryConfirmation(BaseModel):
    """Receiver details captured when the delivery is confirmed"""
    received_by_name: Optional[str] = None
    received_by_id_doc: Optional[str] = None
    remarks: Optional[str] = None
