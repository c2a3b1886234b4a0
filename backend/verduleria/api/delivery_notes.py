"""
Delivery Notes (remitos) API Endpoints
Remito generation, delivery confirmation and queries

Author: Verduleria
Date: 2025-11-03
"""
from fastapi import APIRouter, Body, Depends, Query
from typing import Optional

from verduleria.api.deps import get_delivery_note_service
from verduleria.domain.delivery_note import DeliveryConfirmation, DeliveryNoteCreate
from verduleria.services import DeliveryNoteService

router = APIRouter()


@router.get("/")
def get_delivery_notes(
    search: Optional[str] = Query(None, description="Criteria filter, e.g. note_number:1001"),
    order_id: Optional[int] = Query(None, description="Remito of this order"),
    service: DeliveryNoteService = Depends(get_delivery_note_service),
):
    """Get all delivery notes, the note of one order, or a filtered list"""
    if order_id is not None:
        note = service.find_by_order(order_id)
        notes = [note] if note is not None else []
    else:
        notes = service.find_by_criteria(search)

    return {
        "status": "success",
        "count": len(notes),
        "data": [note.to_dict() for note in notes]
    }


@router.get("/{note_id}")
def get_delivery_note(note_id: int, service: DeliveryNoteService = Depends(get_delivery_note_service)):
    return {"status": "success", "data": service.find_by_id(note_id).to_dict()}


@router.post("/", status_code=201)
def generate_delivery_note(
    payload: DeliveryNoteCreate,
    service: DeliveryNoteService = Depends(get_delivery_note_service),
):
    """
    Generate the remito of an order

    The order must be IN_PREPARATION or SHIPPED and must not have a remito yet.
    """
    note = service.generate_delivery_note(payload.order_id, payload.note_number)
    return {"status": "success", "data": note.to_dict()}


@router.post("/{note_id}/confirm")
def confirm_delivery(
    note_id: int,
    payload: Optional[DeliveryConfirmation] = Body(None),
    service: DeliveryNoteService = Depends(get_delivery_note_service),
):
    """Confirm the delivery of a remito; the order becomes DELIVERED"""
    payload = payload or DeliveryConfirmation()
    note = service.confirm_delivery(
        note_id,
        received_by_name=payload.received_by_name,
        received_by_id_doc=payload.received_by_id_doc,
        remarks=payload.remarks,
    )
    return {"status": "success", "data": note.to_dict()}


@router.delete("/{note_id}")
def delete_delivery_note(note_id: int, service: DeliveryNoteService = Depends(get_delivery_note_service)):
    service.delete(note_id)
    return {"status": "success", "message": f"Remito {note_id} eliminado"}
