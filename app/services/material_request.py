from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.requirements.breakdown import selection_total
from app.core.requirements.domain import SizeBreakdownRow
from app.core.requirements.forecast import EmptySelectionError, ForecastSelection, MaterialRequestDraft
from app.models.models import MaterialApproval, MaterialRequest, ProductionOrder
from app.schemas.material_request import (
    ForecastRequestCreate,
    ManualMaterialRow,
    ManualRequestCreate,
    MaterialRequestUpdate,
)
from app.services.order_requirements import breakdown_rows, derive_order_requirements, get_order_or_404


logger = logging.getLogger(__name__)


STATUS_PENDING = "PENDING"
STATUS_PARTIALLY_APPROVED = "PARTIALLY_APPROVED"
STATUS_APPROVED = "APPROVED"
STATUS_REJECTED = "REJECTED"

# Statuses in which the requesting unit may still change a request.
EDITABLE_STATUSES = {STATUS_PENDING, STATUS_PARTIALLY_APPROVED}


def _persist_requests(db: Session, order_id: int, requests: list[MaterialRequest]) -> list[MaterialRequest]:
    """Write all requests in one transaction; nothing is kept on failure."""
    try:
        db.add_all(requests)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to store material requests for order %s", order_id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Material requests could not be saved, please retry",
        )

    for request in requests:
        db.refresh(request)
    logger.info("Created %s material request(s) for order %s", len(requests), order_id)
    return requests


def _draft_to_model(draft: MaterialRequestDraft, created_at: datetime) -> MaterialRequest:
    return MaterialRequest(
        order_id=draft.order_id,
        material_content=draft.description,
        quantity_requested=draft.quantity,
        quantity_approved=0,
        unit=draft.unit,
        attachments=[
            {"name": a.name, "url": a.url, "type": a.type.value} for a in draft.attachments
        ],
        status=STATUS_PENDING,
        created_at=created_at,
    )


def create_material_requests_from_forecast(
    db: Session,
    payload: ForecastRequestCreate,
    default_unit: str = "Nos",
) -> list[MaterialRequest]:
    """Materialize the selected forecast lines of an order as material requests.

    Requirements are derived fresh from the current order and style. Without
    an explicit selection every derived line is requested.
    """
    order = get_order_or_404(db, payload.order_id)
    _, results = derive_order_requirements(db, order)

    selection = ForecastSelection(results)
    if payload.selection is not None:
        try:
            selection.select_only(
                (key.category, key.item_name, key.line_no) for key in payload.selection
            )
        except KeyError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown requirement line: {exc.args[0]}",
            )

    try:
        drafts = selection.to_drafts(
            order_id=order.id,
            unit=payload.unit or default_unit,
            units=dict(payload.units),
        )
    except EmptySelectionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    now = datetime.now(timezone.utc)
    return _persist_requests(db, order.id, [_draft_to_model(d, now) for d in drafts])


def _target_pieces(row: ManualMaterialRow, order_quantity: int, breakdown: Sequence[SizeBreakdownRow]) -> int:
    target = row.target
    if target.mode == "manual":
        return target.manual_qty
    if target.mode == "matrix":
        return selection_total(breakdown, target.rows, target.buckets)
    return order_quantity


def create_manual_material_requests(db: Session, payload: ManualRequestCreate) -> list[MaterialRequest]:
    """Requisition calculator: one request per named row with a positive quantity.

    In ``calculator`` mode the quantity is ``qty_per_pc`` times the row's
    target pieces; in ``direct`` mode ``request_qty`` is used as entered.
    """
    order = get_order_or_404(db, payload.order_id)
    breakdown = breakdown_rows(order)
    now = datetime.now(timezone.utc)

    requests: list[MaterialRequest] = []
    for row in payload.rows:
        if not row.name.strip():
            continue
        if payload.mode == "direct":
            quantity = row.request_qty
        else:
            quantity = row.qty_per_pc * _target_pieces(row, order.quantity, breakdown)
        if quantity <= 0:
            continue

        requests.append(
            MaterialRequest(
                order_id=order.id,
                material_content=row.name.strip(),
                quantity_requested=quantity,
                quantity_approved=0,
                unit=row.unit,
                attachments=[a.model_dump() for a in row.attachments],
                status=STATUS_PENDING,
                created_at=now,
            )
        )

    if not requests:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No material rows with a name and a positive quantity",
        )
    return _persist_requests(db, order.id, requests)


def get_request_or_404(db: Session, request_id: int) -> MaterialRequest:
    request = db.query(MaterialRequest).filter(MaterialRequest.id == request_id).first()
    if request is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="MaterialRequest not found")
    return request


def next_approval_status(quantity_requested: float, approved_before: float, approved_now: float) -> str:
    total = approved_before + approved_now
    if total == 0 and approved_before == 0:
        return STATUS_REJECTED
    if total < quantity_requested:
        return STATUS_PARTIALLY_APPROVED
    return STATUS_APPROVED


def approve_material_request(
    db: Session,
    request_id: int,
    qty: float,
    approved_by_name: str | None = None,
) -> MaterialRequest:
    request = get_request_or_404(db, request_id)

    remaining = request.quantity_requested - request.quantity_approved
    can_approve = request.status == STATUS_PENDING or (
        request.status == STATUS_PARTIALLY_APPROVED and remaining > 0
    )
    if not can_approve:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot approve a request in status '{request.status}'",
        )

    new_status = next_approval_status(request.quantity_requested, request.quantity_approved, qty)
    now = datetime.now(timezone.utc)

    db.add(
        MaterialApproval(
            request_id=request.id,
            qty_approved=qty,
            approved_by_name=approved_by_name,
            created_at=now,
        )
    )
    request.quantity_approved = request.quantity_approved + qty
    request.status = new_status

    db.commit()
    db.refresh(request)
    logger.info("Material request %s approved %s, status %s", request.id, qty, new_status)
    return request


def list_material_requests(
    db: Session,
    order_id: int | None = None,
    unit_id: int | None = None,
) -> list[MaterialRequest]:
    """Requests newest first, optionally limited to one order or to one unit's orders."""
    query = db.query(MaterialRequest)
    if order_id is not None:
        query = query.filter(MaterialRequest.order_id == order_id)
    if unit_id is not None:
        query = query.join(ProductionOrder, MaterialRequest.order_id == ProductionOrder.id).filter(
            ProductionOrder.unit_id == unit_id
        )
    return query.order_by(MaterialRequest.created_at.desc(), MaterialRequest.id.desc()).all()


def update_material_request(db: Session, request_id: int, payload: MaterialRequestUpdate) -> MaterialRequest:
    """Edit a request that is still open.

    Only pending or partially approved requests can change, and the requested
    quantity may not drop below what has already been approved.
    """
    request = get_request_or_404(db, request_id)
    if request.status not in EDITABLE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot edit a request in status '{request.status}'",
        )

    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}

    if "quantity_requested" in data and data["quantity_requested"] < request.quantity_approved:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Requested quantity cannot be below the approved {request.quantity_approved}",
        )

    if "material_content" in data:
        request.material_content = data["material_content"].strip()
    if "quantity_requested" in data:
        request.quantity_requested = data["quantity_requested"]
    if "unit" in data:
        request.unit = data["unit"]
    if "attachments" in data:
        request.attachments = data["attachments"]

    if request.status == STATUS_PARTIALLY_APPROVED and request.quantity_approved >= request.quantity_requested:
        request.status = STATUS_APPROVED

    db.commit()
    db.refresh(request)
    logger.info("Material request %s updated, status %s", request.id, request.status)
    return request


def delete_material_request(db: Session, request_id: int) -> None:
    request = get_request_or_404(db, request_id)
    if request.status != STATUS_PENDING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete a request in status '{request.status}'",
        )

    db.delete(request)
    db.commit()
    logger.info("Material request %s deleted", request_id)
