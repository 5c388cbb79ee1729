from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.core.requirements.domain import SizeFormat
from app.models.models import ProductionOrder
from app.schemas.order import OrderRead, OrderSummary
from app.schemas.requirement import (
    JobSheetResponse,
    OrderRequirementsResponse,
    SelectionTotalRequest,
    SelectionTotalResponse,
)
from app.services.order_requirements import (
    build_job_sheet,
    compute_order_requirements,
    compute_selection_total,
    get_order_or_404,
)
from app.services.unit_orders import list_unit_orders


router = APIRouter()


@router.get("/", response_model=list[OrderSummary])
def list_orders(
    tab: Literal["active", "history"] = "active",
    search: str | None = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> list[OrderSummary]:
    return list_unit_orders(db, unit_id=settings.current_unit_id, tab=tab, search=search)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)) -> ProductionOrder:
    return get_order_or_404(db, order_id)


@router.get("/{order_id}/requirements", response_model=OrderRequirementsResponse)
def get_order_requirements(order_id: int, db: Session = Depends(get_db)) -> OrderRequirementsResponse:
    """Material requirements derived from the order breakdown and its style's tech pack.

    An order whose style has no tech pack returns an empty ``items`` list.
    """
    return compute_order_requirements(db, order_id)


@router.get("/{order_id}/job-sheet", response_model=JobSheetResponse)
def get_order_job_sheet(
    order_id: int,
    size_format: SizeFormat | None = Query(None, description="Header labels only"),
    db: Session = Depends(get_db),
) -> JobSheetResponse:
    return build_job_sheet(db, order_id, size_format=size_format)


@router.post("/{order_id}/selection-total", response_model=SelectionTotalResponse)
def post_selection_total(
    order_id: int,
    payload: SelectionTotalRequest,
    db: Session = Depends(get_db),
) -> SelectionTotalResponse:
    return compute_selection_total(db, order_id, payload.rows, payload.buckets)
