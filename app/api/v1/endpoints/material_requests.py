from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.models.models import MaterialRequest
from app.schemas.material_request import (
    ForecastRequestCreate,
    ManualRequestCreate,
    MaterialApprovalCreate,
    MaterialRequestRead,
    MaterialRequestUpdate,
)
from app.services.material_request import (
    approve_material_request,
    create_manual_material_requests,
    create_material_requests_from_forecast,
    delete_material_request,
    list_material_requests,
    update_material_request,
)


router = APIRouter()


@router.get("/", response_model=list[MaterialRequestRead])
def get_material_requests(
    order_id: int | None = None,
    unit_only: bool = False,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> list[MaterialRequest]:
    """All requests, or with ``unit_only`` the history of the configured unit's orders."""
    unit_id = settings.current_unit_id if unit_only else None
    return list_material_requests(db, order_id=order_id, unit_id=unit_id)


@router.post("/from-forecast", response_model=list[MaterialRequestRead], status_code=status.HTTP_201_CREATED)
def create_from_forecast(
    payload: ForecastRequestCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> list[MaterialRequest]:
    """Create one material request per selected requirement line of the order."""
    return create_material_requests_from_forecast(
        db,
        payload,
        default_unit=settings.default_material_unit,
    )


@router.post("/manual", response_model=list[MaterialRequestRead], status_code=status.HTTP_201_CREATED)
def create_manual(payload: ManualRequestCreate, db: Session = Depends(get_db)) -> list[MaterialRequest]:
    return create_manual_material_requests(db, payload)


@router.post("/{request_id}/approve", response_model=MaterialRequestRead)
def approve(
    request_id: int,
    payload: MaterialApprovalCreate,
    db: Session = Depends(get_db),
) -> MaterialRequest:
    return approve_material_request(
        db,
        request_id,
        qty=payload.qty,
        approved_by_name=payload.approved_by_name,
    )


@router.patch("/{request_id}", response_model=MaterialRequestRead)
def update_request(
    request_id: int,
    payload: MaterialRequestUpdate,
    db: Session = Depends(get_db),
) -> MaterialRequest:
    return update_material_request(db, request_id, payload)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_request(request_id: int, db: Session = Depends(get_db)):
    delete_material_request(db, request_id)
    return None
