from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.core.requirements.domain import SizeBucket
from app.schemas.requirement import AttachmentSchema


MaterialUnit = Literal["Nos", "Meters", "Kgs", "Rolls"]


class MaterialApprovalRead(BaseModel):
    id: int
    qty_approved: float
    approved_by_name: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class MaterialRequestRead(BaseModel):
    id: int
    order_id: int
    material_content: str
    quantity_requested: float
    quantity_approved: float
    unit: str
    attachments: list[AttachmentSchema] = []
    status: str
    created_at: datetime
    approvals: list[MaterialApprovalRead] = []

    class Config:
        from_attributes = True


class ScopeKeySchema(BaseModel):
    category: str
    item_name: str
    line_no: int = Field(..., ge=0)


class ForecastRequestCreate(BaseModel):
    order_id: int
    unit: MaterialUnit | None = None
    units: dict[str, MaterialUnit] = Field(default_factory=dict)
    # None keeps every derived line selected.
    selection: list[ScopeKeySchema] | None = None


class TargetScope(BaseModel):
    mode: Literal["full", "matrix", "manual"] = "full"
    rows: list[int] = Field(default_factory=list)
    buckets: list[SizeBucket] = Field(default_factory=list)
    manual_qty: int = Field(0, ge=0)


class ManualMaterialRow(BaseModel):
    name: str = ""
    qty_per_pc: float = 0
    target: TargetScope = Field(default_factory=TargetScope)
    request_qty: float = 0
    unit: MaterialUnit = "Nos"
    attachments: list[AttachmentSchema] = []


class ManualRequestCreate(BaseModel):
    order_id: int
    mode: Literal["calculator", "direct"] = "calculator"
    rows: list[ManualMaterialRow]


class MaterialApprovalCreate(BaseModel):
    qty: float = Field(..., ge=0)
    approved_by_name: str = "Materials Dept"


class MaterialRequestUpdate(BaseModel):
    material_content: str | None = Field(None, min_length=1)
    quantity_requested: float | None = Field(None, gt=0)
    unit: MaterialUnit | None = None
    attachments: list[AttachmentSchema] | None = None
