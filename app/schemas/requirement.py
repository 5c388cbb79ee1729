from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from app.core.requirements.domain import SizeBucket
from app.schemas.order import OrderRead


class AttachmentSchema(BaseModel):
    name: str
    url: str
    type: Literal["image", "document"] = "document"


class RequirementLineSchema(BaseModel):
    line_no: int
    scope_label: str
    matched_piece_count: int
    calculated_quantity: float
    reference_text: str = ""
    attachments: list[AttachmentSchema] = []


class RequirementResultSchema(BaseModel):
    category: str
    item_name: str
    total: float
    lines: list[RequirementLineSchema]


class OrderRequirementsResponse(BaseModel):
    order_id: int
    style_number: str | None
    style_found: bool
    size_format: Literal["standard", "numeric"]
    items: list[RequirementResultSchema]


class SelectionTotalRequest(BaseModel):
    rows: list[int] = Field(default_factory=list)
    buckets: list[SizeBucket] = Field(default_factory=list)


class SelectionTotalResponse(BaseModel):
    total: int
    label: str


class JobSheetRow(BaseModel):
    color: str
    quantities: list[int]
    total: int


class JobSheetResponse(BaseModel):
    formatted_order_no: str
    order: OrderRead
    size_headers: list[str]
    rows: list[JobSheetRow]
    column_totals: list[int]
    grand_total: int
    requirements: list[RequirementResultSchema]
