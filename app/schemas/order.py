from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class SizeBreakdownRowSchema(BaseModel):
    color: str
    s: int = Field(0, ge=0)
    m: int = Field(0, ge=0)
    l: int = Field(0, ge=0)
    xl: int = Field(0, ge=0)
    xxl: int = Field(0, ge=0)
    xxxl: int = Field(0, ge=0)


class OrderRead(BaseModel):
    id: int
    order_no: str
    unit_id: int
    style_number: str
    quantity: int
    size_breakdown: list[SizeBreakdownRowSchema] | None = None
    size_format: Literal["standard", "numeric"] = "standard"
    description: str | None = None
    target_delivery_date: date | None = None
    status: str
    box_count: int | None = None

    class Config:
        from_attributes = True


class OrderSummary(BaseModel):
    id: int
    order_no: str
    formatted_order_no: str
    style_number: str
    quantity: int
    status: str
    target_delivery_date: date | None = None
    size_format: Literal["standard", "numeric"] = "standard"
