from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.requirement import AttachmentSchema


ConsumptionType = Literal["items_per_pc", "pcs_per_item"]


class TechPackSizeVariantSchema(BaseModel):
    sizes: list[str] = []
    text: str = ""
    attachments: list[AttachmentSchema] = []
    consumption_type: ConsumptionType | None = None
    consumption_val: float | None = None


class TechPackVariantSchema(BaseModel):
    colors: list[str] = []
    text: str = ""
    attachments: list[AttachmentSchema] = []
    size_variants: list[TechPackSizeVariantSchema] | None = Field(None, alias="sizeVariants")
    consumption_type: ConsumptionType | None = None
    consumption_val: float | None = None

    class Config:
        populate_by_name = True


class TechPackItemSchema(BaseModel):
    text: str = ""
    attachments: list[AttachmentSchema] = []
    variants: list[TechPackVariantSchema] | None = None
    consumption_type: ConsumptionType | None = None
    consumption_val: float | None = None


TechPackDocument = dict[str, dict[str, TechPackItemSchema]]


class StyleBase(BaseModel):
    style_number: str
    style_text: str | None = None
    category: str | None = None
    size_type: Literal["letter", "number"] = "letter"
    tech_pack: TechPackDocument = {}


class StyleCreate(StyleBase):
    pass


class StyleRead(StyleBase):
    id: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True


def tech_pack_to_document(tech_pack: TechPackDocument) -> dict:
    """Plain JSON form of a validated tech pack, as stored on the style row."""
    return {
        category: {
            field_name: item.model_dump(by_alias=True, exclude_none=True)
            for field_name, item in fields.items()
        }
        for category, fields in tech_pack.items()
    }
