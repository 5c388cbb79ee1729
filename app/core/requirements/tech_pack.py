"""Conversion of stored tech-pack documents into the immutable domain model.

A tech pack is stored as ``{category: {field: item}}`` where each item,
color variant and size variant uses the keys ``text``, ``attachments``,
``consumption_type`` and ``consumption_val``; items may carry ``variants``
(with ``colors``) and variants may carry ``sizeVariants`` (with ``sizes``).
Mapping order is significant and is kept as declared.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple

from app.core.requirements.domain import (
    Attachment,
    AttachmentType,
    ColorVariant,
    ConsumptionFormula,
    ConsumptionSpec,
    SizeVariant,
    TechPack,
    TechPackCategory,
    TechPackItem,
)


def _attachments(raw: Optional[Sequence[Mapping[str, Any]]]) -> Tuple[Attachment, ...]:
    result = []
    for entry in raw or ():
        kind = entry.get("type") or AttachmentType.DOCUMENT.value
        result.append(
            Attachment(
                name=str(entry.get("name", "")),
                url=str(entry.get("url", "")),
                type=AttachmentType(kind),
            )
        )
    return tuple(result)


def _consumption(raw: Mapping[str, Any]) -> ConsumptionSpec:
    # An empty consumption_type means "not declared"; a null value likewise.
    formula_raw = raw.get("consumption_type") or None
    factor_raw = raw.get("consumption_val")
    return ConsumptionSpec(
        formula=ConsumptionFormula(formula_raw) if formula_raw is not None else None,
        factor=float(factor_raw) if factor_raw is not None else None,
    )


def _size_variant(raw: Mapping[str, Any]) -> SizeVariant:
    return SizeVariant(
        sizes=tuple(raw.get("sizes") or ()),
        reference_text=raw.get("text") or "",
        attachments=_attachments(raw.get("attachments")),
        consumption=_consumption(raw),
    )


def _color_variant(raw: Mapping[str, Any]) -> ColorVariant:
    size_variants_raw = raw.get("sizeVariants")
    return ColorVariant(
        colors=tuple(raw.get("colors") or ()),
        reference_text=raw.get("text") or "",
        attachments=_attachments(raw.get("attachments")),
        consumption=_consumption(raw),
        size_variants=(
            tuple(_size_variant(sv) for sv in size_variants_raw)
            if size_variants_raw is not None
            else None
        ),
    )


def parse_item(field_name: str, raw: Mapping[str, Any]) -> TechPackItem:
    variants_raw = raw.get("variants")
    return TechPackItem(
        field_name=field_name,
        reference_text=raw.get("text") or "",
        attachments=_attachments(raw.get("attachments")),
        consumption=_consumption(raw),
        variants=(
            tuple(_color_variant(v) for v in variants_raw)
            if variants_raw is not None
            else None
        ),
    )


def parse_tech_pack(raw: Optional[Mapping[str, Mapping[str, Mapping[str, Any]]]]) -> TechPack:
    """Build a :class:`TechPack` from its stored JSON document.

    ``None`` or an empty mapping gives an empty tech pack.
    """
    if not raw:
        return TechPack()

    categories = []
    for category_name, fields in raw.items():
        items = tuple(
            parse_item(field_name, item_raw)
            for field_name, item_raw in (fields or {}).items()
            if item_raw is not None
        )
        categories.append(TechPackCategory(name=category_name, items=items))
    return TechPack(categories=tuple(categories))
