from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.requirements.breakdown import (
    column_total,
    grand_total,
    labels_for,
    row_total,
    selection_total,
)
from app.core.requirements.domain import (
    SIZE_BUCKETS,
    OrderBreakdown,
    RequirementResult,
    SizeBreakdownRow,
    SizeBucket,
    SizeFormat,
)
from app.core.requirements.engine import derive_requirements
from app.core.requirements.tech_pack import parse_tech_pack
from app.models.models import ProductionOrder
from app.schemas.order import OrderRead
from app.schemas.requirement import (
    AttachmentSchema,
    JobSheetResponse,
    JobSheetRow,
    OrderRequirementsResponse,
    RequirementLineSchema,
    RequirementResultSchema,
    SelectionTotalResponse,
)
from app.services.style_lookup import fetch_style_by_reference
from app.services.unit_orders import format_order_number


logger = logging.getLogger(__name__)


def get_order_or_404(db: Session, order_id: int) -> ProductionOrder:
    order = db.query(ProductionOrder).filter(ProductionOrder.id == order_id).first()
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


def breakdown_rows(order: ProductionOrder) -> tuple[SizeBreakdownRow, ...]:
    rows = []
    for raw in order.size_breakdown or []:
        rows.append(
            SizeBreakdownRow(
                color=str(raw.get("color", "")),
                quantities={bucket: int(raw.get(bucket.value) or 0) for bucket in SIZE_BUCKETS},
            )
        )
    return tuple(rows)


def order_breakdown(order: ProductionOrder) -> OrderBreakdown:
    return OrderBreakdown(
        order_id=order.id,
        style_ref=order.style_number,
        quantity=order.quantity or 0,
        size_breakdown=breakdown_rows(order),
        size_format=SizeFormat(order.size_format or SizeFormat.STANDARD.value),
    )


def requirement_results_to_schema(results: list[RequirementResult]) -> list[RequirementResultSchema]:
    return [
        RequirementResultSchema(
            category=result.category,
            item_name=result.item_name,
            total=result.total,
            lines=[
                RequirementLineSchema(
                    line_no=line_no,
                    scope_label=line.scope_label,
                    matched_piece_count=line.matched_piece_count,
                    calculated_quantity=line.calculated_quantity,
                    reference_text=line.reference_text,
                    attachments=[
                        AttachmentSchema(name=a.name, url=a.url, type=a.type.value)
                        for a in line.attachments
                    ],
                )
                for line_no, line in enumerate(result.lines)
            ],
        )
        for result in results
    ]


def derive_order_requirements(db: Session, order: ProductionOrder) -> tuple[str | None, list[RequirementResult]]:
    """Engine output for ``order`` plus the style number it was linked to."""
    style = fetch_style_by_reference(db, order.style_number)
    if style is None:
        logger.warning("No style linked to order %s (style ref %r)", order.id, order.style_number)
        return None, []

    tech_pack = parse_tech_pack(style.tech_pack)
    return style.style_number, derive_requirements(order_breakdown(order), tech_pack)


def compute_order_requirements(db: Session, order_id: int) -> OrderRequirementsResponse:
    order = get_order_or_404(db, order_id)
    style_number, results = derive_order_requirements(db, order)

    return OrderRequirementsResponse(
        order_id=order.id,
        style_number=style_number,
        style_found=style_number is not None,
        size_format=order.size_format or SizeFormat.STANDARD.value,
        items=requirement_results_to_schema(results),
    )


def compute_selection_total(
    db: Session,
    order_id: int,
    rows: list[int],
    buckets: list[SizeBucket],
) -> SelectionTotalResponse:
    order = get_order_or_404(db, order_id)
    total = selection_total(breakdown_rows(order), rows, buckets)
    return SelectionTotalResponse(
        total=total,
        label=f"Filter: {len(set(rows))} Colors, {len(set(buckets))} Sizes",
    )


def build_job_sheet(
    db: Session,
    order_id: int,
    size_format: SizeFormat | None = None,
) -> JobSheetResponse:
    """Print payload for an order's job sheet.

    ``size_format`` only relabels the matrix headers; requirement matching
    always uses the format stored on the order.
    """
    order = get_order_or_404(db, order_id)
    rows = breakdown_rows(order)
    _, results = derive_order_requirements(db, order)

    header_format = size_format or SizeFormat(order.size_format or SizeFormat.STANDARD.value)

    return JobSheetResponse(
        formatted_order_no=format_order_number(order.order_no, order.style_number),
        order=OrderRead.model_validate(order),
        size_headers=labels_for(header_format),
        rows=[
            JobSheetRow(
                color=row.color,
                quantities=[row.quantity(bucket) for bucket in SIZE_BUCKETS],
                total=row_total(row),
            )
            for row in rows
        ],
        column_totals=[column_total(rows, bucket) for bucket in SIZE_BUCKETS],
        grand_total=grand_total(rows),
        requirements=requirement_results_to_schema(results),
    )
