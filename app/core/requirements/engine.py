"""Material requirement derivation.

Walks a style's tech pack against an order's color/size breakdown and
produces, per tech-pack item, the material quantity required together with
the scope lines it was built from. This is the only implementation of the
walk; detail views, forecast selection and job sheets format its output.

The functions here are pure: inputs are frozen dataclasses and nothing is
cached between calls.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from app.core.requirements.breakdown import buckets_for_sizes, row_total
from app.core.requirements.consumption import evaluate, resolve_reference, round_up
from app.core.requirements.domain import (
    ColorVariant,
    OrderBreakdown,
    RequirementLine,
    RequirementResult,
    SizeBreakdownRow,
    TechPack,
    TechPackItem,
)


GLOBAL_SCOPE_LABEL = "Global Requirement"


def _matching_rows(order: OrderBreakdown, variant: ColorVariant) -> List[SizeBreakdownRow]:
    colors = set(variant.colors)
    return [row for row in order.size_breakdown if row.color in colors]


def _size_variant_lines(
    order: OrderBreakdown,
    item: TechPackItem,
    variant: ColorVariant,
    rows: Sequence[SizeBreakdownRow],
) -> List[RequirementLine]:
    lines: List[RequirementLine] = []
    color_label = "/".join(variant.colors)

    for size_variant in variant.size_variants or ():
        buckets = buckets_for_sizes(size_variant.sizes, order.size_format)
        piece_count = sum(row.quantity(bucket) for row in rows for bucket in buckets)
        if piece_count == 0:
            continue

        quantity = evaluate(
            (item.consumption, variant.consumption, size_variant.consumption),
            piece_count,
        )
        if quantity <= 0:
            continue

        text, attachments = resolve_reference(
            (
                (item.reference_text, item.attachments),
                (variant.reference_text, variant.attachments),
                (size_variant.reference_text, size_variant.attachments),
            )
        )
        lines.append(
            RequirementLine(
                scope_label=f"{color_label} - {'/'.join(size_variant.sizes)}",
                matched_piece_count=piece_count,
                calculated_quantity=quantity,
                reference_text=text,
                attachments=attachments,
            )
        )
    return lines


def _color_variant_line(
    item: TechPackItem,
    variant: ColorVariant,
    rows: Sequence[SizeBreakdownRow],
) -> Optional[RequirementLine]:
    piece_count = sum(row_total(row) for row in rows)
    quantity = evaluate((item.consumption, variant.consumption), piece_count)
    if quantity <= 0:
        return None

    text, attachments = resolve_reference(
        (
            (item.reference_text, item.attachments),
            (variant.reference_text, variant.attachments),
        )
    )
    return RequirementLine(
        scope_label=f"Color: {'/'.join(variant.colors)}",
        matched_piece_count=piece_count,
        calculated_quantity=quantity,
        reference_text=text,
        attachments=attachments,
    )


def _item_lines(order: OrderBreakdown, item: TechPackItem) -> List[RequirementLine]:
    if item.variants is not None:
        lines: List[RequirementLine] = []
        for variant in item.variants:
            rows = _matching_rows(order, variant)
            if not rows:
                continue
            if variant.size_variants is not None:
                # Size-driven: the variant's own consumption only feeds the chain.
                lines.extend(_size_variant_lines(order, item, variant, rows))
            elif variant.consumption.formula is not None:
                line = _color_variant_line(item, variant, rows)
                if line is not None:
                    lines.append(line)
        return lines

    if item.consumption.formula is None:
        return []

    quantity = evaluate((item.consumption,), order.quantity)
    if quantity <= 0:
        return []
    return [
        RequirementLine(
            scope_label=GLOBAL_SCOPE_LABEL,
            matched_piece_count=order.quantity,
            calculated_quantity=quantity,
            reference_text=item.reference_text,
            attachments=item.attachments,
        )
    ]


def derive_item(order: OrderBreakdown, item: TechPackItem, category: str = "") -> Optional[RequirementResult]:
    """Requirement for a single tech-pack item, or None when it needs nothing."""
    lines = _item_lines(order, item)
    total = round_up(sum(line.calculated_quantity for line in lines))
    if total <= 0:
        return None
    return RequirementResult(item_name=item.field_name, total=total, lines=tuple(lines), category=category)


def derive_requirements(
    order: Optional[OrderBreakdown],
    tech_pack: Optional[TechPack],
) -> List[RequirementResult]:
    """Requirements for every tech-pack item, in declared category/field order.

    A missing order or tech pack yields an empty list; items whose total is
    zero are left out.
    """
    if order is None or tech_pack is None:
        return []

    results: List[RequirementResult] = []
    for category in tech_pack.categories:
        for item in category.items:
            result = derive_item(order, item, category.name)
            if result is not None:
                results.append(result)
    return results
