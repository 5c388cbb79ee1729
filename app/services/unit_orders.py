from __future__ import annotations

import re
from typing import Literal

from sqlalchemy.orm import Session

from app.models.models import ProductionOrder
from app.schemas.order import OrderSummary


COMPLETED_STATUS = "COMPLETED"

_ORDER_SERIAL_RE = re.compile(r"ORD-(\d+)")


def format_order_number(order_no: str | None, style_ref: str | None) -> str:
    """Display number such as ``ORD-ST1001-0042`` from ``ORD-0042``."""
    if not order_no:
        return "ORD-NEW"
    match = _ORDER_SERIAL_RE.search(order_no)
    serial = match.group(1) if match else order_no
    style_part = style_ref.split("-")[0].strip() if style_ref else "STYLE"
    return f"ORD-{style_part}-{serial}"


def list_unit_orders(
    db: Session,
    unit_id: int,
    tab: Literal["active", "history"] = "active",
    search: str | None = None,
) -> list[OrderSummary]:
    """Orders assigned to ``unit_id``, newest first.

    ``active`` lists everything not yet completed, ``history`` the completed
    ones. ``search`` matches the formatted order number or the style
    reference, case-insensitively.
    """
    query = db.query(ProductionOrder).filter(ProductionOrder.unit_id == unit_id)
    if tab == "history":
        query = query.filter(ProductionOrder.status == COMPLETED_STATUS)
    else:
        query = query.filter(ProductionOrder.status != COMPLETED_STATUS)
    orders = query.order_by(ProductionOrder.created_at.desc(), ProductionOrder.id.desc()).all()

    needle = (search or "").strip().lower()
    summaries: list[OrderSummary] = []
    for order in orders:
        formatted = format_order_number(order.order_no, order.style_number)
        if needle and needle not in formatted.lower() and needle not in order.style_number.lower():
            continue
        summaries.append(
            OrderSummary(
                id=order.id,
                order_no=order.order_no,
                formatted_order_no=formatted,
                style_number=order.style_number,
                quantity=order.quantity,
                status=order.status,
                target_delivery_date=order.target_delivery_date,
                size_format=order.size_format,
            )
        )
    return summaries
