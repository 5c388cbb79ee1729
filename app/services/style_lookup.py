from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.models import Style


STYLE_REF_SEPARATOR = " - "


def style_prefix(style_ref: str | None) -> str:
    """Style number part of an order's style reference.

    Orders store references such as ``"ST-1001 - Crew Neck Tee"``; only the
    part before the first ``" - "`` identifies the style.
    """
    if not style_ref:
        return ""
    return style_ref.split(STYLE_REF_SEPARATOR, 1)[0].strip()


def fetch_style_by_reference(db: Session, style_ref: str | None) -> Style | None:
    """Style linked to ``style_ref``, or None when there is no linked tech pack.

    Exact match on the prefix wins; otherwise a trimmed, case-insensitive
    match is tried.
    """
    prefix = style_prefix(style_ref)
    if not prefix:
        return None

    style = db.query(Style).filter(Style.style_number == prefix).first()
    if style is not None:
        return style

    return (
        db.query(Style)
        .filter(func.lower(func.trim(Style.style_number)) == prefix.lower())
        .order_by(Style.id)
        .first()
    )
