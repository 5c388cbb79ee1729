from __future__ import annotations

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Unit(Base):
    __tablename__ = "unit"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_main: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Style(Base):
    __tablename__ = "style"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    style_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    style_text: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size_type: Mapped[str] = mapped_column(String(20), nullable=False, default="letter")
    # {category: {field: item}}; key order is the display/print order.
    tech_pack: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class ProductionOrder(Base):
    __tablename__ = "production_order"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_no: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    unit_id: Mapped[int] = mapped_column(ForeignKey("unit.id"), nullable=False)
    style_number: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # [{"color": ..., "s": 0, "m": 0, "l": 0, "xl": 0, "xxl": 0, "xxxl": 0}, ...]
    size_breakdown: Mapped[list | None] = mapped_column(JSON, nullable=True)
    size_format: Mapped[str] = mapped_column(String(20), nullable=False, default="standard")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_delivery_date: Mapped[Date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="ASSIGNED")
    box_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    unit: Mapped[Unit] = relationship("Unit")
    material_requests: Mapped[list["MaterialRequest"]] = relationship(
        "MaterialRequest", back_populates="order"
    )


class MaterialRequest(Base):
    __tablename__ = "material_request"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("production_order.id"), nullable=False)
    material_content: Mapped[str] = mapped_column(String(500), nullable=False)
    quantity_requested: Mapped[float] = mapped_column(Float, nullable=False)
    quantity_approved: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    unit: Mapped[str] = mapped_column(String(20), nullable=False, default="Nos")
    attachments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="PENDING")
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False)

    order: Mapped[ProductionOrder] = relationship("ProductionOrder", back_populates="material_requests")
    approvals: Mapped[list["MaterialApproval"]] = relationship(
        "MaterialApproval", back_populates="request", order_by="MaterialApproval.id"
    )


class MaterialApproval(Base):
    __tablename__ = "material_approval"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    request_id: Mapped[int] = mapped_column(ForeignKey("material_request.id"), nullable=False)
    qty_approved: Mapped[float] = mapped_column(Float, nullable=False)
    approved_by_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False)

    request: Mapped[MaterialRequest] = relationship("MaterialRequest", back_populates="approvals")
