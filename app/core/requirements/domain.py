from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple


class SizeBucket(str, Enum):
    """Format-independent size slots of an order breakdown row."""

    S = "s"
    M = "m"
    L = "l"
    XL = "xl"
    XXL = "xxl"
    XXXL = "xxxl"


SIZE_BUCKETS: Tuple[SizeBucket, ...] = tuple(SizeBucket)


class SizeFormat(str, Enum):
    STANDARD = "standard"
    NUMERIC = "numeric"


class ConsumptionFormula(str, Enum):
    """How a piece count turns into a material quantity.

    PER_PIECE multiplies the piece count by the factor (e.g. 2 buttons per
    garment); PIECE_RATIO divides it (e.g. one cone of thread per 50 pieces).
    """

    PER_PIECE = "items_per_pc"
    PIECE_RATIO = "pcs_per_item"


class AttachmentType(str, Enum):
    IMAGE = "image"
    DOCUMENT = "document"


@dataclass(frozen=True)
class Attachment:
    name: str
    url: str
    type: AttachmentType = AttachmentType.DOCUMENT


@dataclass(frozen=True)
class ConsumptionSpec:
    """Formula and factor declared on a single tech-pack node.

    Either field may be absent (None); absence means "inherit from the less
    specific level", while an explicit 0 factor is a value of its own.
    """

    formula: Optional[ConsumptionFormula] = None
    factor: Optional[float] = None


@dataclass(frozen=True)
class SizeBreakdownRow:
    color: str
    quantities: Mapping[SizeBucket, int] = field(default_factory=dict)

    def quantity(self, bucket: SizeBucket) -> int:
        return int(self.quantities.get(bucket, 0) or 0)


@dataclass(frozen=True)
class OrderBreakdown:
    """Read-only view of an order as needed by requirement derivation."""

    order_id: int
    style_ref: str
    quantity: int
    size_breakdown: Tuple[SizeBreakdownRow, ...] = ()
    size_format: SizeFormat = SizeFormat.STANDARD


@dataclass(frozen=True)
class SizeVariant:
    sizes: Tuple[str, ...]
    reference_text: str = ""
    attachments: Tuple[Attachment, ...] = ()
    consumption: ConsumptionSpec = ConsumptionSpec()


@dataclass(frozen=True)
class ColorVariant:
    colors: Tuple[str, ...]
    reference_text: str = ""
    attachments: Tuple[Attachment, ...] = ()
    consumption: ConsumptionSpec = ConsumptionSpec()
    size_variants: Optional[Tuple[SizeVariant, ...]] = None


@dataclass(frozen=True)
class TechPackItem:
    field_name: str
    reference_text: str = ""
    attachments: Tuple[Attachment, ...] = ()
    consumption: ConsumptionSpec = ConsumptionSpec()
    variants: Optional[Tuple[ColorVariant, ...]] = None


@dataclass(frozen=True)
class TechPackCategory:
    name: str
    items: Tuple[TechPackItem, ...] = ()


@dataclass(frozen=True)
class TechPack:
    """Ordered categories of a style's technical specification."""

    categories: Tuple[TechPackCategory, ...] = ()

    def iter_items(self):
        for category in self.categories:
            yield from category.items


@dataclass(frozen=True)
class RequirementLine:
    scope_label: str
    matched_piece_count: int
    calculated_quantity: float
    reference_text: str = ""
    attachments: Tuple[Attachment, ...] = ()


@dataclass(frozen=True)
class RequirementResult:
    item_name: str
    total: float
    lines: Tuple[RequirementLine, ...] = ()
    category: str = ""

