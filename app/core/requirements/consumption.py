from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

from app.core.requirements.domain import Attachment, ConsumptionFormula, ConsumptionSpec


DEFAULT_FORMULA = ConsumptionFormula.PER_PIECE

# Digits kept when scaling to hundredths, so float noise such as
# 30 * 1.1 == 33.000000000000004 does not push the ceiling up a cent.
_NOISE_DIGITS = 6


def calculate(formula: ConsumptionFormula, factor: Optional[float], piece_count: float) -> float:
    """Raw material quantity for ``piece_count`` pieces.

    A zero or absent factor always yields 0, whatever the formula.
    """
    if not factor:
        return 0.0
    if ConsumptionFormula(formula) is ConsumptionFormula.PIECE_RATIO:
        return piece_count / factor
    return piece_count * factor


def round_up(value: float) -> float:
    """Ceiling at the hundredths digit (3.333 -> 3.34)."""
    return math.ceil(round(value * 100, _NOISE_DIGITS)) / 100


def resolve_spec(chain: Sequence[ConsumptionSpec]) -> ConsumptionSpec:
    """Fold a least-to-most specific chain of specs into the effective one.

    Formula and factor are resolved independently: the most specific level
    that declares a value wins. An explicit 0 factor counts as declared.
    """
    formula: Optional[ConsumptionFormula] = None
    factor: Optional[float] = None
    for spec in chain:
        if spec.formula is not None:
            formula = spec.formula
        if spec.factor is not None:
            factor = spec.factor
    return ConsumptionSpec(
        formula=formula or DEFAULT_FORMULA,
        factor=factor if factor is not None else 0.0,
    )


def resolve_reference(
    chain: Iterable[Tuple[str, Sequence[Attachment]]],
) -> Tuple[str, Tuple[Attachment, ...]]:
    """Most specific non-empty reference text and attachment list."""
    text = ""
    attachments: Tuple[Attachment, ...] = ()
    for level_text, level_attachments in chain:
        if level_text:
            text = level_text
        if level_attachments:
            attachments = tuple(level_attachments)
    return text, attachments


def evaluate(chain: Sequence[ConsumptionSpec], piece_count: float) -> float:
    """Resolve ``chain`` and return the rounded-up requirement."""
    spec = resolve_spec(chain)
    return round_up(calculate(spec.formula, spec.factor, piece_count))
