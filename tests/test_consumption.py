from __future__ import annotations

import pytest

from app.core.requirements.consumption import (
    calculate,
    evaluate,
    resolve_reference,
    resolve_spec,
    round_up,
)
from app.core.requirements.domain import Attachment, ConsumptionFormula, ConsumptionSpec


PER_PIECE = ConsumptionFormula.PER_PIECE
PIECE_RATIO = ConsumptionFormula.PIECE_RATIO


class TestCalculate:
    def test_per_piece_multiplies(self):
        assert calculate(PER_PIECE, 2, 15) == 30

    def test_piece_ratio_divides(self):
        assert calculate(PIECE_RATIO, 4, 10) == pytest.approx(2.5)

    @pytest.mark.parametrize("factor", [0, None])
    @pytest.mark.parametrize("formula", [PER_PIECE, PIECE_RATIO])
    def test_zero_or_absent_factor_yields_zero(self, formula, factor):
        assert calculate(formula, factor, 100) == 0


class TestRoundUp:
    def test_ceiling_at_hundredths(self):
        """PIECE_RATIO 10 / 3 = 3.333... rounds up to 3.34, every time."""
        raw = calculate(PIECE_RATIO, 3, 10)
        assert round_up(raw) == 3.34
        assert round_up(calculate(PIECE_RATIO, 3, 10)) == 3.34

    def test_exact_values_are_unchanged(self):
        assert round_up(30) == 30
        assert round_up(2.5) == 2.5

    def test_idempotent(self):
        assert round_up(round_up(3.3333)) == round_up(3.3333)

    def test_float_noise_does_not_add_a_cent(self):
        assert round_up(30 * 1.1) == 33.0

    def test_real_fraction_of_a_cent_still_rounds_up(self):
        assert round_up(33.001) == 33.01
        assert round_up(33.00001) == 33.01


class TestResolveSpec:
    def test_formula_from_item_factor_from_variant(self):
        """Item {PER_PIECE, 2}, variant {-, 5}, size variant {} resolves to {PER_PIECE, 5}."""
        item = ConsumptionSpec(formula=PER_PIECE, factor=2)
        variant = ConsumptionSpec(factor=5)
        size_variant = ConsumptionSpec()

        assert resolve_spec((item, variant, size_variant)) == ConsumptionSpec(PER_PIECE, 5)

    def test_explicit_zero_factor_overrides(self):
        item = ConsumptionSpec(formula=PIECE_RATIO, factor=4)
        size_variant = ConsumptionSpec(factor=0)

        spec = resolve_spec((item, ConsumptionSpec(), size_variant))

        assert spec.formula is PIECE_RATIO
        assert spec.factor == 0

    def test_defaults_when_nothing_declared(self):
        spec = resolve_spec((ConsumptionSpec(), ConsumptionSpec()))

        assert spec == ConsumptionSpec(PER_PIECE, 0.0)

    def test_most_specific_formula_wins(self):
        chain = (
            ConsumptionSpec(formula=PER_PIECE, factor=1),
            ConsumptionSpec(formula=PIECE_RATIO),
            ConsumptionSpec(factor=20),
        )
        assert resolve_spec(chain) == ConsumptionSpec(PIECE_RATIO, 20)

    def test_evaluate_rounds_up(self):
        chain = (ConsumptionSpec(formula=PIECE_RATIO, factor=3),)
        assert evaluate(chain, 10) == 3.34


class TestResolveReference:
    def test_most_specific_non_empty_wins_per_field(self):
        item_doc = Attachment(name="item.pdf", url="u1")
        variant_img = Attachment(name="red.png", url="u2")

        text, attachments = resolve_reference(
            (
                ("item text", (item_doc,)),
                ("", (variant_img,)),
                ("size text", ()),
            )
        )

        assert text == "size text"
        assert attachments == (variant_img,)

    def test_falls_back_to_item(self):
        item_doc = Attachment(name="item.pdf", url="u1")

        assert resolve_reference((("item", (item_doc,)), ("", ()))) == ("item", (item_doc,))
