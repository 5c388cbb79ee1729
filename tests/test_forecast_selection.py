from __future__ import annotations

import pytest

from app.core.requirements.engine import derive_requirements
from app.core.requirements.forecast import EmptySelectionError, ForecastSelection
from app.core.requirements.tech_pack import parse_tech_pack
from tests.test_utils import ZIPPER_TECH_PACK, breakdown_row, make_order

ZIPPER = ("Trims", "Zipper", 0)
THREAD = ("Trims", "Thread", 0)


@pytest.fixture
def selection() -> ForecastSelection:
    order = make_order([breakdown_row("Red", s=10, m=20), breakdown_row("Blue", s=5)], quantity=100)
    results = derive_requirements(order, parse_tech_pack(ZIPPER_TECH_PACK))
    return ForecastSelection(results)


def test_every_line_starts_selected(selection):
    keys = [entry.key for entry in selection.entries]

    assert keys == [ZIPPER, THREAD]
    assert all(selection.is_selected(key) for key in keys)


def test_toggle_and_bulk_actions(selection):
    assert selection.toggle(ZIPPER) is False
    assert [e.key for e in selection.selected_entries()] == [THREAD]

    selection.clear_all()
    assert selection.selected_entries() == []

    selection.set_item("Zipper", True)
    assert [e.key for e in selection.selected_entries()] == [ZIPPER]

    selection.select_all()
    assert len(selection.selected_entries()) == 2


def test_unknown_keys_are_rejected(selection):
    with pytest.raises(KeyError):
        selection.toggle(("Trims", "Zipper", 1))
    with pytest.raises(KeyError):
        selection.select_only([("Trims", "Lace", 0)])


def test_drafts_describe_item_and_scope(selection):
    selection.select_only([ZIPPER, THREAD])

    drafts = selection.to_drafts(order_id=7, unit="Nos", units={"Thread": "Rolls"})

    assert [(d.description, d.quantity, d.unit) for d in drafts] == [
        ("Zipper (Color: Red)", 30, "Nos"),
        ("Thread (Global Requirement)", 2, "Rolls"),
    ]
    assert all(d.order_id == 7 for d in drafts)
    assert drafts[1].attachments[0].name == "thread.png"


def test_submitting_nothing_is_a_user_error(selection):
    selection.clear_all()

    with pytest.raises(EmptySelectionError):
        selection.to_drafts(order_id=7, unit="Nos")


class TestRepeatedNames:
    def test_same_field_in_two_categories_keeps_separate_flags(self):
        tech_pack = parse_tech_pack(
            {
                "Sewing": {"Thread": {"consumption_type": "pcs_per_item", "consumption_val": 5}},
                "Embroidery": {"Thread": {"consumption_type": "items_per_pc", "consumption_val": 3}},
            }
        )
        selection = ForecastSelection(derive_requirements(make_order([], quantity=10), tech_pack))

        assert [e.key for e in selection.entries] == [
            ("Sewing", "Thread", 0),
            ("Embroidery", "Thread", 0),
        ]

        selection.select_only([("Sewing", "Thread", 0)])
        drafts = selection.to_drafts(order_id=1, unit="Nos")
        assert [(d.description, d.quantity) for d in drafts] == [("Thread (Global Requirement)", 2)]

        selection.toggle(("Embroidery", "Thread", 0))
        selection.set_item("Thread", False, category="Sewing")
        assert [e.key for e in selection.selected_entries()] == [("Embroidery", "Thread", 0)]

    def test_lines_with_the_same_scope_label_keep_separate_flags(self):
        tech_pack = parse_tech_pack(
            {
                "Trims": {
                    "Label": {
                        "variants": [
                            {"colors": ["Red"], "consumption_type": "items_per_pc", "consumption_val": 1},
                            {"colors": ["Red"], "consumption_type": "items_per_pc", "consumption_val": 2},
                        ],
                    }
                }
            }
        )
        order = make_order([breakdown_row("Red", s=4)], quantity=4)
        selection = ForecastSelection(derive_requirements(order, tech_pack))

        selection.toggle(("Trims", "Label", 0))

        drafts = selection.to_drafts(order_id=1, unit="Nos")
        assert [(d.description, d.quantity) for d in drafts] == [("Label (Color: Red)", 8)]
