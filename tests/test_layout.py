from __future__ import annotations

import pytest

from cmms_dashboard.layout import CardGeometry, move_card, resize_card


def test_from_equipment_uses_defaults_for_missing_or_zero_fields():
    card = CardGeometry.from_equipment({"position_x": None, "position_y": 12.6, "card_width": 0})
    assert card == CardGeometry(x=0, y=13, width=320, height=280)


def test_move_card_rounds_to_integers():
    moved = move_card(CardGeometry(x=10, y=20), 15.5, -4.4)
    assert (moved.x, moved.y) == (26, 16)
    assert moved.to_record()["position_x"] == 26


def test_resize_card_grows_and_caps():
    card = resize_card(CardGeometry(width=580, height=440), "increase")
    assert (card.width, card.height) == (600, 480)
    card = resize_card(card, "increase")
    assert (card.width, card.height) == (600, 500)


def test_resize_card_shrinks_and_floors():
    card = resize_card(CardGeometry(), "decrease")
    assert (card.width, card.height) == (280, 240)
    card = resize_card(resize_card(card, "decrease"), "decrease")
    assert (card.width, card.height) == (280, 200)


def test_resize_card_rejects_unknown_direction():
    with pytest.raises(ValueError):
        resize_card(CardGeometry(), "sideways")
