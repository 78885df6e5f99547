"""Unit tests for the card model."""

import pytest

from unosession.engine import Card, Color, Rank


def test_number_rank_range() -> None:
    assert Rank.number(0) is Rank.ZERO
    assert Rank.number(9) is Rank.NINE
    with pytest.raises(ValueError):
        Rank.number(10)


def test_rank_kinds() -> None:
    assert Rank.SEVEN.is_number
    assert not Rank.SKIP.is_number
    assert Rank.WILD.is_wild
    assert Rank.WILD_DRAW_FOUR.is_wild
    assert not Rank.DRAW_TWO.is_wild


def test_wild_card_requires_wild_color() -> None:
    with pytest.raises(ValueError):
        Card(color=Color.RED, rank=Rank.WILD)


def test_colored_card_rejects_wild_color() -> None:
    with pytest.raises(ValueError):
        Card(color=Color.WILD, rank=Rank.SKIP)
    with pytest.raises(ValueError):
        Card(color=Color.WILD, rank=Rank.FIVE)


def test_card_rejects_raw_strings() -> None:
    with pytest.raises(ValueError):
        Card(color="red", rank=Rank.FIVE)


def test_str_and_parse() -> None:
    assert str(Card(Color.RED, Rank.FIVE)) == "red_5"
    assert str(Card(Color.BLUE, Rank.DRAW_TWO)) == "blue_draw_two"
    assert str(Card(Color.WILD, Rank.WILD_DRAW_FOUR)) == "wild_draw_four"
    assert Card.parse("green_skip") == Card(Color.GREEN, Rank.SKIP)
    assert Card.parse(" WILD ") == Card(Color.WILD, Rank.WILD)


@pytest.mark.parametrize("text", ["purple_5", "red", "red_11", "wild_5", "red_wild"])
def test_parse_invalid(text: str) -> None:
    with pytest.raises(ValueError):
        Card.parse(text)


def test_cards_are_hashable_values() -> None:
    assert Card.parse("red_5") == Card.parse("red_5")
    assert len({Card.parse("red_5"), Card.parse("red_5"), Card.parse("blue_5")}) == 2
