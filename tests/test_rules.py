"""Unit tests for play validation, card effects and drawing."""

import logging
from dataclasses import replace

import pytest

from unosession.config import SessionConfig
from unosession.engine import (
    DECK_SIZE,
    Card,
    Color,
    DrawCard,
    PassTurn,
    Phase,
    PlayCard,
    apply_action,
    create_session,
    draw_card,
    get_legal_actions,
    get_legal_plays,
    join,
    pass_turn,
    play_card,
    validate_and_apply,
)
from unosession.engine.errors import (
    CardNotInHand,
    DeckEmpty,
    GameOver,
    IllegalPlay,
    MissingColorDeclaration,
    NotStarted,
    NotYourTurn,
)

C = Card.parse


def test_two_player_scenario() -> None:
    session = join(create_session("p0", shuffle=False), "p1")
    assert len(session.deck) == 58
    assert [len(p.hand) for p in session.players] == [7, 7]
    assert session.phase is Phase.ACTIVE
    assert session.current_turn == 0

    # Seed the discard pile with the deck's top card
    session = replace(
        session,
        deck=session.deck[:-1],
        discard_pile=(session.deck[-1],),
        active_color=session.deck[-1].color,
    )
    assert session.top_discard() == C("green_9")
    session = draw_card(session, "p0")
    assert session.current_turn == 0
    assert C("green_8") in session.players[0].hand

    session = play_card(session, "p0", C("green_8"))
    assert session.top_discard() == C("green_8")
    assert C("green_8") not in session.players[0].hand
    assert session.current_turn == 1
    assert session.card_count() == DECK_SIZE

    with pytest.raises(NotYourTurn):
        play_card(session, "p0", C("wild"), Color.RED)


def test_play_before_start() -> None:
    session = create_session("p0", config=SessionConfig(min_players=3))
    with pytest.raises(NotStarted):
        play_card(session, "p0", C("red_1"))
    with pytest.raises(NotStarted):
        draw_card(session, "p0")


def test_not_your_turn_leaves_session_unchanged(make_session) -> None:
    session = make_session({"p0": ["red_1"], "p1": ["red_2"]}, top="red_5")
    before = replace(session)
    for call in (
        lambda: play_card(session, "p1", C("red_2")),
        lambda: draw_card(session, "p1"),
        lambda: pass_turn(session, "p1"),
        lambda: play_card(session, "stranger", C("red_2")),
    ):
        with pytest.raises(NotYourTurn):
            call()
    assert session == before


def test_turn_checked_before_card_ownership(make_session) -> None:
    session = make_session({"p0": ["red_1"], "p1": ["red_2"]}, top="red_5")
    with pytest.raises(NotYourTurn):
        play_card(session, "p1", C("blue_9"))


def test_card_not_in_hand(make_session) -> None:
    session = make_session({"p0": ["red_1", "blue_3"], "p1": ["red_2"]}, top="red_5")
    with pytest.raises(CardNotInHand):
        play_card(session, "p0", C("red_7"))


@pytest.mark.parametrize(
    "top,active,card,legal",
    [
        ("red_5", None, "red_7", True),
        ("red_5", None, "blue_5", True),
        ("red_5", None, "blue_7", False),
        ("red_skip", None, "blue_skip", True),
        ("red_skip", None, "blue_reverse", False),
        ("red_draw_two", None, "green_draw_two", True),
        ("wild", Color.BLUE, "blue_3", True),
        ("wild", Color.BLUE, "red_3", False),
        ("wild_draw_four", Color.GREEN, "green_skip", True),
        ("wild_draw_four", Color.GREEN, "yellow_skip", False),
    ],
)
def test_legality(make_session, top, active, card, legal) -> None:
    session = make_session(
        {"p0": [card, "yellow_0"], "p1": ["red_2"]}, top=top, active_color=active
    )
    if legal:
        after = play_card(session, "p0", C(card))
        assert after.top_discard() == C(card)
    else:
        with pytest.raises(IllegalPlay):
            play_card(session, "p0", C(card))


@pytest.mark.parametrize("wild", ["wild", "wild_draw_four"])
def test_wild_always_legal(make_session, wild) -> None:
    session = make_session({"p0": [wild, "yellow_0"], "p1": ["red_2"]}, top="red_5")
    after = play_card(session, "p0", C(wild), Color.GREEN)
    assert after.active_color is Color.GREEN
    assert after.top_discard() == C(wild)


@pytest.mark.parametrize("declared", [None, Color.WILD])
def test_wild_requires_color(make_session, declared) -> None:
    session = make_session({"p0": ["wild", "yellow_0"], "p1": ["red_2"]}, top="red_5")
    with pytest.raises(MissingColorDeclaration):
        play_card(session, "p0", C("wild"), declared)


def test_declared_color_ignored_for_colored_card(make_session) -> None:
    session = make_session({"p0": ["red_7", "yellow_0"], "p1": ["red_2"]}, top="red_5")
    after = play_card(session, "p0", C("red_7"), Color.BLUE)
    assert after.active_color is Color.RED


def test_first_play_any_card(make_session) -> None:
    session = make_session({"p0": ["blue_7", "yellow_0"], "p1": ["red_2"]})
    assert session.top_discard() is None
    after = play_card(session, "p0", C("blue_7"))
    assert after.active_color is Color.BLUE


def test_color_match_falls_back_to_top_card(make_session) -> None:
    session = make_session({"p0": ["red_7", "blue_2"], "p1": ["red_2"]}, top="red_5")
    session = replace(session, active_color=None)
    plays = [p.card for p in get_legal_plays(session, "p0")]
    assert plays == [C("red_7")]
    after = play_card(session, "p0", C("red_7"))
    assert after.top_discard() == C("red_7")
    assert after.active_color is Color.RED
    with pytest.raises(IllegalPlay):
        play_card(session, "p0", C("blue_2"))


def test_removes_one_copy_only(make_session) -> None:
    session = make_session({"p0": ["red_7", "red_7"], "p1": ["red_2"]}, top="red_5")
    after = play_card(session, "p0", C("red_7"))
    assert after.players[0].hand == (C("red_7"),)


def test_number_advances_turn(make_session) -> None:
    hands = {"p0": ["red_7", "red_1"], "p1": ["red_2"], "p2": ["red_3"]}
    assert play_card(make_session(hands, top="red_5"), "p0", C("red_7")).current_turn == 1
    reversed_session = make_session(hands, top="red_5", direction=-1)
    assert play_card(reversed_session, "p0", C("red_7")).current_turn == 2


def test_skip(make_session) -> None:
    hands = {"p0": ["red_skip", "red_1"], "p1": ["red_2"], "p2": ["red_3"]}
    after = play_card(make_session(hands, top="red_5"), "p0", C("red_skip"))
    assert after.current_turn == 2


def test_skip_two_players_returns_turn(make_session) -> None:
    hands = {"p0": ["red_skip", "red_1"], "p1": ["red_2"]}
    after = play_card(make_session(hands, top="red_5"), "p0", C("red_skip"))
    assert after.current_turn == 0


def test_reverse(make_session) -> None:
    hands = {"p0": ["red_reverse", "red_1"], "p1": ["red_2"], "p2": ["red_3", "red_4"]}
    after = play_card(make_session(hands, top="red_5"), "p0", C("red_reverse"))
    assert after.direction == -1
    assert after.current_turn == 2

    back = play_card(after, "p2", C("red_3"))
    assert back.current_turn == 1


def test_reverse_back_to_clockwise(make_session) -> None:
    hands = {"p0": ["red_reverse", "red_1"], "p1": ["red_2"], "p2": ["red_3"]}
    session = make_session(hands, top="red_5", direction=-1)
    after = play_card(session, "p0", C("red_reverse"))
    assert after.direction == 1
    assert after.current_turn == 1


def test_reverse_two_players_acts_as_skip(make_session) -> None:
    hands = {"p0": ["red_reverse", "red_1"], "p1": ["red_2"]}
    after = play_card(make_session(hands, top="red_5"), "p0", C("red_reverse"))
    assert after.direction == -1
    assert after.current_turn == 0


def test_draw_two(make_session) -> None:
    hands = {"p0": ["red_draw_two", "red_1"], "p1": ["red_2"], "p2": ["red_3"]}
    session = make_session(hands, top="red_5", deck=["blue_1", "blue_2", "blue_3"])
    after = play_card(session, "p0", C("red_draw_two"))
    assert after.players[1].hand == (C("red_2"), C("blue_3"), C("blue_2"))
    assert after.deck == (C("blue_1"),)
    assert after.current_turn == 2
    assert after.card_count() == session.card_count()


def test_draw_two_follows_direction(make_session) -> None:
    hands = {"p0": ["red_draw_two", "red_1"], "p1": ["red_2"], "p2": ["red_3"]}
    session = make_session(hands, top="red_5", direction=-1)
    after = play_card(session, "p0", C("red_draw_two"))
    assert len(after.players[2].hand) == 3
    assert len(after.players[1].hand) == 1
    assert after.current_turn == 1


def test_wild_draw_four(make_session) -> None:
    hands = {"p0": ["wild_draw_four", "red_1"], "p1": ["red_2"], "p2": ["red_3"]}
    session = make_session(hands, top="red_5")
    after = play_card(session, "p0", C("wild_draw_four"), Color.YELLOW)
    assert len(after.players[1].hand) == 5
    assert after.active_color is Color.YELLOW
    assert after.current_turn == 2
    assert after.card_count() == session.card_count()


def test_forced_draw_short_deck(make_session, caplog) -> None:
    hands = {"p0": ["wild_draw_four", "red_1"], "p1": ["red_2"]}
    session = make_session(hands, top="red_5", deck=["blue_1"])
    with caplog.at_level(logging.WARNING, logger="unosession.engine.rules"):
        after = play_card(session, "p0", C("wild_draw_four"), Color.RED)
    assert after.players[1].hand == (C("red_2"), C("blue_1"))
    assert after.deck == ()
    assert "penalty" in caplog.text


def test_win(make_session) -> None:
    session = make_session({"p0": ["red_7"], "p1": ["red_2"]}, top="red_5")
    after = play_card(session, "p0", C("red_7"))
    assert after.phase is Phase.FINISHED
    assert after.winner == "p0"
    assert after.current_turn == 0
    assert after.history[-1] == "p0 WON!"

    with pytest.raises(GameOver):
        play_card(after, "p1", C("red_2"))
    with pytest.raises(GameOver):
        draw_card(after, "p0")
    with pytest.raises(GameOver):
        join(after, "p2")


def test_win_with_draw_two_still_penalizes(make_session) -> None:
    session = make_session({"p0": ["red_draw_two"], "p1": ["red_2"]}, top="red_5")
    after = play_card(session, "p0", C("red_draw_two"))
    assert after.winner == "p0"
    assert len(after.players[1].hand) == 3


def test_draw_card_keeps_turn(make_session) -> None:
    session = make_session({"p0": ["red_1"], "p1": ["red_2"]}, top="red_5", deck=["blue_1", "blue_9"])
    after = draw_card(session, "p0")
    assert after.players[0].hand == (C("red_1"), C("blue_9"))
    assert after.current_turn == 0
    assert after.history[-1] == "p0 drew a card"


def test_draw_until_deck_empty(make_session) -> None:
    session = make_session({"p0": ["red_1"], "p1": ["red_2"]}, top="red_5", deck=["blue_1", "blue_2", "blue_3"])
    total = session.card_count()
    for _ in range(3):
        session = draw_card(session, "p0")
    assert session.deck == ()
    assert session.card_count() == total
    with pytest.raises(DeckEmpty):
        draw_card(session, "p0")
    assert len(session.players[0].hand) == 4


def test_pass_turn(make_session) -> None:
    session = make_session({"p0": ["red_1"], "p1": ["red_2"], "p2": ["red_3"]}, top="red_5")
    after = pass_turn(session, "p0")
    assert after.current_turn == 1
    assert after.history[-1] == "p0 passed"


def test_validate_and_apply_alias() -> None:
    assert validate_and_apply is play_card


def test_get_legal_plays(make_session) -> None:
    session = make_session(
        {"p0": ["red_7", "blue_5", "blue_9", "wild", "red_7"], "p1": ["red_2"]}, top="red_5"
    )
    plays = get_legal_plays(session, "p0")
    played = [(str(p.card), p.chosen_color) for p in plays]
    assert ("red_7", None) in played
    assert ("blue_5", None) in played
    assert all(card != "blue_9" for card, _ in played)
    assert sum(1 for card, _ in played if card == "wild") == 4
    assert sum(1 for card, _ in played if card == "red_7") == 1
    assert get_legal_plays(session, "p1") == []


def test_get_legal_actions(make_session) -> None:
    session = make_session({"p0": ["blue_9"], "p1": ["red_2"]}, top="red_5")
    assert get_legal_actions(session, "p0") == [DrawCard(), PassTurn()]
    assert get_legal_actions(session, "p0", has_drawn=True) == [PassTurn()]
    assert get_legal_actions(session, "p1") == []


def test_apply_action(make_session) -> None:
    session = make_session({"p0": ["red_7", "red_1"], "p1": ["red_2"]}, top="red_5")
    after = apply_action(session, "p0", PlayCard(card=C("red_7")))
    assert after.current_turn == 1
    after = apply_action(after, "p1", DrawCard())
    assert len(after.players[1].hand) == 2
    after = apply_action(after, "p1", PassTurn())
    assert after.current_turn == 0


def test_history_records_play(make_session) -> None:
    session = make_session({"p0": ["wild", "red_1"], "p1": ["red_2"]}, top="red_5")
    after = play_card(session, "p0", C("wild"), Color.BLUE)
    assert after.history[-1] == "p0 played wild (chose blue)"
