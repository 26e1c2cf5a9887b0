"""Unit tests for the game engine."""

import pytest

from unoengine.agents import HeuristicStrategy
from unoengine.engine import (
    Card,
    Color,
    Direction,
    Game,
    GameEvent,
    GameStatus,
    InvalidStateError,
    Player,
)
from unoengine.engine.card import SUITS

FOUR_SEATS = (
    "red_reverse", "red_1",
    "blue_1", "blue_2",
    "green_1", "green_2",
    "yellow_1", "yellow_2",
    "red_9",
)


def _names(payloads):
    return [p["player"].name for p in payloads]


def _hand(game: Game, index: int):
    return [str(c) for c in game.players[index].hand]


def test_start_deals_and_announces(recorder) -> None:
    players = [Player("p1"), Player("p2"), Player("p3")]
    game = Game(players, seed=1)
    game.add_event_listener(recorder)
    game.start()

    assert [p.card_count for p in players] == [7, 7, 7]
    assert game.get_top_card() is not None
    assert game.deck.draw_pile_size == 108 - 7 * 3 - 1
    assert game.get_current_player() is players[0]
    assert game.status is GameStatus.IN_PROGRESS
    assert recorder.kinds() == [GameEvent.GAME_START, GameEvent.TURN_START]
    assert recorder.of(GameEvent.TURN_START)[0]["player"] is players[0]


def test_start_requires_two_players() -> None:
    game = Game([Player("solo")])
    with pytest.raises(InvalidStateError):
        game.start()


def test_start_twice_fails(make_game) -> None:
    game = make_game(["red_1", "blue_2", "red_9"])
    with pytest.raises(InvalidStateError):
        game.start()


def test_first_wild_gets_random_color(make_game) -> None:
    game = make_game(["red_1", "blue_2", "wild"])
    top = game.get_top_card()
    assert top.is_wild
    assert top.chosen_color in SUITS


def test_play_legal_card(make_game, recorder) -> None:
    game = make_game(["red_5", "red_6", "blue_1", "blue_2", "red_9"], hand_size=2)
    alice, bob = game.players
    recorder.clear()

    assert game.play_card(alice.hand[0])
    assert str(game.get_top_card()) == "red_5"
    assert _hand(game, 0) == ["red_6"]
    assert game.get_current_player() is bob
    assert recorder.kinds() == [GameEvent.CARD_PLAYED, GameEvent.UNO_CALLED, GameEvent.TURN_START]
    assert recorder.of(GameEvent.UNO_CALLED)[0]["player"] is alice


def test_illegal_plays_are_rejected(make_game, recorder) -> None:
    game = make_game(["green_3", "red_6", "blue_1", "blue_2", "red_9"], hand_size=2)
    recorder.clear()

    assert not game.play_card(Card.parse("green_3"))  # does not match red_9
    assert not game.play_card(Card.parse("red_1"))  # not held
    assert not game.play_card(Card.parse("blue_1"))  # bob's card, and illegal anyway
    assert _hand(game, 0) == ["green_3", "red_6"]
    assert game.get_current_player().name == "alice"
    assert recorder.events == []


def test_play_card_of_other_player_is_rejected(make_game) -> None:
    game = make_game(["green_3", "green_4", "red_1", "red_2", "red_9"], hand_size=2)
    assert not game.play_card(Card.parse("red_1"))
    assert game.players[1].card_count == 2


def test_reverse_turns_to_previous_seat(make_game, recorder) -> None:
    game = make_game(FOUR_SEATS, names=("A", "B", "C", "D"), hand_size=2)
    recorder.clear()

    assert game.play_card(Card.parse("red_reverse"))
    assert game.get_direction() is Direction.COUNTER_CLOCKWISE
    assert game.get_current_player().name == "D"
    assert recorder.of(GameEvent.DIRECTION_CHANGE) == [{"direction": Direction.COUNTER_CLOCKWISE}]


def test_reverse_then_play_keeps_going_backwards(make_game) -> None:
    game = make_game(
        ["red_reverse", "red_1", "blue_1", "blue_2", "green_1", "green_2", "red_3", "yellow_2", "red_9"],
        names=("A", "B", "C", "D"),
        hand_size=2,
    )
    game.play_card(Card.parse("red_reverse"))
    game.play_card(Card.parse("red_3"))
    assert game.get_current_player().name == "C"


def test_skip(make_game, recorder) -> None:
    game = make_game(
        ["red_skip", "red_1", "blue_1", "blue_2", "green_1", "green_2", "yellow_1", "yellow_2", "red_9"],
        names=("A", "B", "C", "D"),
        hand_size=2,
    )
    recorder.clear()
    assert game.play_card(Card.parse("red_skip"))
    assert game.get_current_player().name == "C"
    assert _names(recorder.of(GameEvent.PLAYER_SKIPPED)) == ["B"]


def test_stacked_forfeits_skip_consecutive_seats(make_game, recorder) -> None:
    game = make_game(FOUR_SEATS, names=("A", "B", "C", "D"), hand_size=2)
    game.players[1].add_skipped_turns(2)
    recorder.clear()

    assert game.play_card(Card.parse("red_1"))
    assert game.get_current_player().name == "D"
    assert _names(recorder.of(GameEvent.PLAYER_SKIPPED)) == ["B", "C"]
    assert all(p.skipped_turns == 0 for p in game.players)


def test_skip_two(make_game, recorder) -> None:
    game = make_game(
        ["red_skip_two", "red_1", "blue_1", "blue_2", "green_1", "green_2", "yellow_1", "yellow_2", "red_9"],
        names=("A", "B", "C", "D"),
        hand_size=2,
    )
    recorder.clear()
    assert game.play_card(Card.parse("red_skip_two"))
    assert game.get_current_player().name == "D"
    assert _names(recorder.of(GameEvent.PLAYER_SKIPPED)) == ["B", "C"]


def test_skip_two_with_two_players_returns_to_player(make_game, recorder) -> None:
    game = make_game(["red_skip_two", "red_1", "blue_1", "blue_2", "red_9"], hand_size=2)
    alice, bob = game.players
    recorder.clear()

    assert game.play_card(Card.parse("red_skip_two"))
    assert game.get_current_player() is alice
    assert _names(recorder.of(GameEvent.PLAYER_SKIPPED)) == ["bob"]
    assert alice.skipped_turns == 0
    assert bob.skipped_turns == 0


def test_draw_two_makes_next_player_draw_and_skip(make_game, recorder) -> None:
    game = make_game(
        ["red_draw_two", "red_1", "blue_1", "blue_2", "red_9", "green_1", "green_2", "green_3"],
        hand_size=2,
    )
    alice, bob = game.players
    recorder.clear()

    assert game.play_card(Card.parse("red_draw_two"))
    assert _hand(game, 1) == ["blue_1", "blue_2", "green_1", "green_2"]
    assert game.get_current_player() is alice
    drawn = recorder.of(GameEvent.CARD_DRAWN)
    assert drawn[0]["player"] is bob
    assert drawn[0]["count"] == 2
    assert _names(recorder.of(GameEvent.PLAYER_SKIPPED)) == ["bob"]


def test_win_and_score(make_game, recorder) -> None:
    game = make_game(["red_1", "green_7", "green_8", "red_9"], names=("alice", "bob", "carol"))
    alice, bob, carol = game.players
    bob.clear_hand()
    bob.add_cards([Card.parse("red_5"), Card.parse("wild")])
    carol.clear_hand()
    carol.add_cards([Card.parse("blue_skip")])
    recorder.clear()

    assert game.play_card(Card.parse("red_1"))
    assert game.status is GameStatus.ENDED
    assert game.winner is alice
    assert game.score == 75
    assert recorder.kinds() == [GameEvent.CARD_PLAYED, GameEvent.GAME_END]
    assert recorder.of(GameEvent.GAME_END) == [{"winner": alice, "score": 75}]

    snapshot = game.get_game_state()
    assert snapshot.game_over
    assert snapshot.winner == "alice"


def test_no_actions_after_game_end(make_game) -> None:
    game = make_game(["red_1", "green_7", "red_9", "blue_3"])
    game.play_card(Card.parse("red_1"))
    assert game.status is GameStatus.ENDED

    assert not game.play_card(Card.parse("green_7"))
    assert game.draw_card() is None
    assert not game.pass_turn()
    with pytest.raises(InvalidStateError):
        game.add_player(Player("late"))


def test_human_wild_draw_four_suspends_turn(make_game, recorder) -> None:
    game = make_game(
        ["wild_draw_four", "red_1", "blue_1", "blue_2", "green_1", "green_2", "red_9",
         "yellow_1", "yellow_2", "yellow_3", "yellow_4", "yellow_5"],
        names=("alice", "bob", "carol"),
        hand_size=2,
    )
    alice, bob, carol = game.players
    recorder.clear()

    wild = alice.hand[0]
    assert game.play_card(wild)
    assert game.status is GameStatus.AWAITING_COLOR_CHOICE
    assert game.pending_wild is wild
    assert game.get_top_card() is wild
    assert game.get_current_player() is alice
    assert bob.card_count == 2
    assert recorder.kinds() == [GameEvent.CARD_PLAYED]

    # Nothing else may happen until the color is chosen.
    assert not game.play_card(Card.parse("red_1"))
    assert game.draw_card() is None
    assert not game.complete_wild_card_play(wild)
    assert recorder.kinds() == [GameEvent.CARD_PLAYED]

    assert game.complete_wild_card_play(wild, Color.BLUE)
    assert game.status is GameStatus.IN_PROGRESS
    assert game.get_top_card().effective_color is Color.BLUE
    assert bob.card_count == 6
    assert game.get_current_player() is carol
    assert recorder.kinds() == [
        GameEvent.CARD_PLAYED,
        GameEvent.CARD_DRAWN,
        GameEvent.UNO_CALLED,
        GameEvent.PLAYER_SKIPPED,
        GameEvent.TURN_START,
    ]


def test_complete_wild_with_preset_color(make_game) -> None:
    game = make_game(["wild", "red_1", "blue_1", "blue_2", "red_9"], hand_size=2)
    wild = game.players[0].hand[0]
    game.play_card(wild)
    wild.choose_color(Color.YELLOW)
    assert game.complete_wild_card_play(wild)
    assert game.get_current_player().name == "bob"
    assert game.get_top_card().effective_color is Color.YELLOW


def test_complete_wild_with_wild_color_is_rejected(make_game, recorder) -> None:
    game = make_game(["wild", "red_1", "blue_1", "blue_2", "red_9"], hand_size=2)
    wild = game.players[0].hand[0]
    game.play_card(wild)
    recorder.clear()

    assert not game.complete_wild_card_play(wild, Color.WILD)
    assert game.status is GameStatus.AWAITING_COLOR_CHOICE
    assert game.pending_wild is wild
    assert wild.chosen_color is None
    assert recorder.events == []

    assert game.complete_wild_card_play(wild, Color.RED)
    assert game.get_current_player().name == "bob"


def test_complete_wild_without_pending_is_noop(make_game) -> None:
    game = make_game(["red_1", "blue_2", "red_9"])
    assert not game.complete_wild_card_play(Card.parse("wild(red)"))
    assert game.status is GameStatus.IN_PROGRESS


def test_wild_with_color_given_does_not_suspend(make_game) -> None:
    game = make_game(["wild", "red_1", "blue_1", "blue_2", "red_9"], hand_size=2)
    assert game.play_card(Card.parse("wild(green)"))
    assert game.status is GameStatus.IN_PROGRESS
    assert game.get_top_card().effective_color is Color.GREEN
    assert game.get_current_player().name == "bob"


def test_automated_player_chooses_wild_color(make_game) -> None:
    game = make_game(
        ["wild", "blue_1", "red_1", "red_2", "red_9"],
        hand_size=2,
        strategies={"alice": HeuristicStrategy()},
    )
    assert game.play_card(Card.parse("wild"))
    assert game.status is GameStatus.IN_PROGRESS
    assert game.get_top_card().effective_color is Color.BLUE
    assert game.get_current_player().name == "bob"


def test_draw_unplayable_card_ends_turn(make_game, recorder) -> None:
    game = make_game(["green_1", "blue_2", "red_9", "yellow_4"])
    recorder.clear()
    card = game.draw_card()
    assert str(card) == "yellow_4"
    assert _hand(game, 0) == ["green_1", "yellow_4"]
    assert game.get_current_player().name == "bob"
    assert recorder.kinds() == [GameEvent.CARD_DRAWN, GameEvent.TURN_START]


def test_draw_playable_card_keeps_turn(make_game) -> None:
    game = make_game(["green_1", "blue_2", "red_9", "red_4"])
    assert not game.pass_turn()
    card = game.draw_card()
    assert str(card) == "red_4"
    assert game.get_current_player().name == "alice"
    assert game.play_card(card)
    assert game.get_current_player().name == "bob"


def test_pass_after_drawing_playable_card(make_game) -> None:
    game = make_game(["green_1", "blue_2", "red_9", "red_4"])
    game.draw_card()
    assert game.pass_turn()
    assert game.get_current_player().name == "bob"
    assert not game.pass_turn()


def test_draw_with_no_cards_left_passes_turn(make_game) -> None:
    game = make_game(["green_1", "blue_2", "red_9"])
    assert game.draw_card() is None
    assert game.get_current_player().name == "bob"


def test_draw_recycles_discard_pile(make_game) -> None:
    game = make_game(["red_1", "red_2", "blue_3", "blue_4", "red_9"], hand_size=2)
    game.play_card(Card.parse("red_1"))  # red_9 is buried
    assert game.deck.draw_pile_size == 0
    card = game.draw_card()
    assert str(card) == "red_9"
    assert str(game.get_top_card()) == "red_1"


def test_snapshot(make_game) -> None:
    game = make_game(["red_5", "red_6", "blue_1", "blue_2", "red_9"], hand_size=2)
    snapshot = game.get_game_state()
    assert snapshot.players == ("alice", "bob")
    assert snapshot.hand_sizes == {"alice": 2, "bob": 2}
    assert snapshot.current_player == "alice"
    assert snapshot.direction is Direction.CLOCKWISE
    assert str(snapshot.top_card) == "red_9"
    assert snapshot.winner is None
    assert not snapshot.game_over
    assert snapshot.status is GameStatus.IN_PROGRESS


def test_remove_event_listener(make_game, recorder) -> None:
    game = make_game(["red_5", "red_6", "blue_1", "blue_2", "red_9"], hand_size=2)
    game.remove_event_listener(recorder)
    game.remove_event_listener(recorder)
    recorder.clear()
    game.play_card(Card.parse("red_5"))
    assert recorder.events == []


def test_reset_starts_an_independent_round(recorder) -> None:
    players = [Player("p1", HeuristicStrategy()), Player("p2", HeuristicStrategy())]
    game = Game(players, seed=3)
    game.start()
    for _ in range(5000):
        if game.status is GameStatus.ENDED:
            break
        player = game.get_current_player()
        player.strategy.make_move(game, player)
    assert game.status is GameStatus.ENDED

    game.reset()
    assert game.status is GameStatus.NOT_STARTED
    assert game.winner is None
    assert game.score == 0
    assert game.get_direction() is Direction.CLOCKWISE
    assert game.get_top_card() is None
    assert all(p.card_count == 0 and p.skipped_turns == 0 for p in players)
    assert game.deck.total_cards == 108

    game.add_event_listener(recorder)
    game.start()
    assert [p.card_count for p in players] == [7, 7]
    assert game.deck.total_cards + 14 == 108
    assert recorder.kinds() == [GameEvent.GAME_START, GameEvent.TURN_START]


def test_add_player_before_start() -> None:
    game = Game()
    game.add_player(Player("a"))
    game.add_player(Player("b"))
    game.start()
    assert len(game.players) == 2


def test_new_table_deals_fresh_hands_to_returning_players() -> None:
    players = [Player("p1", HeuristicStrategy()), Player("p2", HeuristicStrategy())]
    first = Game(players, seed=1)
    first.start()
    for _ in range(5000):
        if first.status is GameStatus.ENDED:
            break
        player = first.get_current_player()
        player.strategy.make_move(first, player)
    assert first.status is GameStatus.ENDED
    players[0].add_skipped_turns(2)

    second = Game(players, seed=2)
    second.start()
    assert [p.card_count for p in players] == [7, 7]
    assert all(p.skipped_turns == 0 for p in players)
    assert second.deck.total_cards + sum(p.card_count for p in players) == 108


def test_deck_is_built_on_start() -> None:
    game = Game([Player("a"), Player("b")], seed=1)
    assert game.deck.total_cards == 0
    assert game.get_top_card() is None
    game.start()
    assert game.deck.total_cards + 14 == 108
