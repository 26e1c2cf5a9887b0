"""The UNO game engine: turn order, legality, effects, win detection and scoring."""

import random
from typing import List, Optional

from unoengine.engine.card import Card, Color, SUITS
from unoengine.engine.deck import Deck, DeckFactory, StandardDeckFactory
from unoengine.engine.effects import play_effect
from unoengine.engine.errors import InvalidStateError
from unoengine.engine.events import EventEmitter, GameEvent, GameEventListener
from unoengine.engine.game_state import Direction, GameSnapshot, GameStatus
from unoengine.engine.player import Player

INITIAL_HAND_SIZE = 7


class Game:
    """Referee for one table of players.

    All calls are synchronous. Illegal moves return False/None; calling
    lifecycle methods in the wrong state raises InvalidStateError.
    """

    def __init__(
        self,
        players: Optional[List[Player]] = None,
        deck_factory: Optional[DeckFactory] = None,
        initial_hand_size: int = INITIAL_HAND_SIZE,
        seed: Optional[int] = None,
    ):
        self._players: List[Player] = list(players or [])
        self._deck_factory = deck_factory or StandardDeckFactory(seed=seed)
        self._initial_hand_size = initial_hand_size
        self._rng = random.Random(seed)
        self._events = EventEmitter()
        # Empty until start() asks the factory for a deck.
        self._deck = Deck()
        self._current_index = 0
        self._direction = Direction.CLOCKWISE
        self._status = GameStatus.NOT_STARTED
        self._winner: Optional[Player] = None
        self._score = 0
        self._pending_wild: Optional[Card] = None
        self._drew_this_turn = False

    # Events

    def add_event_listener(self, listener: GameEventListener) -> None:
        self._events.add_listener(listener)

    def remove_event_listener(self, listener: GameEventListener) -> None:
        self._events.remove_listener(listener)

    # Lifecycle

    def add_player(self, player: Player) -> None:
        if self._status is GameStatus.ENDED:
            raise InvalidStateError("Cannot add a player after the game has ended")
        self._players.append(player)

    def start(self) -> None:
        """Deal a new round and begin the first turn."""
        if len(self._players) < 2:
            raise InvalidStateError("At least 2 players are required to start the game")
        if self._status is not GameStatus.NOT_STARTED:
            raise InvalidStateError(f"Cannot start a game that is {self._status.value}")

        self._deck = self._deck_factory.create_deck()
        for player in self._players:
            player.clear_hand()
            player.clear_skipped_turns()
            player.add_cards(self._deck.draw_multiple(self._initial_hand_size))

        first_card = self._deck.draw()
        if first_card is not None:
            if first_card.is_wild:
                # Nobody played it, so the table gets a random color.
                first_card.choose_color(self._rng.choice(SUITS))
            self._deck.discard(first_card)

        self._current_index = 0
        self._status = GameStatus.IN_PROGRESS
        self._events.emit(
            GameEvent.GAME_START,
            players=list(self._players),
            top_card=self.get_top_card(),
        )
        self._start_turn()

    def reset(self) -> None:
        """Return to NOT_STARTED with a fresh deck and empty hands."""
        self._deck = self._deck_factory.create_deck()
        for player in self._players:
            player.clear_hand()
            player.clear_skipped_turns()
        self._current_index = 0
        self._direction = Direction.CLOCKWISE
        self._status = GameStatus.NOT_STARTED
        self._winner = None
        self._score = 0
        self._pending_wild = None
        self._drew_this_turn = False

    # Actions

    def play_card(self, card: Card) -> bool:
        """Play card for the current player. Returns False if the move is not allowed."""
        if self._status is not GameStatus.IN_PROGRESS:
            return False
        top = self.get_top_card()
        if top is None or not card.can_play_on(top):
            return False

        player = self.get_current_player()
        played = player.play_card(card)
        if played is None:
            return False

        if played.is_wild:
            if card.chosen_color is not None:
                played.choose_color(card.chosen_color)
            elif played.chosen_color is None and player.strategy is not None:
                played.choose_color(player.strategy.choose_color(player))

            if played.chosen_color is None:
                self._deck.discard(played)
                self._pending_wild = played
                self._status = GameStatus.AWAITING_COLOR_CHOICE
                self._events.emit(GameEvent.CARD_PLAYED, player=player, card=played)
                return True

        play_effect(played, self)
        self._deck.discard(played)
        self._events.emit(GameEvent.CARD_PLAYED, player=player, card=played)
        self._finish_play(player)
        return True

    def complete_wild_card_play(self, card: Card, color: Optional[Color] = None) -> bool:
        """Resume a turn paused on a wild card once its color is chosen."""
        pending = self._pending_wild
        if self._status is not GameStatus.AWAITING_COLOR_CHOICE or pending is None:
            return False
        if not pending.same_face(card):
            return False
        if color is not None:
            if color not in SUITS:
                return False
            card.choose_color(color)
        if card.chosen_color is None:
            return False
        if card is not pending:
            pending.choose_color(card.chosen_color)

        self._pending_wild = None
        self._status = GameStatus.IN_PROGRESS
        play_effect(pending, self)
        self._finish_play(self.get_current_player())
        return True

    def draw_card(self) -> Optional[Card]:
        """Draw one card for the current player.

        An unplayable card ends the turn; a playable one may still be played
        or kept with pass_turn(). When no card is left the turn passes.
        """
        if self._status is not GameStatus.IN_PROGRESS:
            return None

        player = self.get_current_player()
        card = self._deck.draw()
        if card is None:
            self._advance_turn()
            return None

        player.add_card(card)
        self._drew_this_turn = True
        self._events.emit(GameEvent.CARD_DRAWN, player=player, card=card)

        top = self.get_top_card()
        if top is None or not card.can_play_on(top):
            self._advance_turn()
        return card

    def pass_turn(self) -> bool:
        """Keep a playable drawn card and end the turn."""
        if self._status is not GameStatus.IN_PROGRESS or not self._drew_this_turn:
            return False
        self._advance_turn()
        return True

    # Effects called by cards

    def skip_next_player(self, count: int = 1) -> None:
        self._next_player().add_skipped_turns(count)

    def reverse_direction(self) -> None:
        self._direction = Direction(-self._direction)
        self._events.emit(GameEvent.DIRECTION_CHANGE, direction=self._direction)

    def next_player_draws(self, count: int) -> None:
        target = self._next_player()
        cards = self._deck.draw_multiple(count)
        target.add_cards(cards)
        self._events.emit(GameEvent.CARD_DRAWN, player=target, cards=cards, count=len(cards))

    # Queries

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def score(self) -> int:
        return self._score

    @property
    def pending_wild(self) -> Optional[Card]:
        return self._pending_wild

    @property
    def drew_this_turn(self) -> bool:
        return self._drew_this_turn

    def get_current_player(self) -> Player:
        return self._players[self._current_index]

    def get_top_card(self) -> Optional[Card]:
        return self._deck.top_card

    def get_direction(self) -> Direction:
        return self._direction

    def get_game_state(self) -> GameSnapshot:
        return GameSnapshot(
            players=tuple(p.name for p in self._players),
            hand_sizes={p.name: p.card_count for p in self._players},
            current_player_index=self._current_index,
            direction=self._direction,
            top_card=self.get_top_card(),
            winner=self._winner.name if self._winner else None,
            game_over=self._status is GameStatus.ENDED,
            status=self._status,
        )

    # Turn handling

    def _step(self, index: int) -> int:
        return (index + self._direction) % len(self._players)

    def _next_player(self) -> Player:
        return self._players[self._step(self._current_index)]

    def _finish_play(self, player: Player) -> None:
        if self._check_win():
            return
        if player.has_uno():
            self._events.emit(GameEvent.UNO_CALLED, player=player)
        self._advance_turn()

    def _advance_turn(self) -> None:
        index = self._step(self._current_index)
        while self._players[index].consume_skipped_turn():
            skipped = self._players[index]
            self._events.emit(GameEvent.PLAYER_SKIPPED, player=skipped)
            index = self._step(index)
            # Forfeits left on a skipped seat pass on to the next seat in line,
            # but never back to the player whose turn just ended.
            leftover = skipped.clear_skipped_turns()
            if leftover and index != self._current_index:
                self._players[index].add_skipped_turns(leftover)
        self._current_index = index
        self._start_turn()

    def _start_turn(self) -> None:
        self._drew_this_turn = False
        self._events.emit(
            GameEvent.TURN_START,
            player=self.get_current_player(),
            top_card=self.get_top_card(),
        )

    def _check_win(self) -> bool:
        winner = next((p for p in self._players if p.has_won()), None)
        if winner is None:
            return False
        self._winner = winner
        self._score = sum(p.hand_score() for p in self._players if p is not winner)
        self._status = GameStatus.ENDED
        self._events.emit(GameEvent.GAME_END, winner=winner, score=self._score)
        return True
