"""Blackjack round engine with state machine, and the chip-holding session."""

import logging
from random import Random

from transitions import Machine

from blackjack.cards import Card, Deck
from blackjack.config import GameConfig, config
from blackjack.hand import Hand, compare_hands
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.state import RoundOutcome, RoundState

logger = logging.getLogger(__name__)


class InvalidBetError(ValueError):
    """Raised when a bet is outside 1..chips."""


class Session:
    """
    Chip balance and bet bookkeeping that survives across rounds.

    The session is passed explicitly into every round; rounds update
    ``chips`` through it and nothing else holds the balance.
    """

    def __init__(
        self,
        game_config: GameConfig | None = None,
        rng: Random | None = None,
        chips: int | None = None,
    ) -> None:
        """
        Initialize a new session.

        Args:
            game_config: Table rules (uses the global config if not provided)
            rng: Random number generator shared by every deck of the session
            chips: Opening balance (defaults to the configured starting chips)
        """
        self.config = game_config or config.game
        self.rng = rng or Random()
        self.chips = self.config.starting_chips if chips is None else chips
        self.rounds_played = 0
        self.events = EventEmitter()

    @property
    def is_bankrupt(self) -> bool:
        """Check if the player has run out of chips."""
        return self.chips <= 0

    def is_valid_bet(self, amount: int) -> bool:
        """Check that a bet is between 1 and the current balance."""
        return 0 < amount <= self.chips

    def restart(self) -> None:
        """Reset the balance to the starting chips."""
        self.chips = self.config.starting_chips
        logger.info("Chips reset to %d", self.chips)
        self.events.emit_new(EventType.CHIPS_RESET, chips=self.chips)

    def open_round(self, bet: int, deck: Deck | None = None) -> "BlackjackRound":
        """
        Place a bet and deal a new round.

        Args:
            bet: Bet amount, 1..chips
            deck: Deck to deal from (a freshly shuffled one if not provided)

        Returns:
            The dealt round, possibly already complete if a natural was dealt
        """
        if not self.is_valid_bet(bet):
            raise InvalidBetError(f"Bet must be between 1 and {self.chips}, got {bet}")

        # History only covers the round in play
        self.events.clear_history()
        self.rounds_played += 1
        self.events.emit_new(EventType.BET_PLACED, amount=bet, round=self.rounds_played)

        round_ = BlackjackRound(self, bet, deck=deck)
        round_.start()
        return round_


class BlackjackRound:
    """
    One round of blackjack using a state machine.

    This is the core game logic, completely UI-agnostic.
    Communication happens through events and return values only.
    """

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "cards_dealt", "source": "dealing", "dest": "natural_check"},
        {"trigger": "natural_resolved", "source": "natural_check", "dest": "complete"},
        {"trigger": "no_naturals", "source": "natural_check", "dest": "player_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "complete"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "abandon", "source": "player_turn", "dest": "abandoned"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "settlement"},
        {"trigger": "settled", "source": "settlement", "dest": "complete"},
    ]

    def __init__(self, session: Session, bet: int, deck: Deck | None = None) -> None:
        """
        Initialize a round. Cards are not dealt until start().

        Args:
            session: Session holding the chip balance
            bet: Opening bet
            deck: Deck to deal from (a freshly shuffled one if not provided)
        """
        self.session = session
        self.config = session.config
        self.events = session.events
        self.deck = deck or Deck(rng=session.rng)

        self.bet = bet
        self.doubled = False
        self.player_bust = False
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.outcome: RoundOutcome | None = None
        self.chip_delta = 0

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="dealing",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    @property
    def finished(self) -> bool:
        """Check if the round has been settled or abandoned."""
        return self.state in (RoundState.COMPLETE, RoundState.ABANDONED)

    @property
    def can_double(self) -> bool:
        """Check if doubling is allowed."""
        return (
            self.state == RoundState.PLAYER_TURN
            and not self.doubled
            and self.session.chips >= self.bet
        )

    def start(self) -> bool:
        """
        Deal the initial cards and check for naturals.

        Returns:
            True if the round continues to the player's turn
        """
        if self.state != RoundState.DEALING:
            return self._reject("deal")

        # Deal: player, dealer, player, dealer
        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.dealer_hand)
        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.dealer_hand, face_up=False)

        self.events.emit_new(EventType.ROUND_STARTED, bet=self.bet)
        self.cards_dealt()

        return self._check_naturals()

    def _check_naturals(self) -> bool:
        """Resolve the round immediately if either hand is a blackjack."""
        player_bj = self.player_hand.is_blackjack
        dealer_bj = self.dealer_hand.is_blackjack

        if not (player_bj or dealer_bj):
            self.no_naturals()
            return True

        if player_bj:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
        if dealer_bj:
            self.events.emit_new(EventType.DEALER_BLACKJACK)

        if player_bj and dealer_bj:
            self._apply_result(RoundOutcome.BLACKJACK_PUSH, 0)
        elif player_bj:
            self._apply_result(RoundOutcome.PLAYER_BLACKJACK, self.config.natural_payout(self.bet))
        else:
            self._apply_result(RoundOutcome.DEALER_BLACKJACK, -self.bet)

        self.natural_resolved()
        return False

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand."""
        card = self.deck.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if hand is self.dealer_hand else "player",
        )
        return card

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        if self.state != RoundState.PLAYER_TURN:
            return self._reject("hit")

        self._deal_card_to_hand(self.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_hand.value)

        if self.player_hand.is_busted:
            self._bust()
            return True

        self.player_action()  # Stay in player turn
        return True

    def stand(self) -> bool:
        """Player stands (keeps current hand)."""
        if self.state != RoundState.PLAYER_TURN:
            return self._reject("stand")

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)
        self.player_done()
        self._play_dealer()
        return True

    def double_down(self) -> bool:
        """
        Player doubles down.

        The original bet is taken from the chips straight away, the bet is
        doubled and exactly one card is dealt. Settlement then uses the
        doubled bet, so a doubled bust costs both the up-front deduction and
        the doubled bet.
        """
        if self.state != RoundState.PLAYER_TURN:
            return self._reject("double")

        if self.doubled:
            self.events.emit_new(EventType.INVALID_ACTION, message="Already doubled.")
            return False

        if self.session.chips < self.bet:
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                message="Not enough chips to double.",
                required=self.bet,
                available=self.session.chips,
            )
            return False

        self.session.chips -= self.bet
        self.bet *= 2
        self.doubled = True

        self._deal_card_to_hand(self.player_hand)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_value=self.player_hand.value,
            new_bet=self.bet,
        )

        if self.player_hand.is_busted:
            self._bust()
            return True

        self.player_done()
        self._play_dealer()
        return True

    def quit(self) -> bool:
        """Abandon the round without settling anything."""
        if self.state != RoundState.PLAYER_TURN:
            return self._reject("quit")

        self.outcome = RoundOutcome.QUIT
        self.events.emit_new(EventType.ROUND_ABANDONED, bet=self.bet)
        self.abandon()
        return True

    def _reject(self, action: str) -> bool:
        self.events.emit_new(
            EventType.INVALID_ACTION,
            message=f"Cannot {action} in current state",
            state=self.state.name,
        )
        return False

    def _bust(self) -> None:
        """Settle a player bust: the full current bet is lost."""
        self.player_bust = True
        self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player_hand.value)
        self._apply_result(RoundOutcome.PLAYER_BUST, -self.bet)
        self.player_busts()

    def _play_dealer(self) -> None:
        """Dealer reveals and draws to the stand total."""
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(self.dealer_hand.cards[1]),
            hand_value=self.dealer_hand.value,
        )

        while self.dealer_hand.value < self.config.dealer_stands_on:
            self._deal_card_to_hand(self.dealer_hand)
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

        self.dealer_done()
        self._settle()

    def _settle(self) -> None:
        """Compare totals and pay out the final bet."""
        result = compare_hands(self.player_hand, self.dealer_hand)

        if result == 1:
            outcome = RoundOutcome.DEALER_BUST if self.dealer_hand.is_busted else RoundOutcome.PLAYER_WINS
            self._apply_result(outcome, self.bet)
        elif result == -1:
            self._apply_result(RoundOutcome.DEALER_WINS, -self.bet)
        else:
            self._apply_result(RoundOutcome.PUSH, 0)

        self.settled()

    def _apply_result(self, outcome: RoundOutcome, delta: int) -> None:
        """Record the outcome and move the chip delta into the session."""
        self.outcome = outcome
        self.chip_delta = delta
        self.session.chips += delta

        if delta > 0:
            self.events.emit_new(EventType.PLAYER_WINS, amount=delta)
        elif delta < 0:
            self.events.emit_new(EventType.PLAYER_LOSES, amount=-delta)
        else:
            self.events.emit_new(EventType.PUSH)

        logger.info(
            "Round %d: %s, delta %+d, chips %d",
            self.session.rounds_played,
            outcome.name,
            delta,
            self.session.chips,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            outcome=outcome.name,
            result=delta,
            chips=self.session.chips,
        )
