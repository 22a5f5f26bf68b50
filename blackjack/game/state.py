"""Round state and outcome enumerations."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: DEALING → NATURAL_CHECK → PLAYER_TURN → DEALER_TURN → SETTLEMENT → COMPLETE
    """

    # Initial cards being dealt
    DEALING = auto()

    # Either hand may be a natural
    NATURAL_CHECK = auto()

    # Player actions
    PLAYER_TURN = auto()

    # Dealer plays
    DEALER_TURN = auto()

    # Comparing totals
    SETTLEMENT = auto()

    # Chips have been settled
    COMPLETE = auto()

    # Player quit mid-round, nothing settled
    ABANDONED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class RoundOutcome(Enum):
    """How a round ended."""

    BLACKJACK_PUSH = auto()
    PLAYER_BLACKJACK = auto()
    DEALER_BLACKJACK = auto()
    PLAYER_BUST = auto()
    DEALER_BUST = auto()
    PLAYER_WINS = auto()
    DEALER_WINS = auto()
    PUSH = auto()
    QUIT = auto()
