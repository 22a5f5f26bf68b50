"""Text rendering of hands, tables and round results."""

import sys
from typing import TextIO

from blackjack.config import TerminalConfig, config
from blackjack.game.engine import BlackjackRound
from blackjack.game.state import RoundOutcome
from blackjack.hand import Hand


def format_hand(hand: Hand, hide_second: bool = False, hidden_card: str = "??") -> str:
    """
    Render a hand as a list-like string, e.g. ``[A♠, 10♥]``.

    With hide_second, only the first card is shown followed by a
    placeholder; cards after the second are omitted. Hands with fewer
    than two cards are never masked.
    """
    tokens = [str(card) for card in hand]
    if hide_second and len(tokens) >= 2:
        tokens = [tokens[0], hidden_card]
    return "[" + ", ".join(tokens) + "]"


def result_message(round_: BlackjackRound) -> str:
    """Describe how a finished round was settled."""
    outcome = round_.outcome
    bet = round_.bet

    if outcome == RoundOutcome.BLACKJACK_PUSH:
        return "Push (both blackjack)."
    if outcome == RoundOutcome.PLAYER_BLACKJACK:
        return f"Blackjack! You win +{round_.chip_delta}"
    if outcome == RoundOutcome.DEALER_BLACKJACK:
        return f"Dealer blackjack. You lose -{bet}"
    if outcome == RoundOutcome.PLAYER_BUST:
        return f"Bust. You lose -{bet}"
    if outcome == RoundOutcome.DEALER_BUST:
        return f"Dealer busts. You win +{bet}"
    if outcome == RoundOutcome.PLAYER_WINS:
        return f"You win +{bet}"
    if outcome == RoundOutcome.DEALER_WINS:
        return f"You lose -{bet}"
    if outcome == RoundOutcome.PUSH:
        return "Push."
    raise ValueError(f"Round has no result to show: {outcome}")


class Screen:
    """Writes redrawn screens to a text stream."""

    def __init__(self, out: TextIO | None = None, terminal_config: TerminalConfig | None = None) -> None:
        self.out = out or sys.stdout
        self.config = terminal_config or config.terminal

    def write(self, text: str) -> None:
        """Write text without a newline and flush."""
        self.out.write(text)
        self.out.flush()

    def line(self, text: str = "") -> None:
        self.write(text + "\n")

    def clear(self) -> None:
        if self.config.clear_screen:
            self.write(self.config.clear_sequence)

    def header(self, chips: int) -> None:
        """Clear and print the chip balance header."""
        self.clear()
        self.line(f"BLACKJACK  |  Chips: {chips}")

    def table(self, round_: BlackjackRound) -> None:
        """Clear and print both hands face up with their totals."""
        self.clear()
        dealer = round_.dealer_hand
        player = round_.player_hand
        self.line(f"Dealer: {format_hand(dealer)}  ({dealer.value})")
        self.line(f"You:    {format_hand(player)}  ({player.value})")

    def player_turn(self, round_: BlackjackRound) -> None:
        """Clear and print the table with the dealer's hole card hidden."""
        self.clear()
        player = round_.player_hand
        masked = format_hand(round_.dealer_hand, hide_second=True, hidden_card=self.config.hidden_card)
        self.line(f"Dealer: {masked}")
        self.line(f"You:    {format_hand(player)}  ({player.value})")
        self.line(f"Bet: {round_.bet}" + (" (doubled)" if round_.doubled else ""))

    def result(self, round_: BlackjackRound) -> None:
        """Print the revealed table and the settlement line."""
        self.table(round_)
        self.line(result_message(round_))
