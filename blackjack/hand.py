"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from blackjack.cards import Card


def best_total(cards: Sequence[Card]) -> int:
    """
    Calculate the best total for a sequence of cards.

    Every Ace starts at 11; while the total is over 21, Aces are counted
    as 1 one at a time. Returns the lowest bust value if no choice of
    Aces stays at or under 21.
    """
    total = 0
    aces = 0

    for card in cards:
        total += card.value
        if card.is_ace:
            aces += 1

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Check for a natural: exactly two cards totalling 21."""
    return len(cards) == 2 and best_total(cards) == 21


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """Return the best total of the hand."""
        return best_total(self.cards)

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return is_blackjack(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def compare_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare a standing player hand against the dealer's final hand.

    The player's hand is assumed not to have busted; a player bust is
    settled before the dealer plays.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    if dealer_hand.is_busted:
        return 1

    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0
