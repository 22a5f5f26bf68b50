"""Terminal blackjack - core engine is UI-agnostic, terminal front end in blackjack.terminal."""

from blackjack.cards import Card, Deck, DeckExhaustedError, Rank, Suit
from blackjack.hand import Hand, best_total, is_blackjack

__all__ = [
    "Card",
    "Deck",
    "DeckExhaustedError",
    "Rank",
    "Suit",
    "Hand",
    "best_total",
    "is_blackjack",
]
