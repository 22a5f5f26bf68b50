"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator


class DeckExhaustedError(IndexError):
    """Raised when drawing from a deck with no cards left."""


class Suit(Enum):
    """Card suits, in deck construction order."""

    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks, in deck construction order."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


_RANK_ALIASES = {"T": Rank.TEN}

_SUIT_ALIASES = {
    "S": Suit.SPADES,
    "H": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "C": Suit.CLUBS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value.

        Aces are always 11 here; counting one as 1 happens when a whole
        hand is evaluated.
        """
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like 'A♠', 'AS', '10h'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        try:
            rank = _RANK_ALIASES.get(rank_str) or Rank(rank_str)
        except ValueError:
            raise ValueError(f"Invalid rank: {rank_str}") from None

        try:
            suit = _SUIT_ALIASES.get(suit_str) or Suit(suit_str)
        except ValueError:
            raise ValueError(f"Invalid suit: {suit_str}") from None

        return cls(rank, suit)


def full_deck() -> list[Card]:
    """Return all 52 cards in construction order (suit-major)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """A standard 52-card deck, shuffled once and dealt front to back."""

    def __init__(
        self,
        rng: Random | None = None,
        *,
        cards: Iterable[Card | str] | None = None,
    ) -> None:
        """
        Build the 52 cards and shuffle them.

        Args:
            rng: Random number generator for shuffling
            cards: Fixed dealing order instead of a shuffled full deck;
                strings are parsed with Card.from_string
        """
        self._rng = rng or Random()
        self._position = 0

        if cards is not None:
            self._cards: list[Card] = [
                Card.from_string(c) if isinstance(c, str) else c for c in cards
            ]
            return

        self._cards = full_deck()
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw the next undealt card."""
        if self._position >= len(self._cards):
            raise DeckExhaustedError("Cannot draw from empty deck")
        card = self._cards[self._position]
        self._position += 1
        return card

    def __len__(self) -> int:
        return self.cards_remaining

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards[self._position:])

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards) - self._position

    @property
    def cards_dealt(self) -> int:
        """Return the number of cards dealt."""
        return self._position
