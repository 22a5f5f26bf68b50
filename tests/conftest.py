"""Pytest fixtures for terminal blackjack tests."""

import io

import pytest
from random import Random

from blackjack.cards import Card, Deck, Rank, Suit
from blackjack.config import TerminalConfig
from blackjack.hand import Hand
from blackjack.game import Session
from blackjack.terminal.display import Screen


def _make_hand(*cards: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    return Hand([Card.from_string(c) for c in cards])


def _stacked(*cards: str) -> Deck:
    """
    Build a deck dealing the given cards in order.

    Initial deal order is player, dealer, player, dealer.
    """
    return Deck(cards=cards)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def session(rng):
    """A session with the default 100 chips."""
    return Session(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return _make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return _make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.TEN, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return _make_hand("10S", "6H", "KC")


@pytest.fixture
def output():
    """Captured terminal output."""
    return io.StringIO()


@pytest.fixture
def screen(output):
    """A screen writing to the captured output without clear-screen escapes."""
    return Screen(out=output, terminal_config=TerminalConfig(clear_screen=False))


@pytest.fixture
def make_hand():
    """Factory building hands from card strings."""
    return _make_hand


@pytest.fixture
def stacked():
    """Factory building decks that deal cards in a fixed order."""
    return _stacked
