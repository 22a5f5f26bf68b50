"""Round engine, session and state management."""

from blackjack.game.events import EventEmitter, GameEvent, EventType
from blackjack.game.state import RoundOutcome, RoundState
from blackjack.game.engine import BlackjackRound, InvalidBetError, Session

__all__ = [
    "EventEmitter",
    "GameEvent",
    "EventType",
    "RoundOutcome",
    "RoundState",
    "BlackjackRound",
    "InvalidBetError",
    "Session",
]
