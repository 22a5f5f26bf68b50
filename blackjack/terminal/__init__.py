"""Terminal front end for the blackjack engine."""

from blackjack.terminal.app import TerminalApp, main
from blackjack.terminal.display import Screen, format_hand
from blackjack.terminal.prompts import EndOfInput, Prompter

__all__ = [
    "TerminalApp",
    "main",
    "Screen",
    "format_hand",
    "EndOfInput",
    "Prompter",
]
