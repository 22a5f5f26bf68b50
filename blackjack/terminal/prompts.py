"""Blocking line-based prompts."""

import re
import sys
from typing import TextIO

from blackjack.terminal.display import Screen

# ASCII digits only, optional sign
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class EndOfInput(EOFError):
    """Raised when standard input is closed while waiting for a line."""


class Prompter:
    """Reads player input one line at a time, writing prompts to a Screen."""

    def __init__(self, screen: Screen, stdin: TextIO | None = None) -> None:
        self.screen = screen
        self.stdin = stdin or sys.stdin

    def read_line(self, prompt: str = "") -> str:
        """Show a prompt and return the next input line, trimmed."""
        self.screen.write(prompt)
        line = self.stdin.readline()
        if not line:
            raise EndOfInput("Input closed")
        return line.strip()

    def read_int(self, prompt: str) -> int:
        """Prompt until the player enters an integer."""
        while True:
            line = self.read_line(prompt)
            if INTEGER_PATTERN.fullmatch(line):
                return int(line)
            self.screen.line("Enter a number.")

    def read_command(self, prompt: str) -> str:
        """Prompt for a command, lower-cased."""
        return self.read_line(prompt).lower()

    def pause(self) -> None:
        """Wait for the player to press Enter."""
        self.read_line("(Enter) ")
