"""Main entry point for the terminal blackjack game."""

import logging
import sys
from typing import Callable

from blackjack.cards import Deck, DeckExhaustedError
from blackjack.config import AppConfig, config
from blackjack.game.engine import BlackjackRound, Session
from blackjack.game.events import EventType
from blackjack.terminal.display import Screen
from blackjack.terminal.prompts import EndOfInput, Prompter

logger = logging.getLogger(__name__)

COMMAND_PROMPT = "Command [h=hit, s=stand, d=double, q=quit]: "


class TerminalApp:
    """Session loop: betting, one round at a time, restart on bankruptcy."""

    def __init__(
        self,
        session: Session | None = None,
        screen: Screen | None = None,
        prompter: Prompter | None = None,
        deck_factory: Callable[[], Deck] | None = None,
    ) -> None:
        """
        Initialize the application.

        Args:
            session: Chip-holding session (a fresh one if not provided)
            screen: Output screen (stdout if not provided)
            prompter: Input reader (stdin if not provided)
            deck_factory: Supplies each round's deck; rounds shuffle their own if None
        """
        self.session = session or Session()
        self.screen = screen or Screen()
        self.prompter = prompter or Prompter(self.screen)
        self.deck_factory = deck_factory
        self.running = True

    def run(self) -> None:
        """Run rounds until the player quits, bets 0, or declines a restart."""
        try:
            while self.running:
                self._play_once()
        except EndOfInput:
            logger.info("Input closed, leaving the table")
            self.running = False

    def _play_once(self) -> None:
        self.screen.header(self.session.chips)

        if self.session.is_bankrupt:
            self._offer_restart()
            return

        bet = self._read_bet()
        if bet == 0:
            self.running = False
            return

        deck = self.deck_factory() if self.deck_factory else None
        round_ = self.session.open_round(bet, deck=deck)

        if not round_.finished:
            self._player_turn(round_)
            if not self.running:
                return

        self.screen.result(round_)
        self.prompter.pause()

    def _offer_restart(self) -> None:
        self.screen.line("You're out of chips.")
        answer = self.prompter.read_command(
            f"Restart with {self.session.config.starting_chips}? (y/n): "
        )
        if answer == "y":
            self.session.restart()
        else:
            self.running = False

    def _read_bet(self) -> int:
        """Prompt for a bet in 1..chips; 0 means leave the table."""
        while True:
            bet = self.prompter.read_int(f"Bet (1-{self.session.chips}, 0 to quit): ")
            if bet == 0 or self.session.is_valid_bet(bet):
                return bet
            self.screen.line("Invalid bet.")

    def _player_turn(self, round_: BlackjackRound) -> None:
        """Read commands until the round is finished or the player quits."""
        while not round_.finished:
            self.screen.player_turn(round_)
            command = self.prompter.read_command(COMMAND_PROMPT)

            if command == "q":
                round_.quit()
                self.running = False
            elif command == "h":
                round_.hit()
            elif command == "s":
                round_.stand()
            elif command == "d":
                if not round_.double_down():
                    refusal = round_.events.last(
                        EventType.INVALID_ACTION, EventType.INSUFFICIENT_FUNDS
                    )
                    self.screen.line(refusal.message if refusal else "Cannot double.")
                    self.prompter.pause()
            else:
                self.screen.line("Invalid command.")
                self.prompter.pause()


def main(app_config: AppConfig = config) -> int:
    """Console entry point."""
    logging.basicConfig(
        level=app_config.log_level,
        format=app_config.log_format,
        stream=sys.stderr,
    )

    app = TerminalApp(Session(app_config.game), Screen(terminal_config=app_config.terminal))
    try:
        app.run()
    except DeckExhaustedError:
        logger.critical("Deck ran out of cards mid-round", exc_info=True)
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
