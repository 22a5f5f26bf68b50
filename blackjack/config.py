"""Game and terminal configuration."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GameConfig:
    """Fixed table rules."""

    starting_chips: int = 100
    dealer_stands_on: int = 17
    # Naturals pay bet * 3 // 2, rounded down
    blackjack_payout_numerator: int = 3
    blackjack_payout_denominator: int = 2

    def natural_payout(self, bet: int) -> int:
        """Return the whole-chip payout for a player blackjack."""
        return (bet * self.blackjack_payout_numerator) // self.blackjack_payout_denominator


@dataclass(frozen=True)
class TerminalConfig:
    """Terminal rendering options."""

    clear_screen: bool = True
    clear_sequence: str = "\033[H\033[2J"
    hidden_card: str = "??"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    game: GameConfig = field(default_factory=GameConfig)
    terminal: TerminalConfig = field(default_factory=TerminalConfig)


# Global configuration instance
config = AppConfig()
