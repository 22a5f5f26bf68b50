"""End-to-end tests for the terminal session loop with scripted input."""

import io
import logging
from unittest.mock import patch

import pytest

from blackjack.cards import DeckExhaustedError
from blackjack.game import Session
from blackjack.terminal.app import TerminalApp, main
from blackjack.terminal.prompts import EndOfInput, Prompter


@pytest.fixture
def make_app(screen, stacked):
    """Build an app reading the given lines and dealing stacked decks."""

    def _make_app(lines, *decks, chips=100):
        stdin = io.StringIO("".join(line + "\n" for line in lines))
        queued = iter([stacked(*cards) for cards in decks])
        return TerminalApp(
            session=Session(chips=chips),
            screen=screen,
            prompter=Prompter(screen, stdin),
            deck_factory=lambda: next(queued),
        )

    return _make_app


class TestPrompter:
    """Tests for the line reader."""

    def test_read_int_reprompts_on_text(self, screen, output):
        """Test non-numeric input is reported and re-asked."""
        prompter = Prompter(screen, io.StringIO("abc\n 12 \n"))
        assert prompter.read_int("N: ") == 12
        assert output.getvalue() == "N: Enter a number.\nN: "

    @pytest.mark.parametrize("text", ["1_0", "١٢", "１０", "1.5", "0x10", "--3", ""])
    def test_read_int_rejects_non_ascii_integers(self, screen, output, text):
        """Test only signed ASCII digit strings count as numbers."""
        prompter = Prompter(screen, io.StringIO(text + "\n7\n"))
        assert prompter.read_int("N: ") == 7
        assert output.getvalue() == "N: Enter a number.\nN: "

    @pytest.mark.parametrize("text, value", [("+5", 5), ("-3", -3), ("007", 7)])
    def test_read_int_accepts_signed_digits(self, screen, text, value):
        """Test an optional sign and leading zeros are allowed."""
        prompter = Prompter(screen, io.StringIO(text + "\n"))
        assert prompter.read_int("N: ") == value

    def test_read_command_lowercases(self, screen):
        """Test commands are trimmed and lower-cased."""
        prompter = Prompter(screen, io.StringIO("  H \n"))
        assert prompter.read_command("> ") == "h"

    def test_eof_raises(self, screen):
        """Test a closed input stream is reported."""
        prompter = Prompter(screen, io.StringIO(""))
        with pytest.raises(EndOfInput):
            prompter.read_line("> ")


class TestBetting:
    """Tests for the bet prompt."""

    def test_zero_bet_ends_session(self, make_app, output):
        """Test betting 0 leaves the table."""
        app = make_app(["0"])
        app.run()
        assert not app.running
        assert output.getvalue() == "BLACKJACK  |  Chips: 100\nBet (1-100, 0 to quit): "

    def test_non_number_reprompts(self, make_app, output):
        """Test text where a bet is expected."""
        app = make_app(["ten", "0"])
        app.run()
        assert "Enter a number." in output.getvalue()
        assert output.getvalue().count("Bet (1-100, 0 to quit): ") == 2

    @pytest.mark.parametrize("bet", ["-3", "101"])
    def test_out_of_range_bet_reprompts(self, make_app, output, bet):
        """Test bets outside 1..chips are refused."""
        app = make_app([bet, "0"])
        app.run()
        assert "Invalid bet." in output.getvalue()
        assert app.session.chips == 100
        assert app.session.rounds_played == 0


class TestRounds:
    """Tests for complete rounds through the terminal."""

    def test_stand_and_lose_to_dealer_21(self, make_app, output):
        """Test chips 100, bet 50, 19 stands, dealer draws to 21, chips 50."""
        app = make_app(["50", "s", "", "0"], ("10S", "10H", "9D", "6C", "5S"))
        app.run()
        text = output.getvalue()
        assert "Dealer: [10♥, ??]" in text
        assert "Dealer: [10♥, 6♣, 5♠]  (21)" in text
        assert "You lose -50" in text
        assert app.session.chips == 50
        assert text.endswith("BLACKJACK  |  Chips: 50\nBet (1-50, 0 to quit): ")

    def test_commands_are_case_insensitive(self, make_app):
        """Test upper-case commands are accepted."""
        app = make_app(["10", "S", "", "0"], ("10S", "10H", "9D", "7C"))
        app.run()
        assert app.session.chips == 110

    def test_hit_redraws_until_stand(self, make_app, output):
        """Test a safe hit goes straight back to the command prompt."""
        app = make_app(["10", "h", "s", "", "0"], ("2S", "10H", "3D", "8C", "9S"))
        app.run()
        text = output.getvalue()
        assert "You:    [2♠, 3♦, 9♠]  (14)" in text
        assert text.count("Command [h=hit, s=stand, d=double, q=quit]: ") == 2
        assert app.session.chips == 90

    def test_natural_skips_player_turn(self, make_app, output):
        """Test a player blackjack settles without asking for a command."""
        app = make_app(["10", "", "0"], ("AS", "9H", "KD", "7C"))
        app.run()
        text = output.getvalue()
        assert "Blackjack! You win +15" in text
        assert "Command [" not in text
        assert app.session.chips == 115

    def test_invalid_command_needs_enter(self, make_app, output):
        """Test unknown commands are reported and acknowledged."""
        app = make_app(["10", "x", "", "s", "", "0"], ("10S", "10H", "8D", "8C"))
        app.run()
        text = output.getvalue()
        assert "Invalid command.\n(Enter) " in text
        assert "Push." in text
        assert app.session.chips == 100

    def test_double_then_bust(self, make_app, output):
        """Test the doubled bust through the terminal leaves 40 of 100."""
        app = make_app(["20", "d", "", "0"], ("10S", "10H", "6D", "7C", "KS"))
        app.run()
        assert "Bust. You lose -40" in output.getvalue()
        assert app.session.chips == 40

    def test_quit_mid_round(self, make_app, output):
        """Test q leaves at once without settling the round."""
        app = make_app(["10", "q", "0"], ("10S", "10H", "8D", "6C"))
        app.run()
        assert not app.running
        assert app.session.chips == 100
        assert "You win" not in output.getvalue()
        assert "You lose" not in output.getvalue()

    def test_end_of_input_stops_quietly(self, make_app):
        """Test a closed stdin ends the session."""
        app = make_app(["10"], ("10S", "10H", "8D", "6C"))
        app.run()
        assert not app.running
        assert app.session.chips == 100


class TestBankruptcy:
    """Tests for the restart prompt."""

    def test_restart_resets_to_100(self, make_app, output):
        """Test 'y' after losing everything restores exactly 100 chips."""
        app = make_app(["10", "", "Y", "0"], ("9S", "AH", "7D", "KC"), chips=10)
        app.run()
        text = output.getvalue()
        assert "You're out of chips.\nRestart with 100? (y/n): " in text
        assert app.session.chips == 100
        assert text.endswith("BLACKJACK  |  Chips: 100\nBet (1-100, 0 to quit): ")

    def test_declining_restart_ends_session(self, make_app):
        """Test anything but 'y' leaves the table."""
        app = make_app(["10", "", "n"], ("9S", "AH", "7D", "KC"), chips=10)
        app.run()
        assert not app.running
        assert app.session.chips == 0


class TestMain:
    """Tests for the console entry point."""

    def test_main_returns_zero(self, monkeypatch, capsys):
        """Test a session ended with bet 0 exits cleanly."""
        monkeypatch.setattr("sys.stdin", io.StringIO("0\n"))
        assert main() == 0
        assert "BLACKJACK  |  Chips: 100" in capsys.readouterr().out

    def test_deck_exhaustion_is_fatal(self, caplog):
        """Test running out of cards is logged and re-raised."""
        with patch.object(TerminalApp, "run", side_effect=DeckExhaustedError("empty")):
            with caplog.at_level(logging.CRITICAL):
                with pytest.raises(DeckExhaustedError):
                    main()
        assert "Deck ran out of cards" in caplog.text
