"""Allow ``python -m blackjack``."""

import sys

from blackjack.terminal.app import main

sys.exit(main())
