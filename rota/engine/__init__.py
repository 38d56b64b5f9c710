"""Engine package — Victory checks and the session controller.

Modules:
  victory — Winner, winning line, imminent threat and repetition checks
  game_engine — Phase transitions, turn alternation, bot turns, reset

game_engine depends on the bots package, which depends on victory, so
it is imported by its full path rather than re-exported here.
"""

from rota.engine.victory import (
    check_winner,
    find_winning_line,
    has_imminent_threat,
    count_occurrences,
    is_repetition,
)

__all__ = [
    "check_winner",
    "find_winning_line",
    "has_imminent_threat",
    "count_occurrences",
    "is_repetition",
]
