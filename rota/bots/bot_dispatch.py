"""
Bot dispatch — Route a turn to the bot only when the player to move is
automated.

Human turns, finished games and misconfigured sessions never reach
select_move.
"""

from rota.rules_consts import PLAYABLE_PHASES
from rota.bots.rota_bot import select_move


class BotDispatchError(Exception):
    """Raised when a bot turn is requested for a player or phase it cannot serve."""
    pass


def is_non_player(state, player):
    """Check if player is driven by the bot in this session."""
    return player in state["non_players"]


def dispatch_bot_turn(state):
    """Ask the bot for the current player's action.

    Args:
        state: Game state dict. Not modified.

    Returns:
        Move dict from select_move, or None if the bot cannot move.

    Raises:
        BotDispatchError: If the game is over or the player to move is
            not a Non-Player.
    """
    phase = state["phase"]
    player = state["turn"]

    if phase not in PLAYABLE_PHASES:
        raise BotDispatchError(
            f"No bot turn in phase '{phase}'"
        )

    if not is_non_player(state, player):
        raise BotDispatchError(
            f"Player '{player}' is not marked as a Non-Player in state. "
            f"Current NPs: {sorted(state['non_players'])}"
        )

    return select_move(state["board"], phase, player, state["rng"])
