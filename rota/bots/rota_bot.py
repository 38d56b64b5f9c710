"""
Rota bot — Move selection for the automated player.

A shallow tactical flowchart, evaluated top to bottom:

  1. Win now   — any legal action that completes a line for the bot.
  2. Block     — placement only: take a cell that would complete a line
                 for the opponent.
  3. Hub       — placement only: take the center if it is empty.
  4. Random    — any legal action, uniformly.

Steps 1-2 scan candidates in a fixed order, so the same board always
yields the same winning or blocking action. Movement has no blocking
step.
"""

import logging

from rota.rules_consts import (
    EMPTY,
    HUB,
    PHASE_PLACEMENT,
    PHASE_MOVEMENT,
)
from rota.map.map_data import PreconditionViolation
from rota.board.pieces import (
    check_player,
    get_opponent,
    get_empty_positions,
    get_movement_moves,
)
from rota.bots.bot_common import (
    random_select,
    placement_wins,
    movement_wins,
)

logger = logging.getLogger(__name__)


# Decision labels reported in the debug log
DECISION_WIN = "win"
DECISION_BLOCK = "block"
DECISION_HUB = "hub"
DECISION_RANDOM = "random"
DECISION_NO_MOVE = "no_move"


def _select_placement(board, ai_player, rng):
    """Walk the placement flowchart.

    Returns:
        (decision, move dict).
    """
    empty = get_empty_positions(board)
    if not empty:
        raise PreconditionViolation("Placement phase with a full board")

    for idx in empty:
        if placement_wins(board, idx, ai_player):
            return DECISION_WIN, {"to": idx}

    opponent = get_opponent(ai_player)
    for idx in empty:
        if placement_wins(board, idx, opponent):
            return DECISION_BLOCK, {"to": idx}

    if board[HUB] is EMPTY:
        return DECISION_HUB, {"to": HUB}

    return DECISION_RANDOM, {"to": random_select(rng, empty)}


def _select_movement(board, ai_player, rng):
    """Walk the movement flowchart.

    Returns:
        (decision, move dict or None when the bot cannot move).
    """
    moves = get_movement_moves(board, ai_player)
    if not moves:
        return DECISION_NO_MOVE, None

    for from_index, to_index in moves:
        if movement_wins(board, from_index, to_index, ai_player):
            return DECISION_WIN, {"from": from_index, "to": to_index}

    from_index, to_index = random_select(rng, moves)
    return DECISION_RANDOM, {"from": from_index, "to": to_index}


def select_move(board, phase, ai_player, rng=None):
    """Choose the bot's next action.

    Args:
        board: Board list. Not modified.
        phase: PHASE_PLACEMENT or PHASE_MOVEMENT.
        ai_player: Player the bot controls.
        rng: random.Random for the fallback step. None uses the
            module-level RNG.

    Returns:
        {"to": index} in placement, {"from": index, "to": index} in
        movement, or None if the bot has no legal movement.

    Raises:
        PreconditionViolation: If phase is not placement or movement.
    """
    check_player(ai_player)

    if phase == PHASE_PLACEMENT:
        decision, move = _select_placement(board, ai_player, rng)
    elif phase == PHASE_MOVEMENT:
        decision, move = _select_movement(board, ai_player, rng)
    else:
        raise PreconditionViolation(
            f"Cannot select a move in phase {phase!r}"
        )

    logger.debug("%s bot (%s): %s -> %s", ai_player, phase, decision, move)
    return move
