"""
Shared bot behaviors.

Random selection over equal-priority candidates and one-ply simulation
helpers. Simulations build new boards through board/pieces.py and never
touch the board they are given.
"""

import random

from rota.board.pieces import apply_placement, apply_movement
from rota.engine.victory import check_winner


# ============================================================================
# Random Selection
# ============================================================================

def random_select(rng, candidates):
    """Select one candidate uniformly at random.

    Args:
        rng: random.Random instance, or None for the module-level RNG.
            Pass the session RNG for deterministic replay.
        candidates: Sequence of candidates (must be non-empty).

    Returns:
        One selected candidate.

    Raises:
        ValueError: If candidates is empty.
    """
    if not candidates:
        raise ValueError("Cannot random_select from empty candidates")
    if len(candidates) == 1:
        return candidates[0]
    if rng is None:
        rng = random
    idx = rng.randint(0, len(candidates) - 1)
    return candidates[idx]


# ============================================================================
# One-ply Simulation
# ============================================================================

def placement_wins(board, index, player):
    """Would placing player's token at index complete a line for player?"""
    return check_winner(apply_placement(board, index, player)) == player


def movement_wins(board, from_index, to_index, player):
    """Would moving player's piece from_index -> to_index complete a line?"""
    after = apply_movement(board, from_index, to_index, player)
    return check_winner(after) == player
