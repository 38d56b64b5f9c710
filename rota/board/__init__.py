"""Board module — Board construction, transitions and legal-move queries."""

from rota.board.pieces import (
    IllegalMove,
    new_board,
    snapshot,
    apply_placement,
    apply_movement,
    get_valid_moves,
    get_movement_moves,
    get_empty_positions,
    get_positions,
    count_pieces,
    get_opponent,
)

__all__ = [
    "IllegalMove",
    "new_board",
    "snapshot",
    "apply_placement",
    "apply_movement",
    "get_valid_moves",
    "get_movement_moves",
    "get_empty_positions",
    "get_positions",
    "count_pieces",
    "get_opponent",
]
