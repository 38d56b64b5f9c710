"""
Piece operations module — The ONLY way pieces change on a board.

A board is a list of BOARD_SIZE cells, each EMPTY or a player label.
Every transition validates first and then returns a NEW board; the
input board is never mutated, so a rejected action leaves it untouched.

Queries here (empty cells, legal destinations) are pure.
"""

from rota.rules_consts import (
    EMPTY,
    PLAYERS,
    OPPONENT,
    BOARD_SIZE,
    ALL_POSITIONS,
    PHASES,
    PHASE_PLACEMENT,
    PHASE_MOVEMENT,
)
from rota.map.map_data import (
    PreconditionViolation,
    check_index,
    get_adjacent,
)


class IllegalMove(Exception):
    """Raised when a placement or movement violates the rules of Rota."""
    pass


# ============================================================================
# ARGUMENT CHECKS
# ============================================================================

def check_player(player):
    """Raise PreconditionViolation unless player is PLAYER_A or PLAYER_B."""
    if player not in PLAYERS:
        raise PreconditionViolation(f"Unknown player: {player!r}")


def check_phase(phase):
    """Raise PreconditionViolation unless phase is a known phase label."""
    if phase not in PHASES:
        raise PreconditionViolation(f"Unknown phase: {phase!r}")


def check_board(board):
    """Raise PreconditionViolation unless board has one valid cell per position."""
    if len(board) != BOARD_SIZE:
        raise PreconditionViolation(
            f"Board must have {BOARD_SIZE} cells, got {len(board)}"
        )
    for cell in board:
        if cell is not EMPTY and cell not in PLAYERS:
            raise PreconditionViolation(f"Unknown cell value: {cell!r}")


def get_opponent(player):
    """Get the other player."""
    check_player(player)
    return OPPONENT[player]


# ============================================================================
# BOARD CONSTRUCTION AND QUERIES
# ============================================================================

def new_board():
    """Create an empty board."""
    return [EMPTY] * BOARD_SIZE


def snapshot(board):
    """Freeze a board into a hashable tuple for position history."""
    return tuple(board)


def get_empty_positions(board):
    """Get all unowned positions, ascending."""
    return [idx for idx in ALL_POSITIONS if board[idx] is EMPTY]


def get_positions(board, player):
    """Get all positions owned by player, ascending."""
    check_player(player)
    return [idx for idx in ALL_POSITIONS if board[idx] == player]


def count_pieces(board, player=None):
    """Count pieces on the board.

    Args:
        board: Board list.
        player: If given, count only this player's pieces.

    Returns:
        Integer count.
    """
    if player is None:
        return sum(1 for cell in board if cell is not EMPTY)
    return len(get_positions(board, player))


# ============================================================================
# TRANSITIONS
# ============================================================================

def apply_placement(board, index, player):
    """Place one of player's tokens on an empty position.

    Args:
        board: Board list. Not modified.
        index: Target position.
        player: Player placing the token.

    Returns:
        New board list.

    Raises:
        IllegalMove: If the target is occupied.
        PreconditionViolation: If index or player is out of range.
    """
    check_index(index)
    check_player(player)
    if board[index] is not EMPTY:
        raise IllegalMove(
            f"Position {index} is already occupied by {board[index]}"
        )

    new = list(board)
    new[index] = player
    return new


def apply_movement(board, from_index, to_index, player):
    """Slide one of player's pieces one step to an empty adjacent position.

    Args:
        board: Board list. Not modified.
        from_index: Position of the piece to move.
        to_index: Destination position.
        player: Player moving the piece.

    Returns:
        New board list.

    Raises:
        IllegalMove: If player does not own from_index, to_index is
            occupied, or the two are not adjacent.
        PreconditionViolation: If an index or player is out of range.
    """
    check_index(from_index)
    check_index(to_index)
    check_player(player)
    if board[from_index] != player:
        raise IllegalMove(
            f"{player} has no piece at position {from_index}"
        )
    if board[to_index] is not EMPTY:
        raise IllegalMove(
            f"Position {to_index} is already occupied by {board[to_index]}"
        )
    if to_index not in get_adjacent(from_index):
        raise IllegalMove(
            f"Position {to_index} is not adjacent to {from_index}"
        )

    new = list(board)
    new[from_index] = EMPTY
    new[to_index] = player
    return new


# ============================================================================
# LEGAL MOVES
# ============================================================================

def get_valid_moves(board, player, phase, selected_from=None):
    """Get the positions player may act on next.

    Placement: every empty position. Movement: the empty neighbours of
    selected_from, which must be one of player's pieces; with no
    selection (or someone else's piece) there is nothing to move.
    Gameover: nothing.

    Args:
        board: Board list.
        player: Player to move.
        phase: Phase label.
        selected_from: Selected piece position (movement only).

    Returns:
        List of position indices. Ascending for placement, adjacency-table
        order for movement.
    """
    check_player(player)
    check_phase(phase)

    if phase == PHASE_PLACEMENT:
        return get_empty_positions(board)

    if phase == PHASE_MOVEMENT:
        if selected_from is None:
            return []
        check_index(selected_from)
        if board[selected_from] != player:
            return []
        return [idx for idx in get_adjacent(selected_from)
                if board[idx] is EMPTY]

    return []


def get_movement_moves(board, player):
    """Get every (from, to) movement available to player.

    Pieces are taken in ascending position order, destinations in
    adjacency-table order.

    Returns:
        List of (from_index, to_index) tuples. Empty if player is
        immobilized.
    """
    moves = []
    for from_index in get_positions(board, player):
        for to_index in get_valid_moves(board, player, PHASE_MOVEMENT,
                                        from_index):
            moves.append((from_index, to_index))
    return moves
