"""Victory module — Win, threat and repetition checks.

All functions are pure predicates over an explicit board snapshot. Line
scans follow WINNING_LINES declaration order, so when several lines are
complete the first one declared is reported.
"""

from rota.rules_consts import (
    EMPTY,
    WINNING_LINES,
    PHASE_PLACEMENT,
    PHASE_MOVEMENT,
    REPETITION_THRESHOLD,
)
from rota.map.map_data import get_adjacent
from rota.board.pieces import check_player, check_phase, get_positions


def check_winner(board):
    """Check if any line is fully owned by one player.

    Args:
        board: Board list.

    Returns:
        The owning player of the first complete line, or None.
    """
    for a, b, c in WINNING_LINES:
        if board[a] is not EMPTY and board[a] == board[b] == board[c]:
            return board[a]
    return None


def find_winning_line(board, player):
    """Get the first line fully owned by player, for highlighting.

    Returns:
        3-tuple of position indices, or None.
    """
    check_player(player)
    for line in WINNING_LINES:
        if all(board[idx] == player for idx in line):
            return line
    return None


def _open_lines(board, player):
    """Yield (line, empty_index) for lines with two of player's cells and one gap."""
    for line in WINNING_LINES:
        owned = [idx for idx in line if board[idx] == player]
        empty = [idx for idx in line if board[idx] is EMPTY]
        if len(owned) == 2 and len(empty) == 1:
            yield line, empty[0]


def has_imminent_threat(board, player, phase):
    """Check if player can complete a line on their very next action.

    Placement: two of player's cells plus an empty third cell is enough,
    since any empty cell can take a token.

    Movement: the gap must be one step from one of player's OTHER
    pieces. Sliding a piece out of the line to fill the gap never
    completes that line.

    Args:
        board: Board list.
        player: Player whose threat is checked.
        phase: Phase label.

    Returns:
        True if the completing action is available.
    """
    check_player(player)
    check_phase(phase)

    if phase not in (PHASE_PLACEMENT, PHASE_MOVEMENT):
        return False

    for line, gap in _open_lines(board, player):
        if phase == PHASE_PLACEMENT:
            return True
        free_pieces = [idx for idx in get_positions(board, player)
                       if idx not in line]
        for piece in free_pieces:
            if gap in get_adjacent(piece):
                return True
    return False


def count_occurrences(history, position):
    """Count how often a position snapshot appears in the history."""
    position = tuple(position)
    return sum(1 for entry in history if tuple(entry) == position)


def is_repetition(history, position, threshold=REPETITION_THRESHOLD):
    """Check if a position has recurred often enough to end the game.

    Args:
        history: Sequence of board snapshots, already including the
            current occurrence of position.
        position: Board snapshot to look up.
        threshold: Occurrences that trigger the rule.

    Returns:
        True if position appears at least threshold times.
    """
    return count_occurrences(history, position) >= threshold
