"""
Map data module — Board topology for Rota.

Provides the static adjacency table and the twelve winning lines, plus
index checks shared by every module that takes a position index.
All constants imported from rules_consts.py.
"""

from rota.rules_consts import (
    HUB,
    ALL_POSITIONS,
    ADJACENCY,
    WINNING_LINES,
)


class PreconditionViolation(ValueError):
    """Raised when an operation is called with arguments no caller should pass.

    Out-of-range indices and wrong-phase calls are programming errors,
    not user-recoverable conditions.
    """
    pass


# ============================================================================
# LINE INDEX
# ============================================================================
# Lines through each position, in declaration order.

_LINES_THROUGH = {}  # {index: (line, ...)}

for _index in ALL_POSITIONS:
    _LINES_THROUGH[_index] = tuple(
        line for line in WINNING_LINES if _index in line
    )


def check_index(index):
    """Fail loudly on anything that is not a board position.

    Args:
        index: Candidate position index.

    Raises:
        PreconditionViolation: If index is not an int in [0, 8].
    """
    # bool is an int subclass; True would silently mean position 1
    if isinstance(index, bool) or not isinstance(index, int):
        raise PreconditionViolation(
            f"Position index must be an int, got {index!r}"
        )
    if index not in ADJACENCY:
        raise PreconditionViolation(
            f"Position index {index} out of range "
            f"{ALL_POSITIONS[0]}..{ALL_POSITIONS[-1]}"
        )


# ============================================================================
# PUBLIC API
# ============================================================================

def get_adjacent(index):
    """Get the positions one step away from index.

    Args:
        index: Position index.

    Returns:
        Tuple of position indices, in adjacency-table order.
    """
    check_index(index)
    return ADJACENCY[index]


def is_adjacent(a, b):
    """Check if two positions are joined by a spoke or a rim edge.

    Args:
        a: Position index.
        b: Position index.

    Returns:
        True if b is one step from a.
    """
    check_index(b)
    return b in get_adjacent(a)


def get_winning_lines():
    """Get all twelve winning lines, diameters first, then rim arcs."""
    return WINNING_LINES


def get_lines_through(index):
    """Get the winning lines that contain a position.

    Args:
        index: Position index.

    Returns:
        Tuple of 3-tuples, in declaration order.
    """
    check_index(index)
    return _LINES_THROUGH[index]


def is_hub(index):
    """Check if index is the center position."""
    check_index(index)
    return index == HUB
