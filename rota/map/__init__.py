"""Map module — Adjacency and winning-line data for the Rota board."""

from rota.map.map_data import (
    PreconditionViolation,
    check_index,
    get_adjacent,
    is_adjacent,
    get_winning_lines,
    get_lines_through,
    is_hub,
)

__all__ = [
    "PreconditionViolation",
    "check_index",
    "get_adjacent",
    "is_adjacent",
    "get_winning_lines",
    "get_lines_through",
    "is_hub",
]
