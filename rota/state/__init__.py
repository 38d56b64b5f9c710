"""State module — Game session schema and initialization."""

from rota.state.state_schema import (
    build_initial_state,
    validate_state,
    resolve_starting_player,
)

__all__ = ["build_initial_state", "validate_state", "resolve_starting_player"]
