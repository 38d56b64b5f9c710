"""
State schema module — Master game session dictionary.

Builds a fresh session for a game configuration and checks its
integrity. The session dict is the only mutable game state; it is
written exclusively by engine/game_engine.py.
All constants from rules_consts.py.
"""

import random

from rota.rules_consts import (
    PLAYER_A, PLAYER_B, PLAYERS,
    PIECES_PER_PLAYER, TOTAL_PIECES,
    PHASES, PHASE_PLACEMENT, PHASE_MOVEMENT, PHASE_GAMEOVER,
    OUTCOME_UNDECIDED, OUTCOME_WIN, OUTCOME_STALEMATE,
    START_PLAYER_A, START_PLAYER_B, START_RANDOM, START_POLICIES,
)
from rota.map.map_data import PreconditionViolation
from rota.board.pieces import new_board, count_pieces, check_board


def resolve_starting_player(start_policy, rng):
    """Pick who moves first under a start policy.

    Args:
        start_policy: START_PLAYER_A, START_PLAYER_B or START_RANDOM.
        rng: random.Random used for START_RANDOM.

    Returns:
        PLAYER_A or PLAYER_B.

    Raises:
        PreconditionViolation: If start_policy is unknown.
    """
    if start_policy == START_PLAYER_A:
        return PLAYER_A
    if start_policy == START_PLAYER_B:
        return PLAYER_B
    if start_policy == START_RANDOM:
        return PLAYERS[rng.randint(0, len(PLAYERS) - 1)]
    raise PreconditionViolation(f"Unknown start policy: {start_policy!r}")


def fresh_game_fields(starting_player):
    """Per-game fields of the session, as they are when a game begins.

    Reset overwrites exactly these keys; configuration, the RNG and the
    epoch counter survive.
    """
    return {
        "board": new_board(),
        "phase": PHASE_PLACEMENT,
        "turn": starting_player,
        "starting_player": starting_player,
        "pieces_placed": 0,
        "selected": None,
        "history": [],
        "outcome": OUTCOME_UNDECIDED,
        "winner": None,
        "loser": None,
        "winning_line": None,
        "threat_detected": False,
        "repetition_triggered": False,
        "actions_taken": 0,
    }


def build_initial_state(non_players=(), start_policy=START_PLAYER_A,
                        repetition_rule=False, seed=None):
    """Create a game session ready for the first placement.

    Args:
        non_players: Players driven by the bot. Empty for a local
            two-player game.
        start_policy: Starting player selection policy, resolved once
            here for the whole game.
        repetition_rule: Enable the threefold-repetition house rule.
        seed: Optional RNG seed for deterministic replay.

    Returns:
        Game state dictionary.

    Raises:
        PreconditionViolation: If a player label or the policy is unknown.
    """
    for player in non_players:
        if player not in PLAYERS:
            raise PreconditionViolation(f"Unknown player: {player!r}")
    if start_policy not in START_POLICIES:
        raise PreconditionViolation(f"Unknown start policy: {start_policy!r}")

    rng = random.Random(seed)
    starting_player = resolve_starting_player(start_policy, rng)

    state = {
        # Configuration, fixed for the life of the session
        "non_players": frozenset(non_players),
        "start_policy": start_policy,
        "repetition_rule": bool(repetition_rule),
        "rng": rng,
        # Bumped on every reset; stale bot moves carry an older value
        "epoch": 0,
    }
    state.update(fresh_game_fields(starting_player))
    return state


def validate_state(state):
    """Validate session integrity.

    Checks board shape, piece counts against pieces placed, phase and
    outcome consistency, and history bookkeeping.

    Args:
        state: Game state dict.

    Returns:
        List of error strings. Empty list means valid.
    """
    errors = []
    board = state["board"]

    try:
        check_board(board)
    except PreconditionViolation as exc:
        return [str(exc)]

    phase = state["phase"]
    if phase not in PHASES:
        errors.append(f"Unknown phase: {phase!r}")
    if state["turn"] not in PLAYERS:
        errors.append(f"Unknown turn: {state['turn']!r}")
    if state["starting_player"] not in PLAYERS:
        errors.append(
            f"Unknown starting player: {state['starting_player']!r}"
        )

    placed = state["pieces_placed"]
    on_board = count_pieces(board)
    if on_board != placed:
        errors.append(f"board({on_board}) != pieces_placed({placed})")
    if placed > TOTAL_PIECES:
        errors.append(f"pieces_placed({placed}) > {TOTAL_PIECES}")

    for player in PLAYERS:
        mine = count_pieces(board, player)
        if mine > PIECES_PER_PLAYER:
            errors.append(f"{player}: {mine} pieces > {PIECES_PER_PLAYER}")

    if phase == PHASE_MOVEMENT:
        if placed != TOTAL_PIECES:
            errors.append(
                f"movement phase with pieces_placed({placed}) "
                f"!= {TOTAL_PIECES}"
            )
        if not state["history"]:
            errors.append("movement phase with empty position history")
    elif phase == PHASE_PLACEMENT and state["history"]:
        errors.append("placement phase with non-empty position history")

    outcome = state["outcome"]
    if phase == PHASE_GAMEOVER:
        if outcome == OUTCOME_UNDECIDED:
            errors.append("gameover with undecided outcome")
        if state["winner"] not in PLAYERS:
            errors.append(f"gameover with winner {state['winner']!r}")
    elif outcome != OUTCOME_UNDECIDED:
        errors.append(f"outcome {outcome!r} outside gameover")

    if outcome == OUTCOME_WIN and state["winning_line"] is None:
        errors.append("win without a winning line")
    if outcome == OUTCOME_STALEMATE:
        if state["loser"] != state["starting_player"]:
            errors.append(
                f"stalemate loser {state['loser']!r} is not the "
                f"starting player {state['starting_player']!r}"
            )

    return errors
