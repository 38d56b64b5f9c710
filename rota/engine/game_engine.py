"""Game Engine — Session and turn controller for Rota.

Owns every write to the session dict built by state/state_schema.py:
applies placements and movements through board/pieces.py, checks the
result with engine/victory.py, advances phase and turn, and runs bot
turns through bots/bot_dispatch.py.

Sequence of play:
  Placement — players alternate placing one token each until all six
              are down. A line completed here ends the game at once.
  Movement  — players alternate sliding one piece to an empty adjacent
              position. The position on entering this phase is the
              first history entry; each movement adds one more.
  Gameover  — a completed line, or (repetition rule) the third
              occurrence of one position, which the starting player
              loses whoever made the move.

A rejected action raises IllegalMove and changes nothing, so the turn
stays with the same player.
"""

import logging

from rota.rules_consts import (
    EMPTY,
    TOTAL_PIECES,
    PHASE_PLACEMENT, PHASE_MOVEMENT, PHASE_GAMEOVER,
    OUTCOME_WIN, OUTCOME_STALEMATE,
    ACTION_PLACE, ACTION_MOVE, ACTION_PASS,
)
from rota.map.map_data import check_index
from rota.board.pieces import (
    IllegalMove,
    apply_placement,
    apply_movement,
    get_valid_moves,
    get_movement_moves,
    get_opponent,
    snapshot,
)
from rota.engine.victory import (
    check_winner,
    find_winning_line,
    has_imminent_threat,
    is_repetition,
)
from rota.state.state_schema import (
    fresh_game_fields,
    resolve_starting_player,
)
from rota.bots.bot_dispatch import dispatch_bot_turn, is_non_player

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 500


# ============================================================================
# RESET
# ============================================================================

def reset_game(state):
    """Start a new game in the same session.

    Clears board, phase, history and outcome, resolves the starting
    player again under the session's start policy, and bumps the epoch
    so any bot move requested before the reset is discarded.

    Args:
        state: Game state dict. Modified in place.

    Returns:
        The new starting player.
    """
    starting_player = resolve_starting_player(
        state["start_policy"], state["rng"]
    )
    state.update(fresh_game_fields(starting_player))
    state["epoch"] += 1
    logger.debug("Game reset (epoch %d), %s starts",
                 state["epoch"], starting_player)
    return starting_player


# ============================================================================
# RESULT REPORTING
# ============================================================================

def _build_result(state, action, player):
    """Snapshot the session outputs after an applied action."""
    return {
        "action": action,
        "player": player,
        "board": list(state["board"]),
        "phase": state["phase"],
        "turn": state["turn"],
        "winner": state["winner"],
        "winning_line": state["winning_line"],
        "threat_detected": state["threat_detected"],
        "repetition_triggered": state["repetition_triggered"],
        "game_over": state["phase"] == PHASE_GAMEOVER,
    }


def _end_with_win(state, winner):
    state["phase"] = PHASE_GAMEOVER
    state["outcome"] = OUTCOME_WIN
    state["winner"] = winner
    state["loser"] = get_opponent(winner)
    state["winning_line"] = find_winning_line(state["board"], winner)
    logger.info("%s wins on line %s", winner, state["winning_line"])


def _end_with_stalemate(state):
    # The starting player forfeits no matter who repeated the position
    loser = state["starting_player"]
    state["phase"] = PHASE_GAMEOVER
    state["outcome"] = OUTCOME_STALEMATE
    state["loser"] = loser
    state["winner"] = get_opponent(loser)
    state["winning_line"] = None
    state["repetition_triggered"] = True
    logger.info("Position repeated; starting player %s forfeits", loser)


def _after_action(state, action, player):
    """Resolve win, phase change, repetition, threat and turn after an action.

    Args:
        state: Game state dict, with the new board already in place.
        action: ACTION_PLACE or ACTION_MOVE.
        player: Player who acted.

    Returns:
        Result dict.
    """
    state["actions_taken"] += 1
    state["selected"] = None
    state["threat_detected"] = False
    state["repetition_triggered"] = False
    board = state["board"]

    winner = check_winner(board)
    if winner is not None:
        _end_with_win(state, winner)
        return _build_result(state, action, player)

    if action == ACTION_PLACE:
        if state["pieces_placed"] >= TOTAL_PIECES:
            state["phase"] = PHASE_MOVEMENT
            state["history"].append(snapshot(board))
            logger.debug("All pieces placed; movement phase begins")
    else:
        position = snapshot(board)
        state["history"].append(position)
        if (state["repetition_rule"]
                and is_repetition(state["history"], position)):
            _end_with_stalemate(state)
            return _build_result(state, action, player)

    state["threat_detected"] = has_imminent_threat(
        board, player, state["phase"]
    )
    state["turn"] = get_opponent(player)
    return _build_result(state, action, player)


# ============================================================================
# PLAYER ACTIONS
# ============================================================================

def place_piece(state, index):
    """Place a token for the player to move.

    Args:
        state: Game state dict. Modified in place.
        index: Target position.

    Returns:
        Result dict.

    Raises:
        IllegalMove: If it is not the placement phase or the target is
            occupied. The state is unchanged.
    """
    if state["phase"] != PHASE_PLACEMENT:
        raise IllegalMove(f"Cannot place a piece in phase '{state['phase']}'")

    player = state["turn"]
    state["board"] = apply_placement(state["board"], index, player)
    state["pieces_placed"] += 1
    logger.debug("%s places at %d", player, index)
    return _after_action(state, ACTION_PLACE, player)


def move_piece(state, from_index, to_index):
    """Move a piece of the player to move one step.

    Args:
        state: Game state dict. Modified in place.
        from_index: Position of the piece.
        to_index: Empty adjacent destination.

    Returns:
        Result dict.

    Raises:
        IllegalMove: If it is not the movement phase or the move breaks
            a movement rule. The state is unchanged.
    """
    if state["phase"] != PHASE_MOVEMENT:
        raise IllegalMove(f"Cannot move a piece in phase '{state['phase']}'")

    player = state["turn"]
    state["board"] = apply_movement(state["board"], from_index, to_index,
                                    player)
    logger.debug("%s moves %d -> %d", player, from_index, to_index)
    return _after_action(state, ACTION_MOVE, player)


def is_immobilized(state, player=None):
    """Check if a player is in the movement phase with nowhere to go.

    Args:
        state: Game state dict.
        player: Player to check; defaults to the player to move.
    """
    if player is None:
        player = state["turn"]
    if state["phase"] != PHASE_MOVEMENT:
        return False
    return not get_movement_moves(state["board"], player)


def pass_turn(state):
    """Hand the turn over when the player to move cannot move.

    Passing does not add a history entry; the position is unchanged.

    Raises:
        IllegalMove: If the player to move has a legal movement, or the
            game is not in the movement phase.
    """
    player = state["turn"]
    if not is_immobilized(state, player):
        raise IllegalMove(f"{player} cannot pass while a move is available")

    state["actions_taken"] += 1
    state["selected"] = None
    state["threat_detected"] = False
    state["repetition_triggered"] = False
    state["turn"] = get_opponent(player)
    logger.debug("%s is immobilized and passes", player)
    return _build_result(state, ACTION_PASS, player)


# ============================================================================
# CLICK PROTOCOL
# ============================================================================

def select_piece(state, index):
    """Select one of the mover's pieces as the source of a movement.

    Raises:
        IllegalMove: If not in the movement phase or the piece is not
            the mover's.
    """
    check_index(index)
    if state["phase"] != PHASE_MOVEMENT:
        raise IllegalMove(f"Cannot select a piece in phase '{state['phase']}'")
    if state["board"][index] != state["turn"]:
        raise IllegalMove(f"{state['turn']} has no piece at position {index}")
    state["selected"] = index


def get_current_valid_moves(state):
    """Valid targets for the player to move, using the current selection."""
    return get_valid_moves(state["board"], state["turn"], state["phase"],
                           state["selected"])


def handle_cell_click(state, index):
    """Interpret a click on a board position by the human to move.

    Placement: an empty cell is placed on. Movement: an own piece is
    selected; an empty valid destination of the selection is moved to.
    Everything else, including clicks during a bot's turn or after the
    game has ended, is ignored.

    Args:
        state: Game state dict. Modified in place when an action applies.
        index: Clicked position.

    Returns:
        Result dict if an action was applied, otherwise None.
    """
    check_index(index)
    phase = state["phase"]
    if phase == PHASE_GAMEOVER or is_non_player(state, state["turn"]):
        return None

    cell = state["board"][index]
    try:
        if phase == PHASE_PLACEMENT:
            if cell is EMPTY:
                return place_piece(state, index)
            return None

        if cell == state["turn"]:
            select_piece(state, index)
            return None
        if cell is EMPTY and state["selected"] is not None:
            if index in get_current_valid_moves(state):
                return move_piece(state, state["selected"], index)
    except IllegalMove as exc:
        logger.debug("Ignored click at %d: %s", index, exc)
    return None


# ============================================================================
# BOT TURNS
# ============================================================================

def request_bot_move(state):
    """Ask the bot for its action without applying it.

    The returned pending move is tagged with the session epoch, so a
    caller that waits before applying it can detect an intervening reset.

    Returns:
        Pending move dict: {"epoch", "player", "phase", "move"}.
    """
    move = dispatch_bot_turn(state)
    return {
        "epoch": state["epoch"],
        "player": state["turn"],
        "phase": state["phase"],
        "move": move,
    }


def apply_bot_move(state, pending):
    """Apply a pending bot move, unless it has gone stale.

    A move goes stale when the game was reset, or the turn or phase it
    was chosen for has passed, since it was requested.

    Args:
        state: Game state dict. Modified in place.
        pending: Dict from request_bot_move.

    Returns:
        Result dict, or None if the move was discarded.
    """
    if (pending["epoch"] != state["epoch"]
            or pending["player"] != state["turn"]
            or pending["phase"] != state["phase"]):
        logger.debug("Discarding stale bot move %s (epoch %d, now %d)",
                     pending["move"], pending["epoch"], state["epoch"])
        return None

    return _apply_move_dict(state, pending["move"])


def play_bot_turn(state):
    """Select and immediately apply the bot's action for the player to move."""
    return apply_bot_move(state, request_bot_move(state))


def _apply_move_dict(state, move):
    """Apply a {"to"} / {"from", "to"} move dict; None means pass."""
    if move is None:
        return pass_turn(state)
    if "from" in move:
        return move_piece(state, move["from"], move["to"])
    return place_piece(state, move["to"])


# ============================================================================
# FULL GAME
# ============================================================================

def run_game(state, decision_func=None, max_turns=DEFAULT_MAX_TURNS):
    """Play the game from the current state to the end.

    Non-Players are driven by the bot. Human players are asked through
    decision_func.

    Args:
        state: Game state dict. Modified in place.
        decision_func: Callable(state) -> move dict or None, for human
            players. Required if any player is human.
        max_turns: Stop after this many applied actions.

    Returns:
        Dict with per-action results and the final outcome.
    """
    results = []

    while (state["phase"] != PHASE_GAMEOVER
           and state["actions_taken"] < max_turns):
        player = state["turn"]
        if is_non_player(state, player):
            result = play_bot_turn(state)
        else:
            if decision_func is None:
                raise ValueError(
                    f"decision_func required for human player {player}"
                )
            result = _apply_move_dict(state, decision_func(state))
        results.append(result)

    return {
        "results": results,
        "game_over": state["phase"] == PHASE_GAMEOVER,
        "outcome": state["outcome"],
        "winner": state["winner"],
        "loser": state["loser"],
        "winning_line": state["winning_line"],
        "actions_taken": state["actions_taken"],
    }
