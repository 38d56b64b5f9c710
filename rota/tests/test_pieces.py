"""
Tests for the piece operations module.

Tests placement and movement preconditions, that rejected actions leave
the board untouched, and legal-move queries per phase.
"""

import pytest

from rota.rules_consts import (
    PLAYER_A, PLAYER_B, EMPTY,
    PHASE_PLACEMENT, PHASE_MOVEMENT, PHASE_GAMEOVER,
)
from rota.map.map_data import PreconditionViolation
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

A = PLAYER_A
B = PLAYER_B


def make_board(cells=None):
    """Helper: build a board from {index: player}."""
    board = new_board()
    for idx, player in (cells or {}).items():
        board[idx] = player
    return board


# ============================================================================
# PLACEMENT TESTS
# ============================================================================

class TestApplyPlacement:

    def test_place_on_empty_board(self):
        board = new_board()
        after = apply_placement(board, 0, A)
        assert after[0] == A
        assert count_pieces(after) == 1

    def test_input_board_not_modified(self):
        board = new_board()
        apply_placement(board, 3, B)
        assert board == new_board()

    def test_occupied_target_rejected(self):
        board = make_board({4: B})
        with pytest.raises(IllegalMove):
            apply_placement(board, 4, A)
        assert board == make_board({4: B})

    def test_own_occupied_target_rejected(self):
        board = make_board({4: A})
        with pytest.raises(IllegalMove):
            apply_placement(board, 4, A)

    def test_out_of_range_is_precondition(self):
        with pytest.raises(PreconditionViolation):
            apply_placement(new_board(), 9, A)

    def test_unknown_player_is_precondition(self):
        with pytest.raises(PreconditionViolation):
            apply_placement(new_board(), 0, "C")


# ============================================================================
# MOVEMENT TESTS
# ============================================================================

class TestApplyMovement:

    def test_move_along_spoke(self):
        board = make_board({0: A})
        after = apply_movement(board, 0, 6, A)
        assert after[0] is EMPTY
        assert after[6] == A

    def test_move_along_rim_wrap(self):
        board = make_board({8: B})
        after = apply_movement(board, 8, 1, B)
        assert after[1] == B
        assert after[8] is EMPTY

    def test_wrong_owner_rejected(self):
        board = make_board({1: B})
        with pytest.raises(IllegalMove):
            apply_movement(board, 1, 2, A)

    def test_empty_source_rejected(self):
        with pytest.raises(IllegalMove):
            apply_movement(new_board(), 1, 2, A)

    def test_occupied_destination_rejected(self):
        board = make_board({1: A, 2: B})
        with pytest.raises(IllegalMove):
            apply_movement(board, 1, 2, A)
        assert board == make_board({1: A, 2: B})

    def test_non_adjacent_destination_rejected(self):
        board = make_board({1: A})
        with pytest.raises(IllegalMove):
            apply_movement(board, 1, 5, A)
        assert board == make_board({1: A})

    def test_piece_count_preserved(self):
        board = make_board({0: A, 1: A, 2: A, 3: B, 4: B, 5: B})
        after = apply_movement(board, 1, 8, A)
        assert count_pieces(after, A) == 3
        assert count_pieces(after, B) == 3


# ============================================================================
# LEGAL MOVE TESTS
# ============================================================================

class TestGetValidMoves:

    def test_placement_returns_empty_cells_ascending(self):
        board = make_board({0: A, 4: B})
        assert get_valid_moves(board, A, PHASE_PLACEMENT) == \
            [1, 2, 3, 5, 6, 7, 8]

    def test_placement_ignores_selection(self):
        board = make_board({0: A})
        assert get_valid_moves(board, B, PHASE_PLACEMENT, 0) == \
            get_empty_positions(board)

    def test_movement_without_selection_is_empty(self):
        board = make_board({0: A, 1: A, 2: A, 3: B, 4: B, 5: B})
        assert get_valid_moves(board, A, PHASE_MOVEMENT) == []

    def test_movement_from_hub(self):
        board = make_board({0: A, 1: A, 2: A, 3: B, 4: B, 5: B})
        assert get_valid_moves(board, A, PHASE_MOVEMENT, 0) == [6, 7, 8]

    def test_movement_from_rim_uses_adjacency_order(self):
        board = make_board({1: A, 3: A, 5: A, 2: B, 4: B, 6: B})
        assert get_valid_moves(board, A, PHASE_MOVEMENT, 1) == [0, 8]

    def test_movement_from_opponent_piece_is_empty(self):
        board = make_board({1: A, 2: B})
        assert get_valid_moves(board, A, PHASE_MOVEMENT, 2) == []

    def test_gameover_has_no_moves(self):
        assert get_valid_moves(new_board(), A, PHASE_GAMEOVER) == []

    def test_unknown_phase_is_precondition(self):
        with pytest.raises(PreconditionViolation):
            get_valid_moves(new_board(), A, "endgame")

    def test_query_is_pure(self):
        board = make_board({0: A, 1: A, 2: A, 3: B, 4: B, 5: B})
        before = list(board)
        first = get_valid_moves(board, A, PHASE_MOVEMENT, 0)
        second = get_valid_moves(board, A, PHASE_MOVEMENT, 0)
        assert first == second
        assert board == before


class TestGetMovementMoves:

    def test_pieces_ascending_then_adjacency_order(self):
        board = make_board({0: A, 1: A, 2: A, 3: B, 4: B, 5: B})
        assert get_movement_moves(board, A) == [
            (0, 6), (0, 7), (0, 8),
            (1, 8),
        ]

    def test_immobilized_player_has_no_moves(self):
        # Only reachable with a completed arc: A on 1, 2, 3 hemmed in by B
        board = make_board({1: A, 2: A, 3: A, 0: B, 4: B, 8: B})
        assert get_movement_moves(board, A) == []
        assert get_movement_moves(board, B) != []


class TestHelpers:

    def test_positions_and_counts(self):
        board = make_board({0: A, 7: A, 3: B})
        assert get_positions(board, A) == [0, 7]
        assert count_pieces(board) == 3
        assert count_pieces(board, B) == 1

    def test_snapshot_is_hashable_copy(self):
        board = make_board({2: A})
        frozen = snapshot(board)
        assert frozen == tuple(board)
        assert hash(frozen) == hash(snapshot(list(board)))

    def test_opponent(self):
        assert get_opponent(A) == B
        assert get_opponent(B) == A
        with pytest.raises(PreconditionViolation):
            get_opponent(None)
