"""
rules_consts.py — Canonical Labels for the Rota Engine

Every label for players, phases, outcomes, start policies and board
geometry used anywhere in the codebase MUST come from this file.

If a label doesn't exist here, it is wrong.

Organization: constants grouped by category.
"""

# ============================================================================
# PLAYERS
# ============================================================================

PLAYER_A = "A"
PLAYER_B = "B"

PLAYERS = (PLAYER_A, PLAYER_B)

OPPONENT = {
    PLAYER_A: PLAYER_B,
    PLAYER_B: PLAYER_A,
}

# An unowned cell
EMPTY = None


# ============================================================================
# BOARD GEOMETRY
# ============================================================================

# Index 0 is the hub; 1..8 are rim positions clockwise from the top
HUB = 0
RIM = (1, 2, 3, 4, 5, 6, 7, 8)
ALL_POSITIONS = (HUB,) + RIM

BOARD_SIZE = len(ALL_POSITIONS)

# Spokes join the hub to every rim position; rim positions join their two
# neighbours on the circle, wrapping 8 -> 1.
ADJACENCY = {
    0: (1, 2, 3, 4, 5, 6, 7, 8),
    1: (0, 2, 8),
    2: (0, 1, 3),
    3: (0, 2, 4),
    4: (0, 3, 5),
    5: (0, 4, 6),
    6: (0, 5, 7),
    7: (0, 6, 8),
    8: (0, 7, 1),
}

# Declaration order is the tie-break order for every line scan.
DIAMETERS = (
    (1, 0, 5),
    (2, 0, 6),
    (3, 0, 7),
    (4, 0, 8),
)

RIM_ARCS = (
    (1, 2, 3),
    (2, 3, 4),
    (3, 4, 5),
    (4, 5, 6),
    (5, 6, 7),
    (6, 7, 8),
    (7, 8, 1),
    (8, 1, 2),
)

WINNING_LINES = DIAMETERS + RIM_ARCS


# ============================================================================
# PIECES
# ============================================================================

PIECES_PER_PLAYER = 3
TOTAL_PIECES = PIECES_PER_PLAYER * len(PLAYERS)


# ============================================================================
# PHASES
# ============================================================================

PHASE_PLACEMENT = "placement"
PHASE_MOVEMENT = "movement"
PHASE_GAMEOVER = "gameover"

PHASES = (PHASE_PLACEMENT, PHASE_MOVEMENT, PHASE_GAMEOVER)

# Phases in which a player may act
PLAYABLE_PHASES = (PHASE_PLACEMENT, PHASE_MOVEMENT)


# ============================================================================
# OUTCOMES
# ============================================================================

OUTCOME_UNDECIDED = "undecided"
OUTCOME_WIN = "win"
OUTCOME_STALEMATE = "stalemate"   # Repetition rule: starting player forfeits


# ============================================================================
# STARTING PLAYER POLICIES
# ============================================================================

START_PLAYER_A = "fixed-to-player-A"
START_PLAYER_B = "fixed-to-player-B"
START_RANDOM = "uniform-random"

START_POLICIES = (START_PLAYER_A, START_PLAYER_B, START_RANDOM)


# ============================================================================
# REPETITION RULE
# ============================================================================

# Occurrences of one position (current one included) that end the game
REPETITION_THRESHOLD = 3


# ============================================================================
# ACTIONS
# ============================================================================

ACTION_PLACE = "place"
ACTION_MOVE = "move"
ACTION_PASS = "pass"

