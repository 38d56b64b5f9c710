"""Rota — rules engine and bot for the nine-point wheel game.

Subpackages:
  map    — board topology: adjacency and winning lines
  board  — board transitions and legal-move queries
  engine — victory checks and the session controller
  state  — session schema
  bots   — automated opponent
"""

__version__ = "1.0.0"
