"""Bot infrastructure — Automated opponent for Rota.

Provides:
- bot_common: Random selection and one-ply simulation helpers
- rota_bot: Move selection flowchart
- bot_dispatch: Routing of turns to the bot for automated players
"""
