"""
ClubHub - sports club management platform.

Teams, players, squads, games, news, monthly dues and club chat,
all behind a single role-based permission policy.
"""

__version__ = "0.1.0"
