"""HTTP backend for a volleyball game: ability catalogue, player loadouts and matchmaking."""

__version__ = "0.1.0"