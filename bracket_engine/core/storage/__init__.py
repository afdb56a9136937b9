from .memory import InMemoryTournamentRepository

__all__ = ["InMemoryTournamentRepository"]
