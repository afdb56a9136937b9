"""
Core module - Protocols, containers, and storage.
"""
from .protocols import TournamentRepository
from .container import ServiceContainer

__all__ = [
    "TournamentRepository",
    "ServiceContainer",
]
