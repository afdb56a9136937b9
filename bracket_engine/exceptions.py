"""
Custom exceptions for the Esports Bracket Engine.

The pure bracket functions never raise during normal operation; these are
raised by the service layer that sits between callers and the core.
"""


class BracketEngineError(Exception):
    """Base exception for all custom errors."""
    pass


class TournamentNotFoundError(BracketEngineError):
    """Raised when a tournament id is unknown to the repository."""
    def __init__(self, tournament_id: str = None):
        self.tournament_id = tournament_id
        msg = "Tournament not found"
        if tournament_id:
            msg += f": {tournament_id}"
        super().__init__(msg)


class UnsupportedFormatError(BracketEngineError):
    """Raised when a format has no builder or an update targets the wrong format."""
    pass


class TournamentBusyError(BracketEngineError):
    """Raised when another update holds the tournament lock for too long."""
    def __init__(self, tournament_id: str = None, timeout_s: float = None):
        self.tournament_id = tournament_id
        self.timeout_s = timeout_s
        msg = f"Tournament {tournament_id} is busy"
        if timeout_s is not None:
            msg += f" (lock not acquired within {timeout_s}s)"
        super().__init__(msg)


# Roster Errors
class RosterValidationError(BracketEngineError):
    """Raised when a creation roster is not usable."""
    pass


class DuplicatePlayerError(RosterValidationError):
    """Raised when the same player id appears twice in a roster."""
    def __init__(self, player_ids=None):
        self.player_ids = sorted(player_ids or [])
        msg = "Duplicate player ids in roster"
        if self.player_ids:
            msg += f": {', '.join(self.player_ids)}"
        super().__init__(msg)
