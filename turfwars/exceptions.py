"""
Exception definitions for the game session.

Hierarchy:
- TurfWarsError (base for all game errors)
  - ClaimError (claim rejected, nothing mutated)
    - InvalidPathError
    - UnknownPlayerError
  - DuplicatePlayerError
  - LocationUnavailable
  - CollaboratorError (external provider failed, session keeps running)
    - OverlayRequestFailed
    - PlaceLookupFailed
"""


# =========================
# Base exception
# =========================

class TurfWarsError(Exception):
    """Base exception for all game errors."""
    retryable: bool = False


# =========================
# Claim engine
# =========================

class ClaimError(TurfWarsError):
    """Claim was rejected before any state changed."""
    retryable = False


class InvalidPathError(ClaimError):
    """Path has fewer than 3 (distinct) vertices."""

    def __init__(self, vertex_count: int, distinct_count: int = None):
        self.vertex_count = vertex_count
        self.distinct_count = vertex_count if distinct_count is None else distinct_count
        super().__init__(
            f"A territory needs at least 3 distinct points, got {self.distinct_count} "
            f"distinct out of {vertex_count}"
        )


class UnknownPlayerError(ClaimError):

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Unknown player: {player_id}")


# =========================
# Registry / session
# =========================

class DuplicatePlayerError(TurfWarsError):

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player id already registered: {player_id}")


class LocationUnavailable(TurfWarsError):
    """No current coordinate could be established."""
    retryable = True


# =========================
# External collaborators
# =========================

class CollaboratorError(TurfWarsError):
    """Base exception for external provider failures."""
    retryable = True


class OverlayRequestFailed(CollaboratorError):
    retryable = True


class PlaceLookupFailed(CollaboratorError):
    retryable = True
