"""
Claim engine - turn a traced path into territory

Steps (all validation happens before anything is written):
  1. path has >= 3 vertices, >= 3 of them distinct   → else InvalidPathError
  2. player exists in the registry                    → else UnknownPlayerError
  3. score the polygon
  4. append the path to the player's territory, add the delta to the score
  5. recompute every player's status
"""
import logging
import random
from typing import Optional, Sequence

from turfwars.core.geo import distinct_vertex_count
from turfwars.core.registry import PlayerRegistry
from turfwars.core.scoring import calculate_claim_score
from turfwars.exceptions import InvalidPathError
from turfwars.models import ClaimResult, Coordinate, ScoringParams


logger = logging.getLogger(__name__)

MIN_POLYGON_VERTICES = 3


def validate_path(path: Sequence[Coordinate]) -> None:
    """Raise InvalidPathError unless the path can form a polygon"""
    if len(path) < MIN_POLYGON_VERTICES:
        raise InvalidPathError(len(path))

    distinct = distinct_vertex_count(path)
    if distinct < MIN_POLYGON_VERTICES:
        raise InvalidPathError(len(path), distinct)


def claim(
    registry: PlayerRegistry,
    player_id: str,
    path: Sequence[Coordinate],
    params: ScoringParams,
    rng: Optional[random.Random] = None
) -> ClaimResult:
    """
    Commit a polygon to a player's territory

    The path is stored open; consumers close the ring when rendering.
    Callers that share the registry between threads must hold their lock
    around this call.

    Args:
        registry: Player registry to mutate
        player_id: Claimant
        path: Traced vertices in drawing order
        params: Scoring parameters
        rng: Random source for the "random" scoring mode

    Returns:
        ClaimResult with a copy of the updated player and the committed path

    Raises:
        InvalidPathError: fewer than 3 (distinct) vertices
        UnknownPlayerError: player_id not registered
    """
    validate_path(path)
    player = registry.get(player_id)

    committed = list(path)
    result = calculate_claim_score(committed, params, rng)
    delta = result["score_delta"]

    player.territory.paths.append(committed)
    player.score += delta
    registry.apply_statuses()

    logger.info(
        f"🚩 Player {player_id} claimed {len(committed)} vertices | "
        f"Area: {result['area_m2']:.0f} m² | +{delta} → {player.score}"
    )

    return ClaimResult(
        player=player.model_copy(deep=True),
        path=list(committed),
        score_delta=delta,
        area_m2=result["area_m2"],
    )
