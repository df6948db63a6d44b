"""
Claim scoring

Formula (mode "area"):
  area    = shoelace area over an equirectangular projection (m²)
  delta   = round(area / square_metres_per_point)

Mode "random" awards a uniform integer in [random_min, random_max]
regardless of shape (demo behaviour).

Rules:
  - delta is never negative
  - larger enclosed regions never score less than smaller ones (mode "area")
"""
import random
from typing import Dict, Optional, Sequence

from turfwars.core.geo import polygon_area_m2
from turfwars.models import Coordinate, ScoringParams


SCORING_MODES = ("area", "random")


def calculate_area_points(area_m2: float, square_metres_per_point: float) -> int:
    """
    Convert an enclosed area into points

    Example (default 1000 m² per point):
        0.01° x 0.01° square at lat 37.77 ≈ 979 000 m² → 979 points

    Args:
        area_m2: Enclosed area in square metres
        square_metres_per_point: Area worth one point

    Returns:
        Non-negative integer score delta
    """
    if area_m2 <= 0:
        return 0
    return max(0, int(round(area_m2 / square_metres_per_point)))


def calculate_random_points(params: ScoringParams, rng: Optional[random.Random] = None) -> int:
    """Uniform integer in [random_min, random_max] (bounds may be given in either order)"""
    rng = rng or random
    low, high = sorted((params.random_min, params.random_max))
    return rng.randint(low, high)


def calculate_claim_score(
    path: Sequence[Coordinate],
    params: ScoringParams,
    rng: Optional[random.Random] = None
) -> Dict:
    """
    Main scoring entry point for a claimed polygon

    Args:
        path: Polygon vertices (implicitly closed)
        params: Scoring parameters
        rng: Random source for mode "random" (module-level random if None)

    Returns:
        Dictionary with score_delta, area_m2 and mode
    """
    if params.mode not in SCORING_MODES:
        raise ValueError(f"Unknown scoring mode: {params.mode}")

    area = polygon_area_m2(path)

    if params.mode == "random":
        delta = calculate_random_points(params, rng)
    else:
        delta = calculate_area_points(area, params.square_metres_per_point)

    return {
        "score_delta": delta,
        "area_m2": round(area, 2),
        "mode": params.mode,
    }
