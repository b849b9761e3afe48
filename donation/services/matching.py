"""
Proximity matching between a hospital and candidate donors.

Everything here is a pure function over its arguments: no database
access, no retained state.  Callers assemble the candidate snapshot
(eligible donors with both coordinates present, see
``donation.services.directory``) and the hospital origin, then call
:func:`match`.

Distances use the haversine great-circle formula on a spherical Earth
of radius 3958.8 statute miles.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from donation.blood import ALL_BLOOD_TYPES

EARTH_RADIUS_MILES = 3958.8
DEFAULT_MAX_DISTANCE_MILES = 5


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class DonorCandidate:
    id: int
    blood_type: str
    latitude: float
    longitude: float
    eligibility_status: str
    first_name: str = ''
    last_name: str = ''

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class MatchResult:
    candidate: DonorCandidate
    distance: float

    def as_dict(self) -> dict:
        return {**asdict(self.candidate), 'distance': self.distance}


def haversine_miles(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in statute miles between two coordinates."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_MILES * c


def round_half_up(value: float, places: int = 1) -> float:
    """Round half away from zero for non-negative values: 2.35 -> 2.4.

    ``round()`` uses banker's rounding (``round(0.25, 1) == 0.2``), which
    is not what distance labels want.
    """
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def match(
    origin: Coordinate,
    candidates: Iterable[DonorCandidate],
    max_distance_miles: Optional[float] = None,
    blood_type: Optional[str] = None,
) -> list[MatchResult]:
    """Return candidates within ``max_distance_miles`` of ``origin``, nearest first.

    ``blood_type`` of ``None`` or ``'all'`` disables the blood-type filter;
    any other value requires exact equality.  The radius check uses the
    raw distance and is inclusive; the reported distance is rounded to one
    decimal.  Ties keep their input order.
    """
    if max_distance_miles is None:
        max_distance_miles = DEFAULT_MAX_DISTANCE_MILES
    filter_type = blood_type if blood_type and blood_type != ALL_BLOOD_TYPES else None

    results: list[MatchResult] = []
    for candidate in candidates:
        if filter_type is not None and candidate.blood_type != filter_type:
            continue
        distance = haversine_miles(origin, candidate.coordinate)
        # NaN fails this comparison, so malformed coordinates drop out here
        if not distance <= max_distance_miles:
            continue
        results.append(MatchResult(candidate=candidate, distance=round_half_up(distance)))

    results.sort(key=lambda r: r.distance)
    return results
