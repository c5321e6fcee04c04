from __future__ import annotations

import math
from dataclasses import dataclass

from triproute.domain.models import TransportMode

TRANSIT_TICKET_RON = 5.0
FUEL_PRICE_RON_PER_L = 6.0
FUEL_CONSUMPTION_L_PER_100KM = 7.0
CAR_COST_RON_PER_KM = FUEL_PRICE_RON_PER_L * FUEL_CONSUMPTION_L_PER_100KM / 100.0
TAXI_COST_RON_PER_KM = 3.0

WALK_SPEED_KMH = 5.0
TRANSIT_SPEED_KMH = 20.0
CAR_SPEED_KMH = 40.0
TAXI_SPEED_KMH = 30.0

# walking-transit assumes half of the distance on foot, half on board.
MIXED_WALK_SHARE = 0.5


@dataclass(frozen=True, slots=True)
class SegmentTariff:
    cost_ron: float
    duration_min: int


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with exact halves going up (2.5 -> 3), unlike built-in round()."""

    scale = 10.0**ndigits
    return math.floor(value * scale + 0.5) / scale


def round_minutes(minutes: float) -> int:
    return int(round_half_up(minutes))


def _minutes(distance_km: float, speed_kmh: float) -> float:
    return distance_km / speed_kmh * 60.0


def segment_cost(distance_km: float, mode: TransportMode) -> SegmentTariff:
    """Price and time one leg of `distance_km` for a transport mode."""

    if mode is TransportMode.WALKING:
        return SegmentTariff(0.0, round_minutes(_minutes(distance_km, WALK_SPEED_KMH)))

    if mode is TransportMode.TRANSIT:
        return SegmentTariff(
            TRANSIT_TICKET_RON, round_minutes(_minutes(distance_km, TRANSIT_SPEED_KMH))
        )

    if mode is TransportMode.WALKING_TRANSIT:
        walk_km = distance_km * MIXED_WALK_SHARE
        ride_km = distance_km - walk_km
        return SegmentTariff(
            TRANSIT_TICKET_RON,
            round_minutes(
                _minutes(walk_km, WALK_SPEED_KMH)
                + _minutes(ride_km, TRANSIT_SPEED_KMH)
            ),
        )

    if mode is TransportMode.CAR:
        return SegmentTariff(
            distance_km * CAR_COST_RON_PER_KM,
            round_minutes(_minutes(distance_km, CAR_SPEED_KMH)),
        )

    if mode is TransportMode.TAXI:
        return SegmentTariff(
            distance_km * TAXI_COST_RON_PER_KM,
            round_minutes(_minutes(distance_km, TAXI_SPEED_KMH)),
        )

    return SegmentTariff(0.0, 0)
