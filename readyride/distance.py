"""Distance lookups backed by the Google Distance Matrix API.

Quotes never fail because the maps API is down: ``DistanceProvider`` falls
back to the great-circle distance when the upstream lookup errors out.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import httpx

from .settings import settings

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6371e3
CITY_SPEED_KMH = 30.0

Point = tuple[float, float]  # (lat, lng)


class DistanceLookupError(Exception):
    """Upstream distance lookup failed; ``status_code`` is the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 502, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


@dataclass(frozen=True)
class DistanceResult:
    distance: float  # meters
    duration: float  # seconds
    distance_text: str
    duration_text: str
    polyline: Optional[str] = None

    @property
    def distance_km(self) -> float:
        return self.distance / 1000

    @property
    def duration_minutes(self) -> float:
        return self.duration / 60


def haversine_m(origin: Point, destination: Point) -> float:
    """Great-circle distance in meters."""
    lat1, lon1 = origin
    lat2, lon2 = destination
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def estimate_from_straight_line(origin: Point, destination: Point) -> DistanceResult:
    meters = haversine_m(origin, destination)
    seconds = meters / 1000 / CITY_SPEED_KMH * 3600
    return DistanceResult(
        distance=meters,
        duration=seconds,
        distance_text=f"{round(meters / 1000, 1)} km",
        duration_text=f"{round(seconds / 60)} mins",
    )


def format_point(point: Point) -> str:
    return f"{point[0]},{point[1]}"


class DistanceMatrixClient:
    """Thin client for the ``distancematrix/json`` endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
        cache_size: int | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.RR_MAPS_API_KEY
        self.base_url = (base_url or settings.RR_MAPS_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.RR_DISTANCE_TIMEOUT
        self._transport = transport
        size = cache_size if cache_size is not None else settings.RR_DISTANCE_CACHE_SIZE
        # failed lookups raise and are not cached
        self._cached_fetch = functools.lru_cache(maxsize=size)(self._fetch)

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0), transport=self._transport)

    def matrix(self, origins: Sequence[str], destinations: Sequence[str]) -> list[DistanceResult]:
        """Return the first row of the matrix: origins[0] against each destination."""
        if not self.api_key:
            raise DistanceLookupError("Google Maps API key not configured", status_code=503)

        params = {
            "origins": "|".join(origins),
            "destinations": "|".join(destinations),
            "units": "metric",
            "mode": "driving",
            "key": self.api_key,
        }
        url = f"{self.base_url}/distancematrix/json"
        client = self._get_client()
        try:
            response = client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise DistanceLookupError(f"Distance Matrix request failed: {exc}", status_code=502) from exc
        finally:
            client.close()

        if response.status_code != 200:
            logger.error("Distance Matrix HTTP error %s: %s", response.status_code, response.text[:200])
            raise DistanceLookupError(
                f"Google Maps API error: {response.status_code}", status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise DistanceLookupError("Malformed Distance Matrix response", status_code=502) from exc
        if not isinstance(data, dict):
            raise DistanceLookupError("Malformed Distance Matrix response", status_code=502)

        if data.get("status") != "OK":
            raise DistanceLookupError(
                f"Google Maps API status: {data.get('status')}",
                status_code=400,
                details=data.get("error_message"),
            )

        try:
            rows = data.get("rows") or []
            elements = rows[0].get("elements") if rows else None
            if not elements:
                raise DistanceLookupError("No distance data available", status_code=404)

            results = []
            for element in elements:
                if element.get("status") != "OK":
                    raise DistanceLookupError(
                        f"Distance calculation failed: {element.get('status')}", status_code=400
                    )
                results.append(
                    DistanceResult(
                        distance=float(element["distance"]["value"]),
                        duration=float(element["duration"]["value"]),
                        distance_text=str(element["distance"]["text"]),
                        duration_text=str(element["duration"]["text"]),
                    )
                )
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            logger.error("Unexpected Distance Matrix payload: %r", data)
            raise DistanceLookupError("Malformed Distance Matrix response", status_code=502) from exc
        return results

    def _fetch(self, origin: Point, destination: Point) -> DistanceResult:
        return self.matrix([format_point(origin)], [format_point(destination)])[0]

    def lookup(self, origin: Point, destination: Point) -> DistanceResult:
        return self._cached_fetch(
            (round(origin[0], 6), round(origin[1], 6)),
            (round(destination[0], 6), round(destination[1], 6)),
        )

    def clear_cache(self) -> None:
        self._cached_fetch.cache_clear()


class DistanceProvider:
    """Road distance when the maps API answers, straight-line distance otherwise."""

    def __init__(self, client: DistanceMatrixClient | None = None) -> None:
        self.client = client or DistanceMatrixClient()

    def lookup(self, origin: Point, destination: Point) -> DistanceResult:
        try:
            return self.client.lookup(origin, destination)
        except DistanceLookupError as exc:
            logger.warning("Distance lookup failed (%s), falling back to haversine", exc)
            return estimate_from_straight_line(origin, destination)

    def distance_m(self, origin: Point, destination: Point) -> float:
        return self.lookup(origin, destination).distance


def plan_route_distance(
    start: Point,
    stops: Sequence[Point],
    distance_fn: Callable[[Point, Point], float] = haversine_m,
) -> float:
    """Total meters to visit every stop, always moving to the nearest unvisited one.

    The route starts at ``start`` and ends at the last stop; there is no
    return leg.
    """
    remaining = list(stops)
    current = start
    total = 0.0
    while remaining:
        legs = [distance_fn(current, stop) for stop in remaining]
        nearest = min(range(len(legs)), key=legs.__getitem__)
        total += legs[nearest]
        current = remaining.pop(nearest)
    return total
