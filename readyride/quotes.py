"""Quote and availability routes for the ReadyRide API.

This module wires the pure pricing and opening-hours helpers to their
inputs: pricing knobs come from the settings store, distances from the
Google Distance Matrix API (with a straight-line fallback) and opening
hours from restaurant records. No route here takes payment or creates an
order; they only answer "how much" and "can I order now".
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from .app_settings import ConfigProvider
from .availability import format_operating_hours, is_open, is_service_open
from .database import get_db
from .distance import DistanceLookupError, DistanceMatrixClient, DistanceProvider, plan_route_distance
from .models import Restaurant
from .quote_engine import (
    apply_promo_to_delivery_fee,
    compute_fee,
    compute_fee_by_distance,
    compute_route_delivery_fee,
    estimate_delivery_time,
    format_currency,
    is_within_max_distance,
)
from .schemas import (
    AppSettingsIn, AppSettingsOut, DistanceMatrixRequest, DistanceMatrixResponse, DistanceQuoteRequest,
    DistanceQuoteResponse, FoodQuoteRequest, ParcelQuoteRequest, ParcelQuoteResponse, PromoRequest,
    PromoResult, RestaurantCreate, RestaurantStatus, RouteFee, ServiceStatus,
)
from .settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["quotes"])

_matrix_client = DistanceMatrixClient()


def get_matrix_client() -> DistanceMatrixClient:
    return _matrix_client


def get_distance_provider(client: DistanceMatrixClient = Depends(get_matrix_client)) -> DistanceProvider:
    return DistanceProvider(client)


def get_now() -> datetime:
    """Local wall clock of the service area."""
    return datetime.now(ZoneInfo(settings.RR_TIMEZONE))


# --- settings ----------------------------------------------------------------

@router.get("/settings", response_model=AppSettingsOut)
def read_settings(db: Session = Depends(get_db)):
    row = ConfigProvider(db).record()
    if row is None:
        return AppSettingsOut()
    return row


@router.put("/settings", response_model=AppSettingsOut)
def replace_settings(payload: AppSettingsIn, db: Session = Depends(get_db)):
    return ConfigProvider(db).save(payload)


# --- quotes ------------------------------------------------------------------

@router.post("/quote/parcel", response_model=ParcelQuoteResponse)
def quote_parcel(
    payload: ParcelQuoteRequest,
    db: Session = Depends(get_db),
    distances: DistanceProvider = Depends(get_distance_provider),
    now: datetime = Depends(get_now),
) -> ParcelQuoteResponse:
    duration_minutes = payload.duration_minutes
    duration_text = payload.duration_text
    if payload.distance_km is not None:
        distance_km = payload.distance_km
    elif payload.pickup is not None and payload.dropoff is not None:
        found = distances.lookup(
            (payload.pickup.lat, payload.pickup.lng),
            (payload.dropoff.lat, payload.dropoff.lng),
        )
        distance_km = found.distance_km
        if duration_minutes is None:
            duration_minutes = found.duration_minutes
        duration_text = duration_text or found.duration_text
    else:
        raise HTTPException(status_code=422, detail="distance_km or pickup/dropoff is required")

    config = ConfigProvider(db)
    row = config.record()
    result = compute_fee(distance_km, payload.package_size, payload.time_tier, config.get())
    return ParcelQuoteResponse(
        **result.model_dump(),
        distance_km=distance_km,
        within_max_distance=is_within_max_distance(distance_km * 1000, row.max_distance if row else None),
        estimated_time=estimate_delivery_time(payload.time_tier, duration_minutes, duration_text, now),
        display_total=format_currency(result.total_amount, settings.RR_CURRENCY),
    )


@router.post("/quote/distance", response_model=DistanceQuoteResponse)
def quote_distance(payload: DistanceQuoteRequest, db: Session = Depends(get_db)) -> DistanceQuoteResponse:
    fee = compute_fee_by_distance(payload.distance_km, ConfigProvider(db).get())
    return DistanceQuoteResponse(
        distance_km=payload.distance_km,
        delivery_fee=fee,
        display_fee=format_currency(fee, settings.RR_CURRENCY),
    )


@router.post("/quote/food", response_model=RouteFee)
def quote_food(
    payload: FoodQuoteRequest,
    db: Session = Depends(get_db),
    distances: DistanceProvider = Depends(get_distance_provider),
) -> RouteFee:
    row = ConfigProvider(db).record()
    stops = [(r.lat, r.lng) for r in payload.restaurants]
    total_m = plan_route_distance((payload.customer.lat, payload.customer.lng), stops, distances.distance_m)
    return compute_route_delivery_fee(
        total_m,
        base_fare=row.base_fare if row else None,
        distance_rate=row.distance_rate if row else None,
        max_distance_m=row.max_distance if row else None,
        stops=len(stops),
    )


@router.post("/quote/promo", response_model=PromoResult)
def quote_promo(payload: PromoRequest) -> PromoResult:
    try:
        return apply_promo_to_delivery_fee(payload.delivery_fee, payload.discount, payload.min_price)
    except ValueError:
        raise HTTPException(status_code=422, detail="discount and min_price must be numeric")


# --- distance matrix proxy -----------------------------------------------------

@router.post("/distance-matrix", response_model=DistanceMatrixResponse)
def distance_matrix(
    payload: DistanceMatrixRequest,
    client: DistanceMatrixClient = Depends(get_matrix_client),
):
    if not payload.origins or not payload.destinations:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Invalid origins or destinations format"},
        )
    try:
        results = client.matrix(payload.origins, payload.destinations)
    except DistanceLookupError as exc:
        logger.warning("Distance Matrix lookup failed: %s", exc)
        content = {"success": False, "error": str(exc)}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    return DistanceMatrixResponse(
        results=[
            {
                "distance": r.distance,
                "duration": r.duration,
                "distance_text": r.distance_text,
                "duration_text": r.duration_text,
            }
            for r in results
        ]
    )


# --- availability ----------------------------------------------------------------

@router.post("/restaurants", response_model=RestaurantStatus, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    payload: RestaurantCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
) -> RestaurantStatus:
    restaurant = Restaurant(**payload.model_dump())
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return _restaurant_status(restaurant, now)


@router.get("/restaurants/{restaurant_id}/status", response_model=RestaurantStatus)
def restaurant_status(
    restaurant_id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
) -> RestaurantStatus:
    restaurant = db.get(Restaurant, restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return _restaurant_status(restaurant, now)


def _restaurant_status(restaurant: Restaurant, now: datetime) -> RestaurantStatus:
    return RestaurantStatus(
        id=restaurant.id,
        name=restaurant.name,
        is_open=is_open(restaurant.opens, restaurant.closes, now),
        hours=format_operating_hours(restaurant.opens or "", restaurant.closes or ""),
    )


@router.get("/service/status", response_model=ServiceStatus)
def service_status(db: Session = Depends(get_db), now: datetime = Depends(get_now)) -> ServiceStatus:
    row = ConfigProvider(db).record()
    opens = row.opens if row else None
    closes = row.closes if row else None
    hours = format_operating_hours(opens, closes) if opens and closes else None
    return ServiceStatus(is_open=is_service_open(opens, closes, now), hours=hours)
