# --- readyride/quote_engine.py ---------------------------------------------
# Pricing & ETA logic; no external APIs.

import enum
import logging
import math
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .schemas import FeeBreakdown, PricingConfiguration, PricingResult, PromoResult, RouteFee

logger = logging.getLogger(__name__)

class PackageSize(str, enum.Enum):
    small = "small"
    medium = "medium"
    large = "large"
    extra_large = "extra_large"

class TimeTier(str, enum.Enum):
    express = "express"      # same day
    standard = "standard"    # next day
    economy = "economy"      # 2-3 days

SIZE_MULT = {"small":1.0,"medium":1.5,"large":2.0,"extra_large":2.5}
TIME_MULT = {"express":1.5,"standard":1.0,"economy":0.8}
DEFAULT_MULT = 1.0

DEFAULT_BASE_FEE = 5.0
DEFAULT_DISTANCE_RATE = 2.0
INCLUDED_KM = 1.0
# length of the equator; no delivery is priced beyond it
MAX_PRICED_KM = 40075.0

# food orders are priced over the whole pickup route, in meters
ROUTE_INCLUDED_M = 3000
ROUTE_BASE_FARE = 15.0
ROUTE_EMPTY_FARE = 10.0
ROUTE_DISTANCE_RATE = 3.5
ROUTE_MAX_DISTANCE_M = 50000
PARCEL_MAX_DISTANCE_M = 30000

NO_ESTIMATE = "Estimated delivery time not available"

def _round_half_up(n, step="0.01"):
    return Decimal(str(n)).quantize(Decimal(step), rounding=ROUND_HALF_UP)

def _round2(n):
    """Round half away from zero to 2dp."""
    if not math.isfinite(n):
        logger.warning("non-finite fee %r left unrounded", n)
        return n
    return float(_round_half_up(n))

def _key(v):
    return v.value if isinstance(v, enum.Enum) else v

def _multiplier(table, key):
    try:
        return table[_key(key)]
    except (KeyError, TypeError):
        logger.debug("unknown pricing category %r, no surcharge", key)
        return DEFAULT_MULT

def _rates(config: Optional[PricingConfiguration]):
    base = config.base_fee if config is not None and config.base_fee is not None else DEFAULT_BASE_FEE
    rate = config.distance_rate if config is not None and config.distance_rate is not None else DEFAULT_DISTANCE_RATE
    return base, rate

def _distance_fee(km, rate):
    try:
        km = min(max(0.0, float(km)), MAX_PRICED_KM)
    except (TypeError, ValueError):
        logger.debug("unusable distance %r, pricing as 0 km", km)
        km = 0.0
    return max(0.0, (km - INCLUDED_KM) * rate)

def compute_fee(distance_km, package_size, time_tier, config: Optional[PricingConfiguration] = None) -> PricingResult:
    """Delivery fee breakdown for a parcel.

    The first km is part of ``base_fee``. Size and tier surcharges are
    expressed relative to ``base_fee``; economy yields a negative
    ``time_fee``. Only the summed fee is rounded. Invalid inputs fall back
    to defaults instead of raising.
    """
    base, rate = _rates(config)
    dist_fee = _distance_fee(distance_km, rate)
    size_fee = base * (_multiplier(SIZE_MULT, package_size) - 1)
    time_fee = base * (_multiplier(TIME_MULT, time_tier) - 1)

    fee = _round2(base + dist_fee + size_fee + time_fee)
    return PricingResult(
        delivery_fee=fee,
        total_amount=fee,
        breakdown=FeeBreakdown(base_fee=base, distance_fee=dist_fee, size_fee=size_fee, time_fee=time_fee),
    )

def compute_fee_by_distance(distance_km, config: Optional[PricingConfiguration] = None) -> float:
    base, rate = _rates(config)
    return _round2(base + _distance_fee(distance_km, rate))

def _clock(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"

def estimate_delivery_time(time_tier, travel_duration_minutes, travel_duration_text, now: datetime) -> str:
    """Human readable ETA for a tier. Display text only, not a committed SLA."""
    tier = _key(time_tier)
    if tier == TimeTier.express.value:
        hours = max(2, math.ceil((travel_duration_minutes or 0) / 60) + 2)
        return f"Today by {_clock(now + timedelta(hours=hours))}"
    if tier == TimeTier.standard.value:
        tomorrow = (now + timedelta(days=1)).replace(hour=14, minute=0, second=0, microsecond=0)
        return f"Tomorrow by {_clock(tomorrow)}"
    if tier == TimeTier.economy.value:
        day = now + timedelta(days=2)
        return f"{day:%A}, {day:%b} {day.day}"
    return travel_duration_text or NO_ESTIMATE

def format_currency(amount, currency="GHS") -> str:
    return f"{currency} {amount:.2f}"

def apply_promo_to_delivery_fee(delivery_fee, discount, min_price) -> PromoResult:
    """Take ``discount`` percent off the delivery fee when it reaches ``min_price``."""
    min_price = float(min_price)
    percent = float(discount)
    if delivery_fee < min_price:
        return PromoResult(discount_amount=0.0, final_delivery_fee=delivery_fee, can_apply=False)

    amount = delivery_fee * percent / 100
    final = max(0.0, delivery_fee - amount)
    return PromoResult(discount_amount=_round2(amount), final_delivery_fee=_round2(final), can_apply=True)

def compute_route_delivery_fee(total_distance_m, base_fare=None, distance_rate=None,
                               max_distance_m=None, stops=1) -> RouteFee:
    max_m = max_distance_m if max_distance_m is not None else ROUTE_MAX_DISTANCE_M
    if stops <= 0:
        fare = base_fare if base_fare is not None else ROUTE_EMPTY_FARE
        return RouteFee(total_distance=0, delivery_fee=fare, exceeds_max_distance=False, max_distance=max_m)

    fare = base_fare if base_fare is not None else ROUTE_BASE_FARE
    rate = distance_rate if distance_rate is not None else ROUTE_DISTANCE_RATE
    fee = fare
    if total_distance_m > ROUTE_INCLUDED_M:
        fee = fare + (total_distance_m - ROUTE_INCLUDED_M) / 1000 * rate

    return RouteFee(
        total_distance=int(_round_half_up(total_distance_m, "1")),
        delivery_fee=_round2(fee),
        exceeds_max_distance=total_distance_m > max_m,
        max_distance=max_m,
    )

def is_within_max_distance(distance_m, max_distance_m=None) -> bool:
    limit = max_distance_m if max_distance_m is not None else PARCEL_MAX_DISTANCE_M
    return distance_m <= limit
