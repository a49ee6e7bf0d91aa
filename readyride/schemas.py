from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# upper bound on any configured money amount or per-km rate
MAX_RATE = 1_000_000

# --- core pricing values ---

class PricingConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_fee: Optional[float] = Field(default=None, ge=0, le=MAX_RATE)
    distance_rate: Optional[float] = Field(default=None, ge=0, le=MAX_RATE)

class FeeBreakdown(BaseModel):
    base_fee: float
    distance_fee: float
    size_fee: float
    time_fee: float

class PricingResult(BaseModel):
    delivery_fee: float
    total_amount: float
    breakdown: FeeBreakdown

class PromoResult(BaseModel):
    discount_amount: float
    final_delivery_fee: float
    can_apply: bool

class RouteFee(BaseModel):
    total_distance: int  # meters
    delivery_fee: float
    exceeds_max_distance: bool
    max_distance: float

# --- settings store ---

class AppSettingsIn(BaseModel):
    delivery_fee: Optional[float] = Field(default=None, ge=0, le=MAX_RATE)
    distance_rate: Optional[float] = Field(default=None, ge=0, le=MAX_RATE)
    base_fare: Optional[float] = Field(default=None, ge=0, le=MAX_RATE)
    max_distance: Optional[float] = Field(default=None, ge=0)
    opens: Optional[str] = None
    closes: Optional[str] = None

class AppSettingsOut(AppSettingsIn):
    model_config = ConfigDict(from_attributes=True)

# --- quotes ---

class LatLng(BaseModel):
    lat: float
    lng: float

class ParcelQuoteRequest(BaseModel):
    distance_km: Optional[float] = None
    pickup: Optional[LatLng] = None
    dropoff: Optional[LatLng] = None
    package_size: str = "small"
    time_tier: str = "standard"
    duration_minutes: Optional[float] = None
    duration_text: str = ""

class ParcelQuoteResponse(PricingResult):
    distance_km: float
    within_max_distance: bool
    estimated_time: str
    display_total: str

class DistanceQuoteRequest(BaseModel):
    distance_km: float

class DistanceQuoteResponse(BaseModel):
    distance_km: float
    delivery_fee: float
    display_fee: str

class FoodQuoteRequest(BaseModel):
    customer: LatLng
    restaurants: list[LatLng] = Field(default_factory=list)

class PromoRequest(BaseModel):
    delivery_fee: float
    discount: str  # percent, as stored on the promo record
    min_price: str

# --- distance matrix proxy ---

class DistanceMatrixRequest(BaseModel):
    origins: Optional[list[str]] = None
    destinations: Optional[list[str]] = None

class DistanceMatrixElement(BaseModel):
    distance: float  # meters
    duration: float  # seconds
    distance_text: str
    duration_text: str

class DistanceMatrixResponse(BaseModel):
    success: bool = True
    results: list[DistanceMatrixElement]

# --- places ---

class RestaurantCreate(BaseModel):
    name: str
    address: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    opens: Optional[str] = None
    closes: Optional[str] = None

class RestaurantStatus(BaseModel):
    id: int
    name: str
    is_open: bool
    hours: str

class ServiceStatus(BaseModel):
    is_open: bool
    hours: Optional[str] = None
