from pydantic import BaseModel
import os

class Settings(BaseModel):
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    RR_DATABASE_URL: str = os.getenv("RR_DATABASE_URL", "sqlite:///./readyride.sqlite3")
    RR_FRONTEND_ORIGIN: str = os.getenv("RR_FRONTEND_ORIGIN", "http://localhost:3000")
    RR_MAPS_API_KEY: str = os.getenv("RR_MAPS_API_KEY", "")
    RR_MAPS_BASE_URL: str = os.getenv("RR_MAPS_BASE_URL", "https://maps.googleapis.com/maps/api")
    RR_DISTANCE_TIMEOUT: float = float(os.getenv("RR_DISTANCE_TIMEOUT", "10"))
    RR_DISTANCE_CACHE_SIZE: int = int(os.getenv("RR_DISTANCE_CACHE_SIZE", "1024"))
    RR_LOG_LEVEL: str = os.getenv("RR_LOG_LEVEL", "INFO")
    RR_CURRENCY: str = os.getenv("RR_CURRENCY", "GHS")
    RR_TIMEZONE: str = os.getenv("RR_TIMEZONE", "Africa/Accra")

settings = Settings()
