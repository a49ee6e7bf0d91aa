from sqlalchemy import Column, Integer, String, DateTime, Float
from datetime import datetime

from .database import Base

class AppSetting(Base):
    """Single row holding the pricing and opening-hours knobs of the app."""
    __tablename__ = "app_settings"
    id = Column(Integer, primary_key=True, index=True)
    delivery_fee = Column(Float, nullable=True)
    distance_rate = Column(Float, nullable=True)
    base_fare = Column(Float, nullable=True)
    max_distance = Column(Float, nullable=True)  # meters
    opens = Column(String, nullable=True)
    closes = Column(String, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class Restaurant(Base):
    __tablename__ = "restaurants"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    lat = Column(Float, nullable=True)
    lon = Column(Float, nullable=True)
    opens = Column(String, nullable=True)
    closes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
