from sqlalchemy.orm import Session
from typing import Optional

from .models import AppSetting
from .schemas import AppSettingsIn, PricingConfiguration

# Settings store: one row in app_settings, created on first write.

class ConfigProvider:
    def __init__(self, db: Session) -> None:
        self.db = db

    def record(self) -> Optional[AppSetting]:
        return self.db.query(AppSetting).order_by(AppSetting.id).first()

    def get(self) -> PricingConfiguration:
        """Pricing knobs for the quote engine; an empty store yields engine defaults."""
        row = self.record()
        if row is None:
            return PricingConfiguration()
        return PricingConfiguration(base_fee=row.delivery_fee, distance_rate=row.distance_rate)

    def save(self, data: AppSettingsIn) -> AppSetting:
        row = self.record()
        if row is None:
            row = AppSetting()
            self.db.add(row)
        for field, value in data.model_dump().items():
            setattr(row, field, value)
        self.db.commit()
        self.db.refresh(row)
        return row
