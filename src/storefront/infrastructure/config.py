from decimal import Decimal
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path("data")
    currency: str = "USD"
    track_inventory_levels: bool = True  # check and deduct stock during checkout
    shippable_countries: list[str] = ["US"]  # ISO codes; JSON list when set via env
    shipping_method_name: str = "UPS Ground"
    shipping_cost: Decimal = Decimal("5.00")
    log_level: str = "INFO"

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()
