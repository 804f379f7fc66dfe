from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic import Field

DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Region power-quality file (re-read on every request)
    power_data_csv: str = Field(default=str(DATA_DIR / "power_data_regions_full.csv"))
    data_read_timeout_seconds: float = Field(default=5.0)

    # In-memory stores start with the demo alerts/outages/readings
    seed_demo_data: bool = Field(default=True)

    # Trend simulation; set to get reproducible series
    trend_seed: int | None = Field(default=None)

    # Pagination
    default_page_size: int = Field(default=50)
    max_page_size: int = Field(default=500)

    # API client
    api_base_url: str = Field(default="http://localhost:8000/api/v1")
    client_timeout_seconds: float = Field(default=15.0)

    log_level: str = Field(default="INFO")

    # CORS
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
