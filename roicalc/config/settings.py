from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    lookup_api_url: str = ""
    lookup_api_key: str = ""
    lookup_timeout_seconds: float = 30.0
    state_file: str = ""
    default_currency: str = "USD"
    default_horizon_years: int = 3
    cors_origins: list[str] = ["http://localhost:3000"]
    report_logo_url: str = ""

    class Config:
        env_file = ".env"
        env_prefix = "ROICALC_"
