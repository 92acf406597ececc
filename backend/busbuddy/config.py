from pydantic import computed_field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    postgres_user: str = "busbuddy"
    postgres_password: str = "busbuddy_secret"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "busbuddy"
    database_url_override: str = ""  # any SQLAlchemy URL, e.g. sqlite:///./busbuddy.db
    backend_port: int = 8001
    timezone: str = "Asia/Kolkata"
    log_level: str = "INFO"
    seed_demo_data: bool = True

    simulator_enabled: bool = True
    simulator_interval_ms: int = 3000
    simulator_report_every: int = 10
    simulator_tick_timeout: float = 2.5  # seconds; remaining buses wait for the next tick
    simulator_snap_to_route: bool = False

    default_alert_distance_km: float = 1.0
    compliance_expiring_days: int = 15

    @computed_field
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    class Config:
        env_file = ("../.env", ".env")


settings = Settings()
