from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings.
    """
    model_config = SettingsConfigDict(env_prefix="SLA_PENALTY_", env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "sla-penalty-engine"
    environment: str = "local"
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Data sources (built-in vendors / no telemetry when unset)
    vendor_config_path: Optional[str] = None
    telemetry_path: Optional[str] = None

    # Evaluation
    near_threshold_margin: float = 0.1
    strict_penalty_rules: bool = False

settings = Settings()
