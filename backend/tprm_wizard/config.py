"""Backend configuration with secure defaults."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with secure defaults."""

    # Application
    app_name: str = "FAIR TPRM Vendor Profile"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/api/v1"

    # CORS - restrict in production
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    cors_allow_credentials: bool = True

    # Wizard sessions (in-memory only)
    session_ttl_hours: int = 24
    max_sessions: int = 500
    seed_initial_scenario: bool = True

    # Export artifacts
    workbook_filename_prefix: str = "FAIR_TPRM_Vendor_Profile"
    report_filename_prefix: str = "FAIR_TPRM_Report"
    vendor_name_placeholder: str = "Vendor"
    report_title: str = "FAIR-Based TPRM Vendor Report"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


settings = Settings()
