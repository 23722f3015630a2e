from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "production"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3001
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "accessibility_analyzer"
    db_username: str = "analyzer"
    db_password: str = "secret"
    db_pool_max_size: int = 10
    db_apply_schema: bool = True

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = 60
    auth_header_name: str = "x-auth-token"
    username_min_length: int = 3
    password_min_length: int = 6

    page_driver: str = "playwright"
    browser_engine: str = "chromium"
    browser_headless: bool = True
    navigation_timeout_ms: int = 30000
    dom_ready_timeout_ms: int = 15000
    max_concurrent_analyses: int = 4
    analysis_queue_timeout_seconds: int = 30

    axe_script_path: str = "var/axe.min.js"
    axe_script_url: str = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.10.2/axe.min.js"
    axe_download_timeout_seconds: int = 30
    audit_timeout_ms: int = 60000

    history_limit: int = 50

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in ("dev", "development", "local")
