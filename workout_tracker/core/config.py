from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite+aiosqlite:///./dev.db"
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False
    # Run create_all on startup; switch off when migrations own the schema
    AUTO_CREATE_TABLES: bool = True
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    # Reject createWorkoutSession while another session has no end_time
    SINGLE_ACTIVE_SESSION: bool = False

settings = Settings()
