from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Clause Review Backend"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/v1"
    LOG_LEVEL: str = "INFO"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Clause locator
    HIGHLIGHT_AUTO_CLEAR_SECONDS: float = 8.0
    EXCERPT_MAX_CHARS: int = 100
    MIN_TITLE_VARIANT_LENGTH: int = 4
    MIN_NUMBER_VARIANT_LENGTH: int = 2

    # Perspective persistence
    PERSPECTIVE_STORAGE_KEY: str = "sam.contractAnalysis.perspective"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

settings = Settings()
