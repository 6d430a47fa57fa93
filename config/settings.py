"""
Configuration & Settings
Market Analysis Extractor
"""

from pydantic import BaseModel, Field
from typing import Optional
import os


class Settings(BaseModel):
    # App
    APP_NAME: str = "Market Analysis Extractor"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Generation service
    # GENERATION_BACKEND: "openai" calls the chat completions API,
    # "mock" returns a canned report (opt-in, demo / offline development).
    GENERATION_BACKEND: str = Field(
        default_factory=lambda: os.getenv("GENERATION_BACKEND", "openai")
    )
    OPENAI_API_KEY: Optional[str] = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY"))
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 2500
    REQUEST_TIMEOUT: int = 60
    MAX_RETRIES: int = 3
    RETRY_BACKOFF_SECONDS: float = 2.0

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000


settings = Settings()
