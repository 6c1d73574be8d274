from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Dict, Any, Optional
import json


def parse_headers(v: Any) -> Dict[str, str]:
    """Parse extra request headers from a JSON object or "Name:value,Name:value" string"""
    if isinstance(v, dict):
        return {str(key): str(value) for key, value in v.items()}
    if isinstance(v, str):
        # Try JSON parsing first
        if v.strip().startswith('{'):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, dict):
                    return {str(key): str(value) for key, value in parsed.items()}
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated pairs
        headers = {}
        for item in v.split(','):
            if ':' in item:
                name, value = item.split(':', 1)
                if name.strip():
                    headers[name.strip()] = value.strip()
        return headers
    return {}


class Settings(BaseSettings):
    """Client settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "AgentChat"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # ==========================================
    # Backend API
    # ==========================================
    API_BASE_URL: str = "http://localhost:3001"
    HTTP_TIMEOUT: Optional[float] = None  # None disables client-side timeouts
    DEFAULT_HEADERS_STR: str = ""  # Extra headers sent with every request

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty means console only

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        return v.strip()

    @field_validator("HTTP_TIMEOUT", mode="before")
    @classmethod
    def empty_timeout_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def DEFAULT_HEADERS(self) -> Dict[str, str]:
        """Parse default headers from the raw environment string"""
        return parse_headers(self.DEFAULT_HEADERS_STR)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Create settings instance
settings = Settings()
