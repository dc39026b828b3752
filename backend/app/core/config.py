"""
Application configuration
"""

from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Basics
    APP_NAME: str = "Planning Poker"
    VERSION: str = "1.0.0"
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Storage (in-memory SQLite, lives as long as the process)
    DATABASE_URL: str = "sqlite://"

    # Clients poll room state at this interval
    POLL_INTERVAL_MS: int = 2000

    # Jira
    JIRA_BASE_URL: Optional[str] = None
    JIRA_EMAIL: Optional[str] = None
    JIRA_API_TOKEN: Optional[str] = None
    JIRA_PROJECT_KEY: Optional[str] = None
    JIRA_STORY_POINTS_FIELD: str = "customfield_10016"
    JIRA_TIMEOUT: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = True

# Global settings instance
settings = Settings()
