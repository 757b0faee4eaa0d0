"""
Resource Search Service Configuration
"""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database (PostgreSQL with pg_trgm + pgvector)
    database_url: Optional[str] = None
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_command_timeout: float = 10.0
    db_statement_timeout_ms: int = 8000

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536
    embedding_timeout: float = 30.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Search
    default_page_size: int = 20
    max_page_size: int = 100
    text_search_language: str = "english"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
