"""Application configuration using Pydantic Settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ChromaDB Configuration
    chroma_db_dir: str = Field(
        default="./data/vector_db/product_catalog",
        description="ChromaDB persistent storage directory"
    )
    collection_name: str = Field(
        default="product_catalog",
        description="ChromaDB collection name"
    )
    embedding_model: str = Field(
        default="all-MiniLM-L6-v2",
        description="Sentence transformer model for embeddings"
    )

    # LLM Configuration
    groq_api_key: Optional[str] = Field(
        default=None,
        description="Groq API key; chat replies fall back to a canned message without it"
    )
    groq_model: str = Field(
        default="llama-3.1-8b-instant",
        description="Groq model used for chat replies"
    )
    sentiment_model: str = Field(
        default="llama-3.1-8b-instant",
        description="Groq model used for review sentiment scoring"
    )
    chat_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for chat replies"
    )

    # Prompt enrichment
    default_search_limit: int = Field(default=10, ge=1, le=100)
    default_review_limit: int = Field(default=5, ge=1, le=100)
    max_context_products: int = Field(
        default=3,
        description="Products quoted in price and info blocks"
    )
    review_snippet_chars: int = Field(default=200)

    # API Configuration
    api_title: str = Field(
        default="E-commerce Chat Assistant API",
        description="API title"
    )
    api_version: str = Field(
        default="1.0.0",
        description="API version"
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="CORS allowed origins"
    )

    # Logging
    log_level: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "allow"  # Allow extra fields from .env that aren't defined


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    return settings
