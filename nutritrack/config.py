"""Configuration management for NutriTrack."""

from pydantic_settings import BaseSettings
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Document store
    store_backend: Literal["supabase", "memory"] = "memory"
    supabase_url: str = ""
    supabase_key: str = ""

    # AI Provider
    ai_provider: Literal["gemini", "groq", "ollama", "rule_based"] = "gemini"
    ai_timeout_seconds: float = 20.0

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Groq
    groq_api_key: str = ""
    groq_model: str = "llama-3.1-8b-instant"

    # Ollama
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # Google Fit
    google_fit_base_url: str = "https://www.googleapis.com/fitness/v1/users/me"

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
