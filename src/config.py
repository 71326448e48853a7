"""Configuration for the prompt designer."""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable application settings, loaded from the environment or .env."""

    # Storage
    db_path: str = Field(default="data/prompt_designer.db", description="SQLite database file")

    # Session tokens
    jwt_secret: str = Field(
        default="dev_secret_change_me",
        validation_alias=AliasChoices("PROMPT_DESIGNER_JWT_SECRET", "JWT_SECRET"),
        description="Secret used to sign session tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    token_ttl_days: int = Field(default=7, description="Session token validity in days")
    bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor for password hashes")

    # Prompt enhancer
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("PROMPT_DESIGNER_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="Enables the AI enhancer when set",
    )
    enhancer_model: str = Field(default="gpt-4o-mini", description="Chat model used for enhancement")
    enhancer_temperature: float = Field(default=0.2, description="Sampling temperature for enhancement")
    enhancer_timeout_seconds: float = Field(default=30.0, description="Upper bound on one enhancement call")

    # Logging
    log_level: str = Field(default="DEBUG", description="Root logging level")

    model_config = SettingsConfigDict(
        env_prefix="PROMPT_DESIGNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @property
    def enhancer_configured(self) -> bool:
        return bool(self.openai_api_key)
