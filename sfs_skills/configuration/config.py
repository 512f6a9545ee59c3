"""Configuration management for SFS skills."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Skill discovery
    skills_dirs: str | list[str] = Field(default_factory=list, alias="SFS_SKILLS_DIRS")
    project_dir: str = Field(default=".", alias="SFS_SKILLS_PROJECT_DIR")
    include_builtin: bool = Field(default=True, alias="SFS_SKILLS_INCLUDE_BUILTIN")

    # Validation
    name_prefix: str = Field(default="sfs-", alias="SFS_SKILLS_NAME_PREFIX")
    strict: bool = Field(default=False, alias="SFS_SKILLS_STRICT")
    allow_overrides: bool = Field(default=True, alias="SFS_SKILLS_ALLOW_OVERRIDES")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="SFS_SKILLS_LOG_LEVEL"
    )

    # API Settings
    api_host: str = Field(default="127.0.0.1", alias="SFS_SKILLS_API_HOST")
    api_port: int = Field(default=8000, alias="SFS_SKILLS_API_PORT")

    @field_validator("skills_dirs", mode="before")
    @classmethod
    def parse_skills_dirs(cls, v):
        """Accept a comma separated string as well as a list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
