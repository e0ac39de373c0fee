"""
Configuration settings for the add-commitment function.

Uses Pydantic Settings to load environment variables for the DynamoDB table,
client overrides, logging, and request handling behavior. In Lambda these come
from the function's environment; locally a `.env` file is honored.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Store
    commitments_table: str = Field("CommitmentsTable", alias="COMMITMENTS_TABLE")
    aws_region: Optional[str] = Field(None, alias="AWS_REGION")
    dynamodb_endpoint_url: Optional[str] = Field(None, alias="DYNAMODB_ENDPOINT_URL")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(True, alias="JSON_LOGS")

    # Request handling
    lenient_body_parsing: bool = Field(False, alias="LENIENT_BODY_PARSING")
    include_error_details: bool = Field(True, alias="INCLUDE_ERROR_DETAILS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
