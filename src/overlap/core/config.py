"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = SettingsConfigDict(env_prefix="OVERLAP_DYNAMO_")

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = SettingsConfigDict(env_prefix="OVERLAP_REDIS_")

    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    cache_ttl: int = 300  # published entries, seconds


class AuthConfig(BaseSettings):
    """Bearer token resolution for the static identity provider."""

    model_config = SettingsConfigDict(env_prefix="OVERLAP_AUTH_")

    static_tokens: dict[str, str] = {}  # token -> user id


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = SettingsConfigDict(env_prefix="OVERLAP_")

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"
    backend: Literal["memory", "dynamodb"] = "memory"

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    auth: AuthConfig = AuthConfig()
