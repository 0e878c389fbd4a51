# secure_inquiry/config/settings.py

from functools import lru_cache
from typing import Dict, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "secure-inquiry-service"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Security ---
    # 256-bit AES key, hex encoded. No default: startup fails when it is missing.
    aes_secret_key: SecretStr

    # --- Audit log storage ---
    audit_backend: Literal["file", "redis", "database"] = "file"
    audit_log_path: str = "data/audit-log.json"
    audit_redis_key: str = "audit:entries"
    database_url: str = "sqlite+aiosqlite:///data/audit.db"

    # --- Circuit breaker ---
    circuit_state_backend: Literal["file", "redis", "memory"] = "file"
    circuit_state_path: str = "data/circuit-breaker-state.json"
    circuit_redis_key: str = "circuit_breaker:ai_service"
    circuit_failure_threshold: int = Field(3, ge=1)
    circuit_cooldown_seconds: float = Field(10.0, gt=0)
    external_call_timeout_seconds: Optional[float] = Field(None, gt=0)
    fallback_message: str = "The assistant is temporarily unavailable. Please try again shortly."

    # --- Redis ---
    redis_url: str = "redis://localhost:6379/0"

    # --- External AI service (simulated) ---
    ai_failure_rate: float = Field(0.25, ge=0.0, le=1.0)
    ai_latency_seconds: float = Field(2.0, ge=0.0)

    # --- Redaction ---
    # Extra {category: regex} matchers, applied after the built-in ones.
    redaction_extra_patterns: Dict[str, str] = Field(default_factory=dict)

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("aes_secret_key")
    @classmethod
    def aes_key_must_be_hex(cls, v: SecretStr) -> SecretStr:
        raw = v.get_secret_value().strip()
        try:
            key = bytes.fromhex(raw)
        except ValueError as e:
            raise ValueError("aes_secret_key must be a 64-character hex string") from e
        if len(key) != 32:
            raise ValueError("aes_secret_key must be a 64-character hex string")
        return SecretStr(raw)


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
